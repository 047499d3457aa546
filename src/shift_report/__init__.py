"""Two-group robust comparison report.

This package turns the estimators in ``robust_stats`` into a rendered report:
styling constants, Matplotlib panels, the 2x2 composite figure, CSV tables,
the Markdown narrative and the ``shift_report`` command.
"""
