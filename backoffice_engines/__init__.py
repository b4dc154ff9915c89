"""
Back-office Engines -- pure calculation functions.

Engines take explicit inputs and return values.  They perform no I/O,
read no clock, and keep no state between calls.

Payroll aggregation:
    aggregate_payroll, filter_summaries, compute_totals
"""

from backoffice_engines.payroll_aggregation import (
    aggregate_employee,
    aggregate_payroll,
    build_variable_elements,
    compute_gross_salary,
    compute_totals,
    filter_summaries,
    shift_duration_hours,
    split_worked_hours,
    sunday_origin_to_weekday_index,
    weekday_index,
)

__all__ = [
    "aggregate_employee",
    "aggregate_payroll",
    "build_variable_elements",
    "compute_gross_salary",
    "compute_totals",
    "filter_summaries",
    "shift_duration_hours",
    "split_worked_hours",
    "sunday_origin_to_weekday_index",
    "weekday_index",
]
