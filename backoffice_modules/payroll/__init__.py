"""
Payroll Module (``backoffice_modules.payroll``).

Responsibility
--------------
Monthly payroll preparation for a restaurant: turns the roster and the
recurring weekly schedule into per-employee hours breakdowns, gross salary
estimates and variable pay elements, ready to hand to a payroll provider.

Architecture position
---------------------
**Modules layer** -- DTOs, policy schema, ORM, data source, access checks,
display formatting, and the ``service.PayrollPreparationService`` facade.
All arithmetic is delegated to ``backoffice_engines.payroll_aggregation``.

Failure modes
-------------
* ``CapabilityDeniedError`` -- actor's role may not prepare payroll.
* ``MalformedShiftError`` -- a shift is neither worked nor a status shift.
* ``RestaurantNotFoundError`` -- unknown restaurant ID.
"""

from backoffice_modules.payroll.access import Actor
from backoffice_modules.payroll.config import PayrollPolicy
from backoffice_modules.payroll.data_source import PayrollDataSource, SqlPayrollDataSource
from backoffice_modules.payroll.models import (
    ContractType,
    Employee,
    PayrollMonth,
    PayrollSummary,
    PayrollTotals,
    Shift,
    ShiftStatus,
    VariableElement,
    VariableElementType,
)

__all__ = [
    "Actor",
    "ContractType",
    "Employee",
    "PayrollDataSource",
    "PayrollMonth",
    "PayrollPolicy",
    "PayrollSummary",
    "PayrollTotals",
    "Shift",
    "ShiftStatus",
    "SqlPayrollDataSource",
    "VariableElement",
    "VariableElementType",
]
