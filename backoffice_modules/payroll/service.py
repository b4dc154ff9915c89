"""
Payroll Preparation Service (``backoffice_modules.payroll.service``).

Responsibility
--------------
Entry point of the monthly payroll preparation screen: checks the actor's
capability, pulls roster and weekly schedule from a ``PayrollDataSource``,
delegates all arithmetic to ``backoffice_engines.payroll_aggregation``, and
returns the summaries together with the filtered view and its totals.

Architecture position
---------------------
**Modules layer** -- thin glue.  Composes the access check, the data source
and the pure engine.  Holds no state between calls: every call rebuilds
the summaries from freshly loaded data.

Failure modes
-------------
* Role lacks the capability  -> ``CapabilityDeniedError`` (nothing loaded).
* Unknown restaurant  -> ``RestaurantNotFoundError`` from the data source.
* Malformed stored shift  -> ``MalformedShiftError`` from the data source.
* Unsupported locale  -> ``ValueError`` from the engine.

Usage::

    service = PayrollPreparationService(SqlPayrollDataSource(session))
    preparation = service.prepare(
        Actor(user_id, "manager"), restaurant_id, PayrollMonth.parse("2026-02"),
        search="dupont", contract_type="CDI",
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from backoffice_engines.payroll_aggregation import (
    ALL_CONTRACT_TYPES,
    aggregate_payroll,
    compute_totals,
    filter_summaries,
)
from backoffice_kernel.domain.clock import Clock, SystemClock
from backoffice_kernel.exceptions import CapabilityDeniedError
from backoffice_kernel.logging_config import LogContext, get_logger
from backoffice_modules.payroll.access import (
    PAYROLL_PREPARE,
    PAYROLL_VIEW_OWN,
    Actor,
    check_capability,
    require_capability,
)
from backoffice_modules.payroll.config import PayrollPolicy
from backoffice_modules.payroll.data_source import PayrollDataSource
from backoffice_modules.payroll.models import (
    ContractType,
    PayrollMonth,
    PayrollSummary,
    PayrollTotals,
)

logger = get_logger("modules.payroll.service")


@dataclass(frozen=True)
class PayrollPreparation:
    """Result of one preparation run."""
    month: PayrollMonth
    summaries: tuple[PayrollSummary, ...]
    visible: tuple[PayrollSummary, ...]
    totals: PayrollTotals


class PayrollPreparationService:
    """
    Builds monthly payroll lines for a restaurant.

    Guarantees
    ----------
    * Authorization happens before any data is read.
    * Summaries come back in roster order; ``visible`` preserves that order.
    * Totals are computed over ``visible`` only.
    * Clock is injectable; it is only used to default the month.
    """

    def __init__(
        self,
        data_source: PayrollDataSource,
        policy: PayrollPolicy | None = None,
        clock: Clock | None = None,
    ):
        self._data_source = data_source
        self._policy = policy or PayrollPolicy.with_defaults()
        self._clock = clock or SystemClock()

    @property
    def policy(self) -> PayrollPolicy:
        return self._policy

    def current_month(self) -> PayrollMonth:
        return PayrollMonth.from_date(self._clock.today())

    def prepare(
        self,
        actor: Actor,
        restaurant_id: UUID,
        month: PayrollMonth | None = None,
        *,
        search: str = "",
        contract_type: ContractType | str = ALL_CONTRACT_TYPES,
        locale: str = "en",
    ) -> PayrollPreparation:
        """Compute every employee's payroll line, then filter and total them."""
        month = month or self.current_month()
        with LogContext.bind(
            correlation_id=str(uuid4()),
            actor_id=str(actor.user_id),
            restaurant_id=str(restaurant_id),
            payroll_month=month.label,
        ):
            require_capability(actor, PAYROLL_PREPARE)
            logger.info("payroll_preparation_started", extra={
                "search": search,
                "contract_type": getattr(contract_type, "value", contract_type),
                "locale": locale,
            })

            summaries = self._summaries(restaurant_id, month, locale)
            visible = filter_summaries(summaries, search, contract_type)
            totals = compute_totals(visible)

            logger.info("payroll_preparation_completed", extra={
                "employee_count": len(summaries),
                "visible_count": len(visible),
                "total_hours": str(totals.total_hours),
                "gross_salary": str(totals.gross_salary),
            })
            return PayrollPreparation(
                month=month,
                summaries=tuple(summaries),
                visible=tuple(visible),
                totals=totals,
            )

    def summary_for(
        self,
        actor: Actor,
        restaurant_id: UUID,
        employee_id: UUID,
        month: PayrollMonth | None = None,
        locale: str = "en",
    ) -> PayrollSummary | None:
        """One employee's payroll line, or None if not on the roster.

        Managers and admins may read any line; employees only their own.
        """
        month = month or self.current_month()
        with LogContext.bind(
            actor_id=str(actor.user_id),
            restaurant_id=str(restaurant_id),
            payroll_month=month.label,
        ):
            allowed, _ = check_capability(actor.role, PAYROLL_PREPARE)
            if not allowed:
                require_capability(actor, PAYROLL_VIEW_OWN)
                if actor.user_id != employee_id:
                    logger.warning("payroll_summary_foreign_read_denied", extra={
                        "employee_id": str(employee_id),
                    })
                    raise CapabilityDeniedError(
                        str(actor.user_id), actor.role, PAYROLL_VIEW_OWN,
                        "employees may only read their own payroll line",
                    )

            for summary in self._summaries(restaurant_id, month, locale):
                if summary.employee_id == employee_id:
                    return summary
            logger.info("payroll_summary_not_found", extra={
                "employee_id": str(employee_id),
            })
            return None

    def _summaries(
        self,
        restaurant_id: UUID,
        month: PayrollMonth,
        locale: str,
    ) -> list[PayrollSummary]:
        employees = self._data_source.list_employees(restaurant_id)
        shifts = self._data_source.list_shifts(restaurant_id)
        logger.debug("payroll_aggregation_started", extra={
            "employee_count": len(employees),
            "shift_count": len(shifts),
        })
        summaries = aggregate_payroll(month, employees, shifts, self._policy, locale)
        for summary in summaries:
            logger.debug("payroll_summary_computed", extra={
                "employee_id": str(summary.employee_id),
                "regular_hours": str(summary.regular_hours),
                "overtime_hours": str(summary.overtime_hours),
                "holiday_hours": str(summary.holiday_hours),
                "absence_hours": str(summary.absence_hours),
                "gross_salary": str(summary.gross_salary),
            })
        return summaries
