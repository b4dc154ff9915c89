"""
Tests for PayrollPreparationService.

Uses an in-memory data source and a DeterministicClock; one test runs the
service over the SQL data source to check the full stack.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from backoffice_kernel.domain.clock import DeterministicClock
from backoffice_kernel.exceptions import CapabilityDeniedError
from backoffice_kernel.logging_config import LogContext
from backoffice_modules.payroll.access import Actor
from backoffice_modules.payroll.config import PayrollPolicy
from backoffice_modules.payroll.data_source import SqlPayrollDataSource
from backoffice_modules.payroll.models import (
    ContractType,
    Employee,
    PayrollMonth,
    Shift,
    ShiftStatus,
)
from backoffice_modules.payroll.orm import EmployeeModel, RestaurantModel, ShiftModel
from backoffice_modules.payroll.service import PayrollPreparationService

FEB_2026 = PayrollMonth(2026, 2)
RESTAURANT_ID = uuid4()


class InMemoryDataSource:
    """Roster and schedule held in lists; records every call."""

    def __init__(self, employees, shifts):
        self.employees = list(employees)
        self.shifts = list(shifts)
        self.calls = []

    def list_employees(self, restaurant_id):
        self.calls.append(("list_employees", restaurant_id))
        return list(self.employees)

    def list_shifts(self, restaurant_id):
        self.calls.append(("list_shifts", restaurant_id))
        return list(self.shifts)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def roster():
    return [
        Employee(uuid4(), "Alice", "Durand", ContractType.CDI, Decimal("12")),
        Employee(uuid4(), "Bruno", "Petit", ContractType.CDD, Decimal("11")),
        Employee(uuid4(), "Chloé", "Roux", ContractType.CDI, None),
        Employee(uuid4(), "David", "Blanc", ContractType.EXTRA, Decimal("13")),
    ]


@pytest.fixture
def schedule(roster):
    alice, bruno, chloe, david = roster
    return [
        Shift(uuid4(), alice.id, 0, "09:00", "18:00"),
        Shift(uuid4(), bruno.id, 2, status=ShiftStatus.PUBLIC_HOLIDAY),
        Shift(uuid4(), chloe.id, 4, status=ShiftStatus.PAID_LEAVE),
        Shift(uuid4(), david.id, 5, "19:00", "23:30"),
        Shift(uuid4(), david.id, 6, status=ShiftStatus.SICK_LEAVE),
    ]


@pytest.fixture
def source(roster, schedule):
    return InMemoryDataSource(roster, schedule)


@pytest.fixture
def clock():
    return DeterministicClock(datetime(2026, 2, 14, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(source, clock):
    return PayrollPreparationService(source, clock=clock)


@pytest.fixture
def manager():
    return Actor(uuid4(), "manager")


# ---------------------------------------------------------------------------
# prepare
# ---------------------------------------------------------------------------


class TestPrepare:

    def test_one_summary_per_employee(self, service, manager, roster):
        result = service.prepare(manager, RESTAURANT_ID, FEB_2026)
        assert [s.employee_id for s in result.summaries] == [e.id for e in roster]
        assert result.visible == result.summaries
        assert result.month == FEB_2026

    def test_hours_breakdown(self, service, manager):
        alice, bruno, chloe, david = service.prepare(manager, RESTAURANT_ID, FEB_2026).summaries

        assert (alice.regular_hours, alice.overtime_hours) == (Decimal("32"), Decimal("4"))
        assert alice.gross_salary == Decimal("444")
        assert bruno.holiday_hours == Decimal("28")
        assert bruno.gross_salary == Decimal("28") * Decimal("11") * Decimal("2.0")
        assert chloe.regular_hours == Decimal("28")
        assert chloe.hourly_rate == Decimal("12")
        assert david.regular_hours == Decimal("18")
        assert david.absence_hours == Decimal("28")

    def test_default_month_from_clock(self, service, manager):
        assert service.prepare(manager, RESTAURANT_ID).month == PayrollMonth(2026, 2)

    def test_filter_and_totals(self, service, manager):
        result = service.prepare(manager, RESTAURANT_ID, FEB_2026, contract_type="CDI")
        assert [s.employee_name for s in result.visible] == ["Alice Durand", "Chloé Roux"]
        assert len(result.summaries) == 4
        assert result.totals.employee_count == 2
        assert result.totals.regular_hours == Decimal("60")
        assert result.totals.gross_salary == Decimal("444") + Decimal("336")

    def test_search(self, service, manager):
        result = service.prepare(manager, RESTAURANT_ID, FEB_2026, search="blanc")
        assert [s.employee_name for s in result.visible] == ["David Blanc"]

    def test_french_descriptions(self, service, manager):
        result = service.prepare(manager, RESTAURANT_ID, FEB_2026, locale="fr")
        assert result.summaries[0].variable_elements[-1].description == "Indemnité de transport"

    def test_custom_policy(self, source, clock, manager):
        policy = PayrollPolicy(transport_allowance=Decimal("50"))
        service = PayrollPreparationService(source, policy, clock)
        result = service.prepare(manager, RESTAURANT_ID, FEB_2026)
        assert service.policy is policy
        assert result.summaries[0].variable_elements[-1].amount == Decimal("50")

    def test_employee_denied_before_loading(self, service, source):
        with pytest.raises(CapabilityDeniedError):
            service.prepare(Actor(uuid4(), "employee"), RESTAURANT_ID, FEB_2026)
        assert source.calls == []

    def test_recomputed_every_call(self, service, source, manager, roster):
        first = service.prepare(manager, RESTAURANT_ID, FEB_2026)
        source.shifts.append(Shift(uuid4(), roster[0].id, 1, "09:00", "12:00"))
        second = service.prepare(manager, RESTAURANT_ID, FEB_2026)
        assert second.summaries[0].regular_hours == first.summaries[0].regular_hours + 12

    def test_logging(self, service, manager, captured_logs):
        service.prepare(manager, RESTAURANT_ID, FEB_2026)
        logs = captured_logs()
        messages = [r["message"] for r in logs]
        assert "payroll_preparation_started" in messages
        assert messages.count("payroll_summary_computed") == 4

        [completed] = [r for r in logs if r["message"] == "payroll_preparation_completed"]
        assert completed["restaurant_id"] == str(RESTAURANT_ID)
        assert completed["payroll_month"] == "2026-02"
        assert completed["actor_id"] == str(manager.user_id)
        assert completed["visible_count"] == 4
        assert "correlation_id" in completed

    def test_context_restored(self, service, manager):
        service.prepare(manager, RESTAURANT_ID, FEB_2026)
        assert LogContext.get_all() == {}


# ---------------------------------------------------------------------------
# summary_for
# ---------------------------------------------------------------------------


class TestSummaryFor:

    def test_manager_reads_any_line(self, service, manager, roster):
        summary = service.summary_for(manager, RESTAURANT_ID, roster[1].id, FEB_2026)
        assert summary.employee_name == "Bruno Petit"

    def test_employee_reads_own_line(self, service, roster):
        alice = roster[0]
        summary = service.summary_for(Actor(alice.id, "employee"), RESTAURANT_ID, alice.id, FEB_2026)
        assert summary.gross_salary == Decimal("444")

    def test_employee_denied_other_line(self, service, roster, captured_logs):
        with pytest.raises(CapabilityDeniedError):
            service.summary_for(
                Actor(roster[0].id, "employee"), RESTAURANT_ID, roster[1].id, FEB_2026,
            )
        assert any(
            r["message"] == "payroll_summary_foreign_read_denied" for r in captured_logs()
        )

    def test_unknown_employee(self, service, manager):
        assert service.summary_for(manager, RESTAURANT_ID, uuid4(), FEB_2026) is None


# ---------------------------------------------------------------------------
# Full stack over SQL
# ---------------------------------------------------------------------------


class TestSqlBackedPreparation:

    def test_scenario(self, session, test_actor_id, manager):
        restaurant = RestaurantModel(name="Le Comptoir", created_by_id=test_actor_id)
        session.add(restaurant)
        session.flush()
        emp = Employee(uuid4(), "Jeanne", "Moreau", ContractType.CDI, Decimal("12"), restaurant.id)
        session.add(EmployeeModel.from_dto(emp, test_actor_id))
        session.flush()
        session.add(ShiftModel.from_dto(
            Shift(uuid4(), emp.id, 0, "09:00", "18:00"), restaurant.id, test_actor_id,
        ))
        session.flush()

        service = PayrollPreparationService(SqlPayrollDataSource(session))
        result = service.prepare(manager, restaurant.id, FEB_2026)

        [summary] = result.summaries
        assert summary.employee_id == emp.id
        assert summary.regular_hours == Decimal("32")
        assert summary.overtime_hours == Decimal("4")
        assert summary.gross_salary == Decimal("444")
