"""Tests for payroll value objects: Employee, Shift, PayrollMonth, summaries."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from backoffice_kernel.exceptions import (
    InvalidPayrollMonthError,
    InvalidShiftDayError,
    InvalidShiftTimeError,
    MalformedShiftError,
)
from backoffice_modules.payroll.models import (
    ContractType,
    Employee,
    PayrollMonth,
    PayrollSummary,
    Shift,
    ShiftStatus,
    VariableElement,
    VariableElementType,
    parse_wall_clock,
)


# ---------------------------------------------------------------------------
# Wall-clock parsing
# ---------------------------------------------------------------------------


class TestParseWallClock:

    @pytest.mark.parametrize("value,expected", [
        ("09:00", (9, 0)),
        ("9:05", (9, 5)),
        ("23:59", (23, 59)),
        ("00:00:00", (0, 0)),
        (" 18:30 ", (18, 30)),
    ])
    def test_valid(self, value, expected):
        assert parse_wall_clock(value) == expected

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "", "12h30", None, 900])
    def test_invalid(self, value):
        with pytest.raises(InvalidShiftTimeError):
            parse_wall_clock(value)


# ---------------------------------------------------------------------------
# Employee
# ---------------------------------------------------------------------------


class TestEmployee:

    def test_display_name(self):
        emp = Employee(uuid4(), "Jeanne", "Moreau", ContractType.CDI)
        assert emp.display_name == "Jeanne Moreau"

    def test_rate_optional(self):
        emp = Employee(uuid4(), "Jeanne", "Moreau", ContractType.EXTRA)
        assert emp.hourly_rate is None
        assert emp.is_active

    def test_negative_rate_rejected(self, captured_logs):
        with pytest.raises(ValueError, match="negative"):
            Employee(uuid4(), "Jeanne", "Moreau", ContractType.CDD, Decimal("-1"))
        assert any(r["message"] == "employee_negative_hourly_rate" for r in captured_logs())

    def test_frozen(self):
        emp = Employee(uuid4(), "Jeanne", "Moreau", ContractType.CDI)
        with pytest.raises(AttributeError):
            emp.first_name = "Other"

    def test_contract_values(self):
        assert [c.value for c in ContractType] == ["CDI", "CDD", "Extra"]


# ---------------------------------------------------------------------------
# Shift
# ---------------------------------------------------------------------------


class TestShift:

    def test_worked_shift(self):
        shift = Shift(uuid4(), uuid4(), 0, "09:00", "17:00")
        assert shift.is_worked
        assert not shift.is_absence

    def test_status_shift_needs_no_times(self):
        shift = Shift(uuid4(), uuid4(), 3, status=ShiftStatus.PAID_LEAVE)
        assert shift.is_absence
        assert not shift.is_worked

    def test_status_shift_ignores_bad_times(self):
        shift = Shift(uuid4(), uuid4(), 3, start="garbage", status=ShiftStatus.SICK_LEAVE)
        assert shift.is_absence

    @pytest.mark.parametrize("start,end", [(None, "17:00"), ("09:00", None), (None, None), ("", "")])
    def test_incomplete_worked_shift_rejected(self, start, end):
        with pytest.raises(MalformedShiftError) as exc_info:
            Shift(uuid4(), uuid4(), 0, start, end)
        assert exc_info.value.code == "MALFORMED_SHIFT"

    def test_empty_status_is_worked(self):
        with pytest.raises(MalformedShiftError):
            Shift(uuid4(), uuid4(), 0, status="")

    def test_bad_time_rejected(self):
        with pytest.raises(InvalidShiftTimeError):
            Shift(uuid4(), uuid4(), 0, "09:00", "25:00")

    @pytest.mark.parametrize("day", [-1, 7, True])
    def test_day_out_of_range(self, day):
        with pytest.raises(InvalidShiftDayError):
            Shift(uuid4(), uuid4(), day, "09:00", "17:00")


# ---------------------------------------------------------------------------
# PayrollMonth
# ---------------------------------------------------------------------------


class TestPayrollMonth:

    def test_parse(self):
        assert PayrollMonth.parse("2026-02") == PayrollMonth(2026, 2)

    @pytest.mark.parametrize("value", ["2026-13", "2026-00", "2026-2", "Feb 2026", "", "0000-01"])
    def test_parse_invalid(self, value):
        with pytest.raises(InvalidPayrollMonthError):
            PayrollMonth.parse(value)

    def test_constructor_validates(self):
        with pytest.raises(InvalidPayrollMonthError):
            PayrollMonth(2026, 13)

    def test_from_date(self):
        assert PayrollMonth.from_date(date(2026, 10, 17)) == PayrollMonth(2026, 10)

    def test_label_and_str(self):
        month = PayrollMonth(2026, 3)
        assert month.label == "2026-03"
        assert str(month) == "2026-03"

    def test_bounds(self):
        month = PayrollMonth(2024, 2)
        assert month.first_day == date(2024, 2, 1)
        assert month.last_day == date(2024, 2, 29)

    def test_days_inclusive(self):
        days = list(PayrollMonth(2026, 4).days())
        assert len(days) == 30
        assert days[0] == date(2026, 4, 1)
        assert days[-1] == date(2026, 4, 30)

    def test_ordering(self):
        assert PayrollMonth(2025, 12) < PayrollMonth(2026, 1)


# ---------------------------------------------------------------------------
# PayrollSummary
# ---------------------------------------------------------------------------


class TestPayrollSummary:

    def test_variable_total(self):
        summary = PayrollSummary(
            employee_id=uuid4(),
            employee_name="Jeanne Moreau",
            contract_type=ContractType.CDI,
            regular_hours=Decimal("32"),
            overtime_hours=Decimal("0"),
            holiday_hours=Decimal("0"),
            absence_hours=Decimal("0"),
            total_hours=Decimal("32"),
            hourly_rate=Decimal("12"),
            gross_salary=Decimal("384"),
            variable_elements=(
                VariableElement(VariableElementType.MEAL_VOUCHER, Decimal("45"), "Meal vouchers"),
                VariableElement(VariableElementType.TRANSPORT, Decimal("75"), "Transport allowance"),
            ),
        )
        assert summary.variable_total == Decimal("120")
