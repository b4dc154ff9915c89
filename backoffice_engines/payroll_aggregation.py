"""
Payroll Aggregation Engine (``backoffice_engines.payroll_aggregation``).

Responsibility
--------------
Pure functions turning a restaurant roster and its weekly shift pattern
into monthly payroll lines:

* hours breakdown per employee (regular / overtime / holiday / absence)
* gross salary estimate
* variable pay elements (premiums, meal vouchers, transport allowance)
* filtering and totals over the resulting lines

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads.  Imports only payroll DTOs and the policy schema.

Invariants enforced
-------------------
* Deterministic: same (month, roster, shifts, policy, locale) = same output.
* Nothing is cached between calls; every run rebuilds all summaries.
* ``gross = regular*rate + overtime*rate*overtime_multiplier
  + holiday*rate*holiday_multiplier`` holds exactly for every summary.
* Absence hours never count towards total hours or pay.

Failure modes
-------------
* Unparseable wall-clock time  -> ``InvalidShiftTimeError``.
* Unsupported locale  -> ``ValueError``.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from uuid import UUID

from backoffice_modules.payroll.config import PayrollPolicy
from backoffice_modules.payroll.models import (
    ContractType,
    Employee,
    PayrollMonth,
    PayrollSummary,
    PayrollTotals,
    Shift,
    VariableElement,
    VariableElementType,
    parse_wall_clock,
)

ZERO = Decimal("0")
MINUTES_PER_DAY = 24 * 60
SIXTY = Decimal("60")
_TENTH = Decimal("0.1")

SUPPORTED_LOCALES = ("en", "fr")
ALL_CONTRACT_TYPES = "all"

BUCKET_REGULAR = "regular"
BUCKET_HOLIDAY = "holiday"
BUCKET_ABSENCE = "absence"

_CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}

_DESCRIPTIONS: dict[str, dict[VariableElementType, str]] = {
    "en": {
        VariableElementType.OVERTIME: "Overtime premium ({hours}h at {percent}%)",
        VariableElementType.HOLIDAY: "Public holiday premium ({hours}h at {percent}%)",
        VariableElementType.MEAL_VOUCHER: "Meal vouchers ({days} days at {value})",
        VariableElementType.TRANSPORT: "Transport allowance",
    },
    "fr": {
        VariableElementType.OVERTIME: "Prime d'heures supplémentaires ({hours}h à {percent}%)",
        VariableElementType.HOLIDAY: "Prime jour férié ({hours}h à {percent}%)",
        VariableElementType.MEAL_VOUCHER: "Titres restaurant ({days} jours à {value})",
        VariableElementType.TRANSPORT: "Indemnité de transport",
    },
}


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def weekday_index(d: date) -> int:
    """Day-of-week index of a date, Monday=0 .. Sunday=6."""
    return d.weekday()


def sunday_origin_to_weekday_index(raw: int) -> int:
    """Convert a Sunday=0 .. Saturday=6 index to Monday=0 .. Sunday=6."""
    if not 0 <= raw <= 6:
        raise ValueError(f"day index must be within 0..6, got {raw}")
    return 6 if raw == 0 else raw - 1


# ---------------------------------------------------------------------------
# Shift arithmetic
# ---------------------------------------------------------------------------


def shift_duration_hours(start: str, end: str) -> Decimal:
    """Duration of a worked shift in hours.

    An end time earlier in the day than the start time is an overnight
    shift: 24 hours are added before subtracting, so "22:00"-"06:00" is
    8 hours.  Equal start and end times give zero.
    """
    start_hour, start_minute = parse_wall_clock(start)
    end_hour, end_minute = parse_wall_clock(end)

    start_minutes = start_hour * 60 + start_minute
    end_minutes = end_hour * 60 + end_minute
    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    hours, minutes = divmod(end_minutes - start_minutes, 60)
    return Decimal(hours) + Decimal(minutes) / SIXTY


def split_worked_hours(
    duration: Decimal,
    policy: PayrollPolicy,
) -> tuple[Decimal, Decimal]:
    """Split one shift's duration into ``(regular, overtime)``."""
    threshold = policy.daily_overtime_threshold_hours
    if duration > threshold:
        return threshold, duration - threshold
    return duration, ZERO


def status_bucket(status: str, policy: PayrollPolicy) -> str:
    """Hour bucket credited by a status shift."""
    if status == policy.paid_leave_code:
        return BUCKET_REGULAR
    if status == policy.public_holiday_code:
        return BUCKET_HOLIDAY
    return BUCKET_ABSENCE


# ---------------------------------------------------------------------------
# Pay
# ---------------------------------------------------------------------------


def resolve_hourly_rate(employee: Employee, policy: PayrollPolicy) -> Decimal:
    """Employee's rate, or the policy fallback when none is recorded."""
    if employee.hourly_rate is None or employee.hourly_rate == 0:
        return policy.default_hourly_rate
    return employee.hourly_rate


def compute_gross_salary(
    regular_hours: Decimal,
    overtime_hours: Decimal,
    holiday_hours: Decimal,
    rate: Decimal,
    policy: PayrollPolicy,
) -> Decimal:
    """Gross salary estimate: base pay plus overtime and holiday uplifts."""
    return (
        regular_hours * rate
        + overtime_hours * rate * policy.overtime_multiplier
        + holiday_hours * rate * policy.holiday_multiplier
    )


def meal_voucher_days(regular_hours: Decimal, policy: PayrollPolicy) -> int:
    """Approximate work days: regular hours over a standard day, rounded up."""
    if regular_hours <= 0:
        return 0
    days = (regular_hours / policy.meal_voucher_day_hours).to_integral_value(
        rounding=ROUND_CEILING
    )
    return int(days)


def build_variable_elements(
    regular_hours: Decimal,
    overtime_hours: Decimal,
    holiday_hours: Decimal,
    rate: Decimal,
    policy: PayrollPolicy,
    locale: str = "en",
) -> tuple[VariableElement, ...]:
    """Variable pay elements, in display order.

    Premium elements carry only the uplift above base pay, since base pay
    for those hours is already part of the gross salary.  The transport
    allowance is always present.
    """
    labels = _labels(locale)
    elements: list[VariableElement] = []

    if overtime_hours > 0:
        elements.append(VariableElement(
            type=VariableElementType.OVERTIME,
            amount=overtime_hours * rate * policy.overtime_premium_rate,
            description=labels[VariableElementType.OVERTIME].format(
                hours=_one_decimal(overtime_hours),
                percent=_plain(policy.overtime_premium_rate * 100),
            ),
        ))

    if holiday_hours > 0:
        elements.append(VariableElement(
            type=VariableElementType.HOLIDAY,
            amount=holiday_hours * rate * policy.holiday_premium_rate,
            description=labels[VariableElementType.HOLIDAY].format(
                hours=_one_decimal(holiday_hours),
                percent=_plain(policy.holiday_premium_rate * 100),
            ),
        ))

    days = meal_voucher_days(regular_hours, policy)
    if days > 0:
        elements.append(VariableElement(
            type=VariableElementType.MEAL_VOUCHER,
            amount=days * policy.meal_voucher_day_value,
            description=labels[VariableElementType.MEAL_VOUCHER].format(
                days=days,
                value=_money_label(policy.meal_voucher_day_value, policy.currency),
            ),
        ))

    elements.append(VariableElement(
        type=VariableElementType.TRANSPORT,
        amount=policy.transport_allowance,
        description=labels[VariableElementType.TRANSPORT],
    ))

    return tuple(elements)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def aggregate_employee(
    employee: Employee,
    shifts_by_day: dict[int, Sequence[Shift]],
    month: PayrollMonth,
    policy: PayrollPolicy,
    locale: str = "en",
) -> PayrollSummary:
    """Build one employee's payroll line for a month.

    Args:
        employee: The roster entry.
        shifts_by_day: The employee's shifts keyed by weekday index.  A
            weekday's shifts are counted once per occurrence of that
            weekday in the month.
        month: Target payroll month.
        policy: Payroll constants.
        locale: Language of the variable element descriptions.
    """
    buckets = {
        BUCKET_REGULAR: ZERO,
        BUCKET_HOLIDAY: ZERO,
        BUCKET_ABSENCE: ZERO,
    }
    overtime = ZERO

    for day in month.days():
        for shift in shifts_by_day.get(weekday_index(day), ()):
            if shift.status:
                buckets[status_bucket(shift.status, policy)] += policy.status_day_hours
            else:
                regular, extra = split_worked_hours(
                    shift_duration_hours(shift.start, shift.end), policy,
                )
                buckets[BUCKET_REGULAR] += regular
                overtime += extra

    regular = buckets[BUCKET_REGULAR]
    holiday = buckets[BUCKET_HOLIDAY]
    rate = resolve_hourly_rate(employee, policy)

    return PayrollSummary(
        employee_id=employee.id,
        employee_name=employee.display_name,
        contract_type=employee.contract_type,
        regular_hours=regular,
        overtime_hours=overtime,
        holiday_hours=holiday,
        absence_hours=buckets[BUCKET_ABSENCE],
        total_hours=regular + overtime + holiday,
        hourly_rate=rate,
        gross_salary=compute_gross_salary(regular, overtime, holiday, rate, policy),
        variable_elements=build_variable_elements(
            regular, overtime, holiday, rate, policy, locale,
        ),
    )


def index_shifts(shifts: Iterable[Shift]) -> dict[UUID, dict[int, list[Shift]]]:
    """Group shifts by employee, then weekday index, keeping input order."""
    index: dict[UUID, dict[int, list[Shift]]] = defaultdict(lambda: defaultdict(list))
    for shift in shifts:
        index[shift.employee_id][shift.day].append(shift)
    return index


def aggregate_payroll(
    month: PayrollMonth,
    employees: Sequence[Employee],
    shifts: Sequence[Shift],
    policy: PayrollPolicy | None = None,
    locale: str = "en",
) -> list[PayrollSummary]:
    """One payroll summary per employee, in roster order.

    Shifts belonging to employees absent from the roster are ignored.
    """
    policy = policy or PayrollPolicy()
    _labels(locale)
    by_employee = index_shifts(shifts)
    return [
        aggregate_employee(employee, by_employee.get(employee.id, {}), month, policy, locale)
        for employee in employees
    ]


def filter_summaries(
    summaries: Sequence[PayrollSummary],
    search: str | None = "",
    contract_type: ContractType | str = ALL_CONTRACT_TYPES,
) -> list[PayrollSummary]:
    """Summaries matching a name search AND a contract type, order preserved.

    ``search`` is a case-insensitive substring of the employee name; empty
    matches everyone.  ``contract_type`` ``"all"`` disables that filter.
    """
    filtered = list(summaries)

    if search:
        needle = search.lower()
        filtered = [s for s in filtered if needle in s.employee_name.lower()]

    if isinstance(contract_type, ContractType):
        contract_type = contract_type.value
    if contract_type != ALL_CONTRACT_TYPES:
        filtered = [s for s in filtered if s.contract_type.value == contract_type]

    return filtered


def compute_totals(summaries: Iterable[PayrollSummary]) -> PayrollTotals:
    """Element-wise sum of hours and gross salary."""
    regular = overtime = holiday = absence = total = gross = ZERO
    count = 0
    for s in summaries:
        regular += s.regular_hours
        overtime += s.overtime_hours
        holiday += s.holiday_hours
        absence += s.absence_hours
        total += s.total_hours
        gross += s.gross_salary
        count += 1
    return PayrollTotals(
        regular_hours=regular,
        overtime_hours=overtime,
        holiday_hours=holiday,
        absence_hours=absence,
        total_hours=total,
        gross_salary=gross,
        employee_count=count,
    )


# ---------------------------------------------------------------------------
# Label helpers
# ---------------------------------------------------------------------------


def _labels(locale: str) -> dict[VariableElementType, str]:
    try:
        return _DESCRIPTIONS[locale]
    except KeyError:
        raise ValueError(
            f"locale must be one of {SUPPORTED_LOCALES}, got '{locale}'"
        ) from None


def _one_decimal(value: Decimal) -> str:
    return f"{value.quantize(_TENTH, rounding=ROUND_HALF_UP)}"


def _plain(value: Decimal) -> str:
    """Decimal without trailing zeros or exponent: 25.00 -> '25', 1E+2 -> '100'."""
    return f"{value.normalize():f}"


def _money_label(value: Decimal, currency: str) -> str:
    return f"{_plain(value)}{_CURRENCY_SYMBOLS.get(currency, ' ' + currency)}"
