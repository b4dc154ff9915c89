"""
Payroll Domain Models (``backoffice_modules.payroll.models``).

Responsibility
--------------
Frozen dataclass value objects for payroll preparation: employees of a
restaurant roster, weekly schedule shifts, the payroll month, and the
derived per-employee payroll summary with its variable pay elements.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by the
aggregation engine and ``PayrollPreparationService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary and hour fields use ``Decimal`` -- NEVER ``float``.
* A ``Shift`` is either a worked shift (no status, start AND end) or an
  absence shift (status set; start/end ignored).  Anything else raises
  ``MalformedShiftError`` at construction.
* ``Shift.day`` is a weekday index, Monday=0 .. Sunday=6.

Failure modes
-------------
* Negative hourly rate  -> ``ValueError``.
* Worked shift without start or end  -> ``MalformedShiftError``.
* Worked shift with a start/end that is not ``HH:MM``  -> ``InvalidShiftTimeError``.
* Day index outside 0..6  -> ``InvalidShiftDayError``.
* Unparseable month  -> ``InvalidPayrollMonthError``.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from uuid import UUID

from backoffice_kernel.exceptions import (
    InvalidPayrollMonthError,
    InvalidShiftDayError,
    InvalidShiftTimeError,
    MalformedShiftError,
)
from backoffice_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.models")

ZERO = Decimal("0")

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_WALL_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


class ContractType(Enum):
    """Employment contract types."""
    CDI = "CDI"        # permanent
    CDD = "CDD"        # fixed-term
    EXTRA = "Extra"    # occasional / on-call


class ShiftStatus:
    """Status codes carried by non-worked shifts.

    Only ``PAID_LEAVE`` and ``PUBLIC_HOLIDAY`` have dedicated payroll
    treatment; every other code (including unknown ones) counts as absence.
    """
    PAID_LEAVE = "CP"
    PUBLIC_HOLIDAY = "PUBLIC_HOLIDAY"
    WEEKLY_REST = "WEEKLY_REST"
    SICK_LEAVE = "SICK_LEAVE"
    ACCIDENT = "ACCIDENT"
    ABSENCE = "ABSENCE"


class VariableElementType(Enum):
    """Kinds of variable pay element."""
    OVERTIME = "overtime"
    HOLIDAY = "holiday"
    MEAL_VOUCHER = "meal_voucher"
    TRANSPORT = "transport"


def parse_wall_clock(value: str) -> tuple[int, int]:
    """Parse ``"HH:MM"`` (a ``":SS"`` suffix is tolerated) into ``(hour, minute)``."""
    match = _WALL_CLOCK_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidShiftTimeError(str(value))
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidShiftTimeError(value)
    return hour, minute


@dataclass(frozen=True)
class Employee:
    """An employee of a restaurant roster."""
    id: UUID
    first_name: str
    last_name: str
    contract_type: ContractType
    hourly_rate: Decimal | None = None  # None -> policy fallback rate
    restaurant_id: UUID | None = None
    is_active: bool = True

    def __post_init__(self):
        if self.hourly_rate is not None and self.hourly_rate < 0:
            logger.warning(
                "employee_negative_hourly_rate",
                extra={
                    "employee_id": str(self.id),
                    "hourly_rate": str(self.hourly_rate),
                },
            )
            raise ValueError("hourly_rate cannot be negative")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Shift:
    """A recurring weekly shift (or absence) of one employee.

    ``start`` and ``end`` are ``"HH:MM"`` wall-clock times local to the
    restaurant.  When ``status`` is set they are ignored.
    """
    id: UUID
    employee_id: UUID
    day: int
    start: str | None = None
    end: str | None = None
    status: str | None = None

    def __post_init__(self):
        if isinstance(self.day, bool) or not 0 <= self.day <= 6:
            raise InvalidShiftDayError(str(self.id), self.day)
        if not self.status:
            if not self.start or not self.end:
                raise MalformedShiftError(str(self.id), self.start, self.end)
            parse_wall_clock(self.start)
            parse_wall_clock(self.end)

    @property
    def is_absence(self) -> bool:
        return bool(self.status)

    @property
    def is_worked(self) -> bool:
        return not self.status


@dataclass(frozen=True, order=True)
class PayrollMonth:
    """A calendar month selected for payroll preparation."""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12 or not 1 <= self.year <= 9999:
            raise InvalidPayrollMonthError(f"{self.year:04d}-{self.month:02d}")

    @classmethod
    def parse(cls, value: str) -> PayrollMonth:
        """Parse a ``YYYY-MM`` identifier."""
        match = _MONTH_RE.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidPayrollMonthError(str(value))
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12 or year < 1:
            raise InvalidPayrollMonthError(value)
        return cls(year, month)

    @classmethod
    def from_date(cls, d: date) -> PayrollMonth:
        return cls(d.year, d.month)

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def days(self) -> Iterator[date]:
        """Every calendar day of the month, first and last inclusive."""
        current = self.first_day
        last = self.last_day
        while current <= last:
            yield current
            current += timedelta(days=1)

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class VariableElement:
    """A monetary adjustment beyond base regular/overtime/holiday pay."""
    type: VariableElementType
    amount: Decimal
    description: str


@dataclass(frozen=True)
class PayrollSummary:
    """Derived payroll line of one employee for one month.  Never persisted."""
    employee_id: UUID
    employee_name: str
    contract_type: ContractType
    regular_hours: Decimal
    overtime_hours: Decimal
    holiday_hours: Decimal
    absence_hours: Decimal
    total_hours: Decimal
    hourly_rate: Decimal
    gross_salary: Decimal
    variable_elements: tuple[VariableElement, ...] = field(default_factory=tuple)

    @property
    def variable_total(self) -> Decimal:
        return sum((e.amount for e in self.variable_elements), ZERO)


@dataclass(frozen=True)
class PayrollTotals:
    """Element-wise sums over a set of payroll summaries."""
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    absence_hours: Decimal = ZERO
    total_hours: Decimal = ZERO
    gross_salary: Decimal = ZERO
    employee_count: int = 0
