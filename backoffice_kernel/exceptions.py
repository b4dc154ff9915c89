"""
Typed Exception Hierarchy for the restaurant back-office.

Every error has a typed class (catch by type, not by message), a
machine-readable ``code`` class attribute, and carries its context as
structured attributes so it survives logging and API serialization.

    BackofficeError (base)
    |
    +-- ShiftError
    |   +-- MalformedShiftError
    |   +-- InvalidShiftTimeError
    |   +-- InvalidShiftDayError
    |
    +-- PeriodError
    |   +-- InvalidPayrollMonthError
    |
    +-- AccessError
    |   +-- CapabilityDeniedError
    |   +-- UnknownRoleError
    |
    +-- DataSourceError
        +-- RestaurantNotFoundError

Category     | Code                   | When Raised
-------------|------------------------|------------------------------------------
Shift        | MALFORMED_SHIFT        | No status and start or end missing
             | INVALID_SHIFT_TIME     | Start/end not a valid "HH:MM" wall clock
             | INVALID_SHIFT_DAY      | Day-of-week index outside 0..6
Period       | INVALID_PAYROLL_MONTH  | Month identifier not "YYYY-MM" / out of range
Access       | CAPABILITY_DENIED      | Role lacks the capability for an operation
             | UNKNOWN_ROLE           | Role is not admin / manager / employee
Data source  | RESTAURANT_NOT_FOUND   | Restaurant ID does not exist

Usage::

    try:
        preparation = service.prepare(actor, restaurant_id, month)
    except CapabilityDeniedError as e:
        return {"error": e.code, "capability": e.capability}
"""


class BackofficeError(Exception):
    """
    Base exception for all back-office errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "BACKOFFICE_ERROR"


# Shift-related exceptions


class ShiftError(BackofficeError):
    """Base exception for shift record errors."""

    code: str = "SHIFT_ERROR"


class MalformedShiftError(ShiftError):
    """
    Shift is neither a worked shift nor an absence.

    A shift without a status code must carry both a start and an end time.
    """

    code: str = "MALFORMED_SHIFT"

    def __init__(self, shift_id: str, start: str | None, end: str | None):
        self.shift_id = shift_id
        self.start = start
        self.end = end
        super().__init__(
            f"Shift {shift_id} has no status and an incomplete time range "
            f"(start={start!r}, end={end!r})"
        )


class InvalidShiftTimeError(ShiftError):
    """Wall-clock time is not a valid ``HH:MM`` value."""

    code: str = "INVALID_SHIFT_TIME"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid shift time {value!r}: expected HH:MM")


class InvalidShiftDayError(ShiftError):
    """Day-of-week index is outside Monday=0 .. Sunday=6."""

    code: str = "INVALID_SHIFT_DAY"

    def __init__(self, shift_id: str, day: int):
        self.shift_id = shift_id
        self.day = day
        super().__init__(f"Shift {shift_id} has invalid day index {day}: expected 0..6")


# Period-related exceptions


class PeriodError(BackofficeError):
    """Base exception for payroll period errors."""

    code: str = "PERIOD_ERROR"


class InvalidPayrollMonthError(PeriodError):
    """Payroll month identifier cannot be parsed or is out of range."""

    code: str = "INVALID_PAYROLL_MONTH"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid payroll month {value!r}: expected YYYY-MM")


# Access-related exceptions


class AccessError(BackofficeError):
    """Base exception for authorization errors."""

    code: str = "ACCESS_ERROR"


class CapabilityDeniedError(AccessError):
    """Actor's role does not grant the required capability."""

    code: str = "CAPABILITY_DENIED"

    def __init__(self, actor_id: str, role: str, capability: str, reason: str = ""):
        self.actor_id = actor_id
        self.role = role
        self.capability = capability
        self.reason = reason
        super().__init__(
            f"Actor {actor_id} with role '{role}' may not perform '{capability}'"
            + (f": {reason}" if reason else "")
        )


class UnknownRoleError(AccessError):
    """Role is not one of the known user roles."""

    code: str = "UNKNOWN_ROLE"

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Unknown role: {role!r}")


# Data-source exceptions


class DataSourceError(BackofficeError):
    """Base exception for data-access errors."""

    code: str = "DATA_SOURCE_ERROR"


class RestaurantNotFoundError(DataSourceError):
    """Restaurant with given ID was not found."""

    code: str = "RESTAURANT_NOT_FOUND"

    def __init__(self, restaurant_id: str):
        self.restaurant_id = restaurant_id
        super().__init__(f"Restaurant not found: {restaurant_id}")
