"""
Payroll Policy Schema.

Defines the constants of monthly payroll preparation with the defaults
used by the restaurant group.  Actual values may be loaded from YAML at
runtime through ``backoffice_config.get_payroll_policy()``.
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Self

from backoffice_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.config")

_DECIMAL_FIELDS = (
    "daily_overtime_threshold_hours",
    "overtime_multiplier",
    "holiday_multiplier",
    "status_day_hours",
    "default_hourly_rate",
    "meal_voucher_day_hours",
    "meal_voucher_day_value",
    "transport_allowance",
)


@dataclass(frozen=True)
class PayrollPolicy:
    """
    Configuration schema for payroll preparation.

    Override at instantiation with restaurant-specific values:

        policy = PayrollPolicy(
            transport_allowance=Decimal("80"),
            **load_from_file("payroll_policy.yaml"),
        )
    """

    # Worked time split
    daily_overtime_threshold_hours: Decimal = Decimal("8")
    overtime_multiplier: Decimal = Decimal("1.25")
    holiday_multiplier: Decimal = Decimal("2.0")

    # Hours credited for one status (leave / holiday / absence) shift
    status_day_hours: Decimal = Decimal("7")

    # Employees without a recorded rate
    default_hourly_rate: Decimal = Decimal("12.0")

    # Variable elements
    meal_voucher_day_hours: Decimal = Decimal("7")
    meal_voucher_day_value: Decimal = Decimal("9.0")
    transport_allowance: Decimal = Decimal("75.0")

    # Status codes with dedicated treatment
    paid_leave_code: str = "CP"
    public_holiday_code: str = "PUBLIC_HOLIDAY"

    currency: str = "EUR"

    def __post_init__(self):
        for name in _DECIMAL_FIELDS:
            if not isinstance(getattr(self, name), Decimal):
                raise ValueError(f"{name} must be a Decimal, got {type(getattr(self, name)).__name__}")

        if self.daily_overtime_threshold_hours <= 0:
            raise ValueError("daily_overtime_threshold_hours must be positive")
        if self.overtime_multiplier < 1:
            raise ValueError("overtime_multiplier cannot be below 1")
        if self.holiday_multiplier < 1:
            raise ValueError("holiday_multiplier cannot be below 1")
        if self.status_day_hours < 0:
            raise ValueError("status_day_hours cannot be negative")
        if self.default_hourly_rate < 0:
            raise ValueError("default_hourly_rate cannot be negative")
        if self.meal_voucher_day_hours <= 0:
            raise ValueError("meal_voucher_day_hours must be positive")
        if self.meal_voucher_day_value < 0:
            raise ValueError("meal_voucher_day_value cannot be negative")
        if self.transport_allowance < 0:
            raise ValueError("transport_allowance cannot be negative")

        if not self.paid_leave_code or not self.public_holiday_code:
            raise ValueError("paid_leave_code and public_holiday_code are required")
        if self.paid_leave_code == self.public_holiday_code:
            raise ValueError("paid_leave_code and public_holiday_code must differ")
        if len(self.currency) != 3 or not self.currency.isupper():
            raise ValueError(f"currency must be an ISO 4217 code, got '{self.currency}'")

        logger.debug(
            "payroll_policy_initialized",
            extra={
                "daily_overtime_threshold_hours": str(self.daily_overtime_threshold_hours),
                "overtime_multiplier": str(self.overtime_multiplier),
                "holiday_multiplier": str(self.holiday_multiplier),
                "default_hourly_rate": str(self.default_hourly_rate),
                "currency": self.currency,
            },
        )

    @property
    def overtime_premium_rate(self) -> Decimal:
        """Share of the hourly rate paid on top of base pay for overtime."""
        return self.overtime_multiplier - 1

    @property
    def holiday_premium_rate(self) -> Decimal:
        """Share of the hourly rate paid on top of base pay on public holidays."""
        return self.holiday_multiplier - 1

    @classmethod
    def with_defaults(cls) -> Self:
        """Create a policy with the standard restaurant defaults."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a policy from a dictionary (e.g. loaded from YAML)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown payroll policy keys: {unknown}")

        logger.info(
            "payroll_policy_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        values = dict(data)
        for name in _DECIMAL_FIELDS:
            if name in values:
                values[name] = _to_decimal(name, values[name])
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """Canonical string form of every field (used for checksums)."""
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}


def _to_decimal(name: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except ArithmeticError:
            raise ValueError(f"{name} must be numeric, got {value!r}") from None
    raise ValueError(f"{name} must be numeric, got {value!r}")
