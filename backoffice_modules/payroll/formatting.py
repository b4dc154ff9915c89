"""Display formatting for payroll lines (hours, money, month labels)."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from backoffice_modules.payroll.models import PayrollMonth, PayrollSummary

CENT = Decimal("0.01")
TENTH = Decimal("0.1")

_CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}

_MONTH_NAMES = {
    "en": (
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December",
    ),
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin", "juillet",
        "août", "septembre", "octobre", "novembre", "décembre",
    ),
}


def format_hours(hours: Decimal) -> str:
    return f"{hours.quantize(TENTH, rounding=ROUND_HALF_UP)}h"


def format_currency(amount: Decimal, locale: str = "en", currency: str = "EUR") -> str:
    """Amount with two decimals and locale grouping.

    fr: ``1\u202f234,56\xa0€`` (narrow no-break grouping, no-break
    space before the symbol), en: ``€1,234.56``.
    """
    value = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    symbol = _CURRENCY_SYMBOLS.get(currency, currency)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}"
    if locale == "fr":
        grouped = grouped.replace(",", "\u202f").replace(".", ",")
        return f"{sign}{grouped}\xa0{symbol}"
    if locale == "en":
        return f"{sign}{symbol}{grouped}"
    raise ValueError(f"unsupported locale '{locale}'")


def format_month(month: PayrollMonth, locale: str = "en") -> str:
    """``October 2026`` / ``Octobre 2026``."""
    try:
        name = _MONTH_NAMES[locale][month.month - 1]
    except KeyError:
        raise ValueError(f"unsupported locale '{locale}'") from None
    return f"{name[0].upper()}{name[1:]} {month.year}"


def summary_rows(
    summaries: Sequence[PayrollSummary],
    locale: str = "en",
    currency: str = "EUR",
) -> list[dict[str, Any]]:
    """Tabular rows for display, one per summary."""
    return [
        {
            "employee": s.employee_name,
            "contract_type": s.contract_type.value,
            "regular_hours": format_hours(s.regular_hours),
            "overtime_hours": format_hours(s.overtime_hours),
            "holiday_hours": format_hours(s.holiday_hours),
            "absence_hours": format_hours(s.absence_hours),
            "total_hours": format_hours(s.total_hours),
            "hourly_rate": format_currency(s.hourly_rate, locale, currency),
            "gross_salary": format_currency(s.gross_salary, locale, currency),
            "variable_elements": [
                {
                    "type": e.type.value,
                    "amount": format_currency(e.amount, locale, currency),
                    "description": e.description,
                }
                for e in s.variable_elements
            ],
        }
        for s in summaries
    ]
