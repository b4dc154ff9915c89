#!/usr/bin/env python3
"""
Print the monthly payroll preparation of a restaurant.

Usage:
    python3 scripts/payroll_report.py --database-url sqlite:///backoffice.db \\
        --restaurant-id 6f1c... --month 2026-02 [--contract-type CDI] [--locale fr]

Exit codes:
    0  report printed
    2  back-office error (unknown restaurant, denied role, bad month, ...)
       or an unreadable or invalid policy file
"""

import argparse
import sys
from pathlib import Path
from uuid import UUID, uuid4

import yaml

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backoffice_config import get_payroll_policy  # noqa: E402
from backoffice_kernel.db.engine import init_engine_from_url, session_scope  # noqa: E402
from backoffice_kernel.exceptions import BackofficeError  # noqa: E402
from backoffice_kernel.logging_config import configure_logging  # noqa: E402
from backoffice_modules.payroll.access import ROLE_CAPABILITIES, Actor  # noqa: E402
from backoffice_modules.payroll.data_source import SqlPayrollDataSource  # noqa: E402
from backoffice_modules.payroll.formatting import (  # noqa: E402
    format_currency,
    format_hours,
    format_month,
)
from backoffice_modules.payroll.models import PayrollMonth  # noqa: E402
from backoffice_modules.payroll.service import PayrollPreparationService  # noqa: E402

W = 100


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Monthly payroll preparation report for one restaurant.",
    )
    parser.add_argument("--database-url", required=True, help="SQLAlchemy database URL")
    parser.add_argument("--restaurant-id", required=True, type=UUID)
    parser.add_argument("--month", default=None, help="YYYY-MM (default: current month)")
    parser.add_argument("--role", default="manager", choices=sorted(ROLE_CAPABILITIES))
    parser.add_argument("--actor-id", type=UUID, default=None)
    parser.add_argument("--search", default="", help="case-insensitive name filter")
    parser.add_argument("--contract-type", default="all", choices=["all", "CDI", "CDD", "Extra"])
    parser.add_argument("--locale", default="en", choices=["en", "fr"])
    parser.add_argument("--policy", default=None, help="payroll policy YAML file")
    parser.add_argument("--verbose", action="store_true", help="emit JSON logs on stderr")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        configure_logging()

    try:
        policy = get_payroll_policy(args.policy)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        print(f"ERROR [INVALID_POLICY]: {exc}", file=sys.stderr)
        return 2

    try:
        month = PayrollMonth.parse(args.month) if args.month else None
        actor = Actor(user_id=args.actor_id or uuid4(), role=args.role)

        init_engine_from_url(args.database_url)
        with session_scope() as session:
            service = PayrollPreparationService(SqlPayrollDataSource(session), policy)
            result = service.prepare(
                actor,
                args.restaurant_id,
                month,
                search=args.search,
                contract_type=args.contract_type,
                locale=args.locale,
            )
    except BackofficeError as exc:
        print(f"ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 2

    money = lambda amount: format_currency(amount, args.locale, policy.currency)  # noqa: E731

    print("=" * W)
    print(f"  PAYROLL PREPARATION  {format_month(result.month, args.locale)}")
    print("=" * W)
    print(f"  {'Employee':<28}{'Contract':<9}{'Regular':>9}{'Overtime':>10}"
          f"{'Holiday':>9}{'Absence':>9}{'Total':>9}{'Gross':>15}")
    print("-" * W)
    for s in result.visible:
        print(f"  {s.employee_name:<28}{s.contract_type.value:<9}"
              f"{format_hours(s.regular_hours):>9}{format_hours(s.overtime_hours):>10}"
              f"{format_hours(s.holiday_hours):>9}{format_hours(s.absence_hours):>9}"
              f"{format_hours(s.total_hours):>9}{money(s.gross_salary):>15}")
        for element in s.variable_elements:
            print(f"      + {element.description:<60}{money(element.amount):>15}")
    print("-" * W)
    t = result.totals
    print(f"  {'TOTAL (' + str(t.employee_count) + ')':<37}"
          f"{format_hours(t.regular_hours):>9}{format_hours(t.overtime_hours):>10}"
          f"{format_hours(t.holiday_hours):>9}{format_hours(t.absence_hours):>9}"
          f"{format_hours(t.total_hours):>9}{money(t.gross_salary):>15}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
