"""End-to-end tests for scripts/payroll_report.py over a file-backed SQLite database."""

from decimal import Decimal
from uuid import uuid4

import pytest

from backoffice_kernel.db.engine import (
    create_tables,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from backoffice_modules.payroll.models import ContractType, Employee, Shift, ShiftStatus
from backoffice_modules.payroll.orm import EmployeeModel, RestaurantModel, ShiftModel
from scripts.payroll_report import main

ACTOR_ID = uuid4()


@pytest.fixture
def seeded_db(tmp_path):
    """Database URL and restaurant id of a seeded two-employee roster."""
    url = f"sqlite:///{tmp_path / 'backoffice.db'}"
    init_engine_from_url(url)
    create_tables()

    restaurant_id = uuid4()
    jeanne = Employee(uuid4(), "Jeanne", "Moreau", ContractType.CDI, Decimal("12"), restaurant_id)
    paul = Employee(uuid4(), "Paul", "Lefèvre", ContractType.EXTRA, None, restaurant_id)
    with session_scope() as session:
        session.add(RestaurantModel(id=restaurant_id, name="Le Comptoir", created_by_id=ACTOR_ID))
        session.flush()
        session.add_all([
            EmployeeModel.from_dto(jeanne, ACTOR_ID),
            EmployeeModel.from_dto(paul, ACTOR_ID),
        ])
        session.flush()
        session.add_all([
            ShiftModel.from_dto(
                Shift(uuid4(), jeanne.id, 0, "09:00", "18:00"), restaurant_id, ACTOR_ID,
            ),
            ShiftModel.from_dto(
                Shift(uuid4(), paul.id, 3, status=ShiftStatus.PUBLIC_HOLIDAY),
                restaurant_id, ACTOR_ID,
            ),
        ])

    yield url, restaurant_id
    reset_engine()


def _run(url, restaurant_id, *extra):
    return main([
        "--database-url", url,
        "--restaurant-id", str(restaurant_id),
        "--month", "2026-02",
        *extra,
    ])


class TestPayrollReport:

    def test_report_printed(self, seeded_db, capsys):
        url, restaurant_id = seeded_db
        assert _run(url, restaurant_id) == 0

        out = capsys.readouterr().out
        assert "PAYROLL PREPARATION  February 2026" in out
        assert "Jeanne Moreau" in out
        assert "Paul Lefèvre" in out
        assert "€444.00" in out
        assert "Overtime premium (4.0h at 25%)" in out
        assert "TOTAL (2)" in out

    def test_contract_filter(self, seeded_db, capsys):
        url, restaurant_id = seeded_db
        assert _run(url, restaurant_id, "--contract-type", "Extra") == 0

        out = capsys.readouterr().out
        assert "Paul Lefèvre" in out
        assert "Jeanne Moreau" not in out
        assert "TOTAL (1)" in out

    def test_french_locale(self, seeded_db, capsys):
        url, restaurant_id = seeded_db
        assert _run(url, restaurant_id, "--locale", "fr", "--search", "moreau") == 0

        out = capsys.readouterr().out
        assert "Février 2026" in out
        assert "444,00\xa0€" in out
        assert "Indemnité de transport" in out

    def test_unknown_restaurant(self, seeded_db, capsys):
        url, _ = seeded_db
        assert _run(url, uuid4()) == 2
        assert "ERROR [RESTAURANT_NOT_FOUND]" in capsys.readouterr().err

    def test_employee_role_denied(self, seeded_db, capsys):
        url, restaurant_id = seeded_db
        assert _run(url, restaurant_id, "--role", "employee") == 2
        assert "ERROR [CAPABILITY_DENIED]" in capsys.readouterr().err

    def test_bad_month(self, seeded_db, capsys):
        url, restaurant_id = seeded_db
        code = main([
            "--database-url", url,
            "--restaurant-id", str(restaurant_id),
            "--month", "2026-14",
        ])
        assert code == 2
        assert "ERROR [INVALID_PAYROLL_MONTH]" in capsys.readouterr().err

    def test_policy_file(self, seeded_db, tmp_path, capsys):
        url, restaurant_id = seeded_db
        policy = tmp_path / "policy.yaml"
        policy.write_text("transport_allowance: 40\n", encoding="utf-8")
        assert _run(url, restaurant_id, "--policy", str(policy), "--search", "jeanne") == 0

        out = capsys.readouterr().out
        assert "€40.00" in out
        assert "€75.00" not in out

    def test_missing_policy_file(self, seeded_db, tmp_path, capsys):
        url, restaurant_id = seeded_db
        missing = tmp_path / "absent.yaml"
        assert _run(url, restaurant_id, "--policy", str(missing)) == 2
        assert "ERROR [INVALID_POLICY]" in capsys.readouterr().err

    @pytest.mark.parametrize("content", [
        "transport_allowance: [40\n",
        "- not a mapping\n",
        "transport_allowance: -5\n",
        "bonus: 10\n",
    ])
    def test_invalid_policy_file(self, seeded_db, tmp_path, capsys, content):
        url, restaurant_id = seeded_db
        policy = tmp_path / "policy.yaml"
        policy.write_text(content, encoding="utf-8")
        assert _run(url, restaurant_id, "--policy", str(policy)) == 2

        captured = capsys.readouterr()
        assert "ERROR [INVALID_POLICY]" in captured.err
        assert captured.out == ""
