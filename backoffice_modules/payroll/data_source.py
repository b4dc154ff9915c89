"""
Payroll Data Access (``backoffice_modules.payroll.data_source``).

Responsibility
--------------
The read-only boundary through which payroll preparation obtains a
restaurant's roster and weekly schedule.  ``PayrollDataSource`` is the
contract; ``SqlPayrollDataSource`` implements it over a SQLAlchemy session.
The aggregation engine never sees either -- the service passes plain DTOs.

Failure modes
-------------
* Unknown restaurant  -> ``RestaurantNotFoundError``.
* A stored shift violating the worked-or-status rule  ->
  ``MalformedShiftError`` raised while converting the row.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice_kernel.exceptions import RestaurantNotFoundError
from backoffice_kernel.logging_config import get_logger
from backoffice_modules.payroll.models import Employee, Shift
from backoffice_modules.payroll.orm import EmployeeModel, RestaurantModel, ShiftModel

logger = get_logger("modules.payroll.data_source")


class PayrollDataSource(Protocol):
    """Supplies roster and schedule for one restaurant."""

    def list_employees(self, restaurant_id: UUID) -> list[Employee]:
        """Active employees of the restaurant, in roster order."""
        ...

    def list_shifts(self, restaurant_id: UUID) -> list[Shift]:
        """Every shift of the restaurant's weekly schedule."""
        ...


class SqlPayrollDataSource:
    """``PayrollDataSource`` backed by the ORM tables."""

    def __init__(self, session: Session):
        self._session = session

    def _require_restaurant(self, restaurant_id: UUID) -> None:
        if self._session.get(RestaurantModel, restaurant_id) is None:
            logger.warning(
                "restaurant_not_found",
                extra={"restaurant_id": str(restaurant_id)},
            )
            raise RestaurantNotFoundError(str(restaurant_id))

    def list_employees(self, restaurant_id: UUID) -> list[Employee]:
        self._require_restaurant(restaurant_id)
        rows = self._session.scalars(
            select(EmployeeModel)
            .where(
                EmployeeModel.restaurant_id == restaurant_id,
                EmployeeModel.is_active.is_(True),
            )
            .order_by(EmployeeModel.last_name, EmployeeModel.first_name, EmployeeModel.id)
        ).all()
        logger.debug(
            "employees_loaded",
            extra={"restaurant_id": str(restaurant_id), "count": len(rows)},
        )
        return [row.to_dto() for row in rows]

    def list_shifts(self, restaurant_id: UUID) -> list[Shift]:
        self._require_restaurant(restaurant_id)
        rows = self._session.scalars(
            select(ShiftModel)
            .where(ShiftModel.restaurant_id == restaurant_id)
            .order_by(ShiftModel.day, ShiftModel.start, ShiftModel.id)
        ).all()
        logger.debug(
            "shifts_loaded",
            extra={"restaurant_id": str(restaurant_id), "count": len(rows)},
        )
        return [row.to_dto() for row in rows]
