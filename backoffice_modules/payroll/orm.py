"""
Payroll ORM Persistence Models (``backoffice_modules.payroll.orm``).

Responsibility:
    SQLAlchemy ORM models backing the restaurant roster and its weekly
    schedule.  Each ORM class mirrors a DTO in
    ``backoffice_modules.payroll.models`` and provides ``to_dto()`` /
    ``from_dto()`` conversion.  Payroll summaries are derived on demand and
    have no table.

Architecture position:
    **Modules layer** -- persistence companions to the pure DTO models.
    Inherits from ``TrackedBase`` which provides id (UUID PK), created_at,
    updated_at, created_by_id and updated_by_id.

Invariants enforced:
    - Hourly rates use Decimal (Numeric(38,9)) -- NEVER float.
    - Contract type stored as String(20) containing the enum .value string.
    - A shift row has a status, or both start and end (CHECK constraint).
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice_kernel.db.base import TrackedBase


# ---------------------------------------------------------------------------
# RestaurantModel
# ---------------------------------------------------------------------------

class RestaurantModel(TrackedBase):
    """ORM model for a restaurant owning a roster and a weekly schedule."""

    __tablename__ = "restaurants"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    employees: Mapped[list["EmployeeModel"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete-orphan",
    )


# ---------------------------------------------------------------------------
# EmployeeModel
# ---------------------------------------------------------------------------

class EmployeeModel(TrackedBase):
    """
    ORM model for ``Employee`` -- a member of a restaurant roster.

    Guarantees:
        - ``contract_type`` stores a ``ContractType`` .value string.
        - ``hourly_rate`` is NULL when no rate was recorded.
    """

    __tablename__ = "payroll_employees"

    restaurant_id: Mapped[UUID] = mapped_column(
        ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    contract_type: Mapped[str] = mapped_column(String(20), nullable=False)
    hourly_rate: Mapped[Decimal | None] = mapped_column(nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    restaurant: Mapped[RestaurantModel] = relationship(back_populates="employees")
    shifts: Mapped[list["ShiftModel"]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(
            "contract_type IN ('CDI', 'CDD', 'Extra')",
            name="contract_type",
        ),
        Index("idx_payroll_employee_restaurant", "restaurant_id"),
        Index("idx_payroll_employee_active", "is_active"),
    )

    def to_dto(self):
        from backoffice_modules.payroll.models import ContractType, Employee
        return Employee(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            contract_type=ContractType(self.contract_type),
            hourly_rate=self.hourly_rate,
            restaurant_id=self.restaurant_id,
            is_active=self.is_active,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID) -> "EmployeeModel":
        return cls(
            id=dto.id,
            restaurant_id=dto.restaurant_id,
            first_name=dto.first_name,
            last_name=dto.last_name,
            contract_type=dto.contract_type.value,
            hourly_rate=dto.hourly_rate,
            is_active=dto.is_active,
            created_by_id=created_by_id,
        )


# ---------------------------------------------------------------------------
# ShiftModel
# ---------------------------------------------------------------------------

class ShiftModel(TrackedBase):
    """
    ORM model for ``Shift`` -- one recurring weekly slot of an employee.

    Guarantees:
        - ``day`` is 0..6 (Monday=0).
        - ``start`` / ``end`` are ``HH:MM`` strings, NULL for status shifts.
    """

    __tablename__ = "schedule_shifts"

    restaurant_id: Mapped[UUID] = mapped_column(
        ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False,
    )
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("payroll_employees.id", ondelete="CASCADE"), nullable=False,
    )
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    start: Mapped[str | None] = mapped_column(String(8), nullable=True)
    end: Mapped[str | None] = mapped_column(String(8), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    employee: Mapped[EmployeeModel] = relationship(back_populates="shifts")

    __table_args__ = (
        CheckConstraint("day BETWEEN 0 AND 6", name="day_range"),
        CheckConstraint(
            "(status IS NOT NULL AND status <> '')"
            " OR (start IS NOT NULL AND start <> ''"
            " AND \"end\" IS NOT NULL AND \"end\" <> '')",
            name="worked_or_status",
        ),
        Index("idx_schedule_shift_restaurant", "restaurant_id"),
        Index("idx_schedule_shift_employee_day", "employee_id", "day"),
    )

    def to_dto(self):
        from backoffice_modules.payroll.models import Shift
        return Shift(
            id=self.id,
            employee_id=self.employee_id,
            day=self.day,
            start=self.start,
            end=self.end,
            status=self.status,
        )

    @classmethod
    def from_dto(cls, dto, restaurant_id: UUID, created_by_id: UUID) -> "ShiftModel":
        return cls(
            id=dto.id,
            restaurant_id=restaurant_id,
            employee_id=dto.employee_id,
            day=dto.day,
            start=dto.start,
            end=dto.end,
            status=dto.status,
            created_by_id=created_by_id,
        )
