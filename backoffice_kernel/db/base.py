"""
Module: backoffice_kernel.db.base
Responsibility: Declarative base for the back-office ORM models: UUID primary
    keys stored as strings, Decimal columns as Numeric(38, 9), a shared
    constraint naming convention, and the TrackedBase audit columns.
Architecture position: Kernel > DB.  Lowest-level import target in the kernel.
    MUST NOT import from modules, engines, or config.

Invariants enforced:
    - Every model has a uuid4 primary key.
    - Hourly rates and amounts are Numeric, NEVER float.
    - Constraints get deterministic names (``ck_<table>_<name>`` etc.) so
      schema diffs are stable across SQLite and PostgreSQL.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import DateTime, MetaData, Numeric, String, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class UUIDString(TypeDecorator):
    """UUID stored as its canonical 36-character string.

    Strings are accepted on the way in and normalized, so a malformed id
    fails at bind time rather than matching nothing.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, PyUUID):
            value = PyUUID(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return PyUUID(value)


class Base(DeclarativeBase):
    """Declarative base; every table gets a uuid4 ``id``."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        datetime: DateTime(timezone=True),
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )

    def __repr__(self) -> str:
        state = inspect(self)
        ident = state.identity[0] if state.identity else "transient"
        return f"<{type(self).__name__} {ident}>"


class TrackedBase(Base):
    """
    Abstract base recording who created or last changed a row, and when.

    ``created_at``/``updated_at`` come from the database clock;
    ``created_by_id`` is mandatory.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    created_by_id: Mapped[PyUUID] = mapped_column(nullable=False)
    updated_by_id: Mapped[PyUUID | None] = mapped_column(nullable=True)
