"""
Module ORM Registry (``backoffice_modules._orm_registry``).

Ensures every module-level SQLAlchemy ORM model is imported so that
``Base.metadata`` contains its table definition before tables are created.
Called by ``backoffice_kernel.db.engine.create_tables``.
"""


def import_all_orm_models() -> None:
    """Import every ``backoffice_modules.*.orm`` module (idempotent)."""
    import backoffice_modules.payroll.orm  # noqa: F401
