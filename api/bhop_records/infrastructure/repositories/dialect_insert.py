"""
INSERT con soporte de ON CONFLICT segun el dialecto de la sesion.

SQLite y PostgreSQL exponen on_conflict_do_nothing / on_conflict_do_update
en sus propias construcciones de insert.
"""
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(db: AsyncSession, model):
    """Retorna un insert(model) del dialecto de la conexion de la sesion."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(model)
    if dialect == "sqlite":
        return sqlite_insert(model)
    raise NotImplementedError(f"UPSERT no soportado para el dialecto '{dialect}'")
