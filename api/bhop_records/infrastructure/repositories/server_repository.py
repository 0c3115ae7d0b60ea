"""
Repositorio de servidores (Server Registry).

Interna hostnames de servidores en IDs estables. Un nombre no vacio tiene
como maximo un ID asociado, incluso con resoluciones concurrentes.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bhop_records.infrastructure.database.models import ServerModel
from bhop_records.infrastructure.repositories.dialect_insert import dialect_insert


class ServerRepository:
    """Repositorio para resolver servidores por nombre."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, name: Optional[str]) -> Optional[int]:
        """
        Obtiene el ID del servidor, creandolo si no existe.

        - Nombre vacio o en blanco -> None (sin servidor).
        - INSERT ... ON CONFLICT DO NOTHING seguido de una relectura
          obligatoria: si otra transaccion gano la carrera se usa su fila.

        Errores de base de datos se propagan, sin reintentos.
        """
        if not name or not name.strip():
            return None
        name = name.strip()

        server_id = await self._get_id(name)
        if server_id is not None:
            return server_id

        stmt = (
            dialect_insert(self.db, ServerModel)
            .values(name=name)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        await self.db.execute(stmt)

        result = await self.db.execute(
            select(ServerModel.id).where(ServerModel.name == name)
        )
        return result.scalar_one()

    async def _get_id(self, name: str) -> Optional[int]:
        result = await self.db.execute(
            select(ServerModel.id).where(ServerModel.name == name)
        )
        return result.scalar_one_or_none()
