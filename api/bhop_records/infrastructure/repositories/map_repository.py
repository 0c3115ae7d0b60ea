"""
Implementación del repositorio de mapas (Map State Store).

Maneja las operaciones de base de datos para MapModel. Cada metodo es una
sentencia (o pocas) sobre la sesion recibida; el caller controla
commit/rollback y ningun metodo reintenta.
"""
from typing import List, Optional, Union

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from bhop_records.domain.entities.map_record import MapDetails, MapState
from bhop_records.infrastructure.database.models import MapModel, ServerModel
from bhop_records.infrastructure.external.sourcejump.types import RecordMapEntry
from bhop_records.infrastructure.repositories.dialect_insert import dialect_insert
from bhop_records.infrastructure.repositories.server_repository import ServerRepository
from bhop_records.shared.utils.time_codec import is_valid_time, parse_time


def _optional_seconds(time_text: Optional[str]) -> Optional[float]:
    """Parsea el texto de tiempo; un tiempo invalido se guarda como None."""
    seconds = parse_time(time_text)
    return seconds if is_valid_time(seconds) else None


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class MapRepository:
    """Repositorio para gestionar mapas en la base de datos."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.servers = ServerRepository(db)

    async def get_state(self, map_name: str) -> MapState:
        """
        Obtiene el estado de deteccion de cambios de un mapa.

        Returns:
            MapState con exists=False si no hay fila para ese nombre.
        """
        result = await self.db.execute(
            select(MapModel.id, MapModel.wr_source_record_id).where(MapModel.name == map_name)
        )
        row = result.first()
        if row is None:
            return MapState.missing()
        return MapState(exists=True, map_id=row.id, source_record_id=row.wr_source_record_id)

    async def get_full_details(self, map_name: str) -> Optional[MapDetails]:
        """
        Obtiene un mapa con los nombres de servidor WR y TAS resueltos.
        """
        wr_server = aliased(ServerModel)
        tas_server = aliased(ServerModel)
        query = (
            select(
                MapModel.id,
                MapModel.name,
                MapModel.tier,
                MapModel.wr_time,
                MapModel.wr_runner,
                MapModel.wr_source_record_id,
                wr_server.name.label("wr_server"),
                MapModel.tas_time,
                MapModel.tas_runner,
                tas_server.name.label("tas_server"),
                MapModel.fastdl_hash,
            )
            .outerjoin(wr_server, MapModel.wr_server_id == wr_server.id)
            .outerjoin(tas_server, MapModel.tas_server_id == tas_server.id)
            .where(MapModel.name == map_name)
        )
        row = (await self.db.execute(query)).first()
        if row is None:
            return None
        return MapDetails(**row._asdict())

    async def create(
        self,
        map_name: str,
        tier: Optional[int],
        wr_time_text: Optional[str],
        runner: Optional[str],
        hostname: Optional[str],
        fastdl_hash: Optional[str] = None,
        source_record_id: Optional[int] = None,
    ) -> int:
        """
        Inserta un mapa nuevo.

        El nombre debe no existir (el caller lo confirma con get_state); si
        existe, el UNIQUE de la tabla hace fallar el flush con IntegrityError
        y no queda nada insertado tras el rollback del caller.

        Returns:
            int: ID de la fila creada
        """
        server_id = await self.servers.resolve(hostname)
        row = MapModel(
            name=map_name,
            tier=tier,
            wr_time=_optional_seconds(wr_time_text),
            wr_runner=_blank_to_none(runner),
            wr_server_id=server_id,
            wr_source_record_id=source_record_id,
            fastdl_hash=_blank_to_none(fastdl_hash),
        )
        self.db.add(row)
        await self.db.flush()
        return row.id

    async def update_wr(
        self,
        map_ref: Union[int, str],
        wr_time_text: Optional[str],
        runner: Optional[str],
        hostname: Optional[str],
        source_record_id: Optional[int],
        tier: Optional[int] = None,
    ) -> int:
        """
        Actualiza el WR de un mapa (por ID si map_ref es int, por nombre si es str).

        No toca campos TAS ni fastdl_hash. El tier solo se actualiza si viene.

        Returns:
            int: filas afectadas (0 si el mapa no existe)
        """
        return await self._apply_wr(
            map_ref,
            wr_time=_optional_seconds(wr_time_text),
            runner=runner,
            hostname=hostname,
            source_record_id=source_record_id,
            tier=tier,
        )

    async def save_map_wr(self, entry: RecordMapEntry, map_name: Optional[str] = None) -> Optional[int]:
        """
        Guarda el WR obtenido del feed por mapa (carga perezosa).

        Usa los segundos numericos del feed directamente. map_name permite
        guardar bajo el nombre ya registrado cuando el feed lo escribe
        distinto. Si el mapa no existe se crea.

        Returns:
            ID del mapa, o None si el tiempo del feed no es finito y >= 0
            (no se escribe nada).
        """
        if not is_valid_time(entry.time_seconds):
            return None

        name = map_name or entry.map
        state = await self.get_state(name)
        if not state.exists:
            server_id = await self.servers.resolve(entry.hostname)
            row = MapModel(
                name=name,
                tier=entry.tier,
                wr_time=entry.time_seconds,
                wr_runner=_blank_to_none(entry.name),
                wr_server_id=server_id,
                wr_source_record_id=entry.id,
            )
            self.db.add(row)
            await self.db.flush()
            return row.id

        await self._apply_wr(
            state.map_id,
            wr_time=entry.time_seconds,
            runner=entry.name,
            hostname=entry.hostname,
            source_record_id=entry.id,
            tier=entry.tier,
        )
        return state.map_id

    async def update_tas(
        self,
        map_name: str,
        tas_time_seconds: float,
        runner: Optional[str],
        server_name: Optional[str],
    ) -> int:
        """
        Actualiza solo los campos TAS de un mapa.

        Returns:
            int: filas afectadas (0 si el mapa no existe)
        """
        server_id = await self.servers.resolve(server_name)
        result = await self.db.execute(
            update(MapModel)
            .where(MapModel.name == map_name)
            .values(
                tas_time=tas_time_seconds,
                tas_runner=_blank_to_none(runner),
                tas_server_id=server_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def upsert_file_hash(self, map_name: str, fastdl_hash: str) -> None:
        """
        Inserta el mapa con su hash FastDL o, si ya existe, actualiza solo el hash.
        """
        stmt = dialect_insert(self.db, MapModel).values(name=map_name, fastdl_hash=fastdl_hash)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={"fastdl_hash": stmt.excluded.fastdl_hash},
        )
        await self.db.execute(stmt)

    async def search(self, term: str, limit: int = 50) -> List[str]:
        """
        Busca nombres de mapa que contengan el termino (sin distinguir mayusculas).

        Los comodines de LIKE en el termino se escapan. Orden alfabetico.
        """
        term = (term or "").strip()
        query = (
            select(MapModel.name)
            .where(MapModel.name.icontains(term, autoescape=True))
            .order_by(MapModel.name)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _apply_wr(
        self,
        map_ref: Union[int, str],
        *,
        wr_time: Optional[float],
        runner: Optional[str],
        hostname: Optional[str],
        source_record_id: Optional[int],
        tier: Optional[int],
    ) -> int:
        server_id = await self.servers.resolve(hostname)
        values = {
            "wr_time": wr_time,
            "wr_runner": _blank_to_none(runner),
            "wr_server_id": server_id,
            "wr_source_record_id": source_record_id,
        }
        if tier is not None:
            values["tier"] = tier

        if isinstance(map_ref, int):
            condition = MapModel.id == map_ref
        else:
            condition = MapModel.name == map_ref

        result = await self.db.execute(
            update(MapModel)
            .where(condition)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
