"""
Casos de uso para sincronizar WRs recientes de SourceJump.

Flujo por cada entrada del feed de WRs recientes:
1. Estado del mapa segun el nombre del resumen. Si existe y su
   wr_source_record_id coincide con el ID de la entrada -> ya esta al dia.
2. Detalle del record (nombre de mapa y hostname autoritativos).
3. Estado del mapa segun el nombre del detalle.
4. Existe -> update_wr con el ID del detalle como nuevo token.
5. No existe -> hash FastDL (best-effort) y create.

Cada entrada corre en su propia sesion/transaccion: un error de feed o de
base de datos se registra y se pasa a la siguiente, sin abortar el lote.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bhop_records.infrastructure.external.errors import FeedError
from bhop_records.infrastructure.external.fastdl.client import FastDLClient
from bhop_records.infrastructure.external.sourcejump.client import SourceJumpClient
from bhop_records.infrastructure.external.sourcejump.types import RecordListEntry
from bhop_records.infrastructure.repositories.map_repository import MapRepository
from bhop_records.shared.utils.time_codec import is_valid_time, parse_time


class ItemOutcome(str, Enum):
    """Resultado de reconciliar una entrada del feed."""
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordSyncResult:
    total: int
    created: int
    updated: int
    skipped: int
    failed: int


class RecordSyncUseCases:
    """
    Reconciliador del feed de WRs recientes contra el Map State Store.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        sourcejump: SourceJumpClient,
        fastdl: FastDLClient,
    ) -> None:
        self.session_factory = session_factory
        self.sourcejump = sourcejump
        self.fastdl = fastdl

    async def sync_recent_records(self) -> RecordSyncResult:
        """
        Ejecuta una corrida completa sobre el feed de WRs recientes.

        Raises:
            FeedError: si no se pudo obtener la lista de WRs recientes.
        """
        records = await self.sourcejump.fetch_recent_records()
        logger.info(f"Sync de WRs recientes: {len(records)} entradas en el feed")

        outcomes: Counter = Counter()
        for item in records:
            outcomes[await self.process_item(item)] += 1

        result = RecordSyncResult(
            total=len(records),
            created=outcomes[ItemOutcome.CREATED],
            updated=outcomes[ItemOutcome.UPDATED],
            skipped=outcomes[ItemOutcome.SKIPPED],
            failed=outcomes[ItemOutcome.FAILED],
        )
        logger.success(
            f"Sync de WRs completado. creados={result.created}, actualizados={result.updated}, "
            f"omitidos={result.skipped}, fallidos={result.failed}"
        )
        return result

    async def process_item(self, item: RecordListEntry) -> ItemOutcome:
        """
        Reconcilia una entrada en su propia transaccion.
        Nunca lanza errores de feed ni de base de datos: los registra.
        """
        async with self.session_factory() as session:
            try:
                return await self._reconcile(session, item)
            except FeedError as e:
                await session.rollback()
                logger.warning(f"Record {item.id} ({item.map}) omitido, error de feed: {e}")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Record {item.id} ({item.map}) omitido, error de base de datos: {e}")
        return ItemOutcome.FAILED

    async def _reconcile(self, session: AsyncSession, item: RecordListEntry) -> ItemOutcome:
        repository = MapRepository(session)

        state = await repository.get_state(item.map)
        if state.exists and state.source_record_id == item.id:
            logger.debug(f"{item.map}: record {item.id} ya guardado")
            return ItemOutcome.SKIPPED

        detail = await self.sourcejump.fetch_record_detail(item.id)
        if not is_valid_time(parse_time(detail.time)):
            logger.warning(f"Record {detail.id} ({detail.map}) con tiempo invalido '{detail.time}', se omite")
            return ItemOutcome.SKIPPED

        # El nombre del detalle manda: puede diferir del resumen
        real_state = await repository.get_state(detail.map)
        if real_state.exists:
            await repository.update_wr(
                real_state.map_id,
                detail.time,
                detail.name,
                detail.hostname,
                detail.id,
                tier=detail.tier,
            )
            await session.commit()
            logger.info(f"WR actualizado: {detail.map} {detail.time} por {detail.name}")
            return ItemOutcome.UPDATED

        fastdl_hash = await self._lookup_fastdl_hash(detail.map)
        await repository.create(
            detail.map,
            detail.tier,
            detail.time,
            detail.name,
            detail.hostname,
            fastdl_hash=fastdl_hash,
            source_record_id=detail.id,
        )
        await session.commit()
        logger.info(f"Mapa nuevo: {detail.map} con WR {detail.time} por {detail.name}")
        return ItemOutcome.CREATED

    async def _lookup_fastdl_hash(self, map_name: str) -> Optional[str]:
        """Hash FastDL del mapa; un fallo no bloquea la creacion."""
        try:
            return await self.fastdl.fetch_hash(map_name)
        except FeedError as e:
            logger.warning(f"No se pudo obtener hash FastDL para {map_name}: {e}")
            return None
