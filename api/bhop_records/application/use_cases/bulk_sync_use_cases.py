"""
Casos de uso de sincronizacion masiva (FastDL y TAS).

- FastDL: reemplazo completo de hashes en UNA transaccion. Si algo falla a
  mitad de camino se hace rollback de todo: una tabla de hashes a medio
  actualizar no se puede detectar despues.
- TAS: cada fila es independiente e idempotente; una fila mala se registra
  y el resto sigue.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bhop_records.infrastructure.external.errors import FeedError
from bhop_records.infrastructure.external.fastdl.client import FastDLClient
from bhop_records.infrastructure.external.tas_sheet.client import TASSheetClient
from bhop_records.infrastructure.repositories.map_repository import MapRepository
from bhop_records.shared.utils.time_codec import is_valid_time, parse_time

# Columnas minimas de una fila TAS: mapa y tiempo
TAS_MIN_COLUMNS = 2


@dataclass(frozen=True)
class TASSyncResult:
    applied: int
    skipped: int
    failed: int


@dataclass(frozen=True)
class BulkSyncResult:
    """Resultado combinado; None en la parte que fallo."""
    fastdl_upserted: Optional[int]
    tas: Optional[TASSyncResult]


class BulkSyncUseCases:
    """Jobs masivos: hashes FastDL y tiempos TAS."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        fastdl: FastDLClient,
        tas_sheet: TASSheetClient,
    ) -> None:
        self.session_factory = session_factory
        self.fastdl = fastdl
        self.tas_sheet = tas_sheet

    async def sync_fastdl(self) -> int:
        """
        Upsert de todos los hashes FastDL en una sola transaccion.

        Returns:
            int: cantidad de mapas upserted

        Raises:
            FeedError / SQLAlchemyError: el lote completo queda sin aplicar.
        """
        table = await self.fastdl.fetch_table()
        if not table:
            logger.warning("Tabla FastDL vacia o sin filas reconocibles; no se aplica nada")
            return 0

        async with self.session_factory() as session:
            async with session.begin():
                repository = MapRepository(session)
                for map_name, fastdl_hash in table.items():
                    await repository.upsert_file_hash(map_name, fastdl_hash)

        logger.success(f"Sync FastDL completado: {len(table)} hashes")
        return len(table)

    async def sync_tas(self) -> TASSyncResult:
        """
        Aplica los tiempos TAS de la hoja, fila por fila.

        Se omiten: la cabecera, filas con menos de mapa+tiempo, filas sin
        nombre de mapa, tiempos invalidos y mapas que no existen.

        Raises:
            FeedError: si no se pudo descargar/parsear el CSV.
        """
        rows = await self.tas_sheet.fetch_rows()
        applied = skipped = failed = 0

        for row in rows[1:]:
            if len(row) < TAS_MIN_COLUMNS:
                skipped += 1
                continue

            map_name = row[0].strip()
            time_text = row[1].strip()
            runner = _optional_column(row, 2)
            server = _optional_column(row, 3)

            if not map_name:
                skipped += 1
                continue

            tas_time = parse_time(time_text)
            if not is_valid_time(tas_time):
                logger.debug(f"TAS {map_name}: tiempo invalido '{time_text}', se omite")
                skipped += 1
                continue

            async with self.session_factory() as session:
                try:
                    affected = await MapRepository(session).update_tas(map_name, tas_time, runner, server)
                    await session.commit()
                except SQLAlchemyError as e:
                    await session.rollback()
                    logger.error(f"No se pudo actualizar TAS de {map_name}: {e}")
                    failed += 1
                    continue

            if affected:
                applied += 1
            else:
                logger.debug(f"TAS {map_name}: mapa no registrado")
                skipped += 1

        result = TASSyncResult(applied=applied, skipped=skipped, failed=failed)
        logger.success(f"Sync TAS completado. aplicados={applied}, omitidos={skipped}, fallidos={failed}")
        return result

    async def run_all(self) -> BulkSyncResult:
        """
        FastDL y luego TAS. Cada parte registra su propio error: un fallo de
        FastDL no impide el pase de TAS.
        """
        fastdl_upserted: Optional[int] = None
        tas: Optional[TASSyncResult] = None

        try:
            fastdl_upserted = await self.sync_fastdl()
        except (FeedError, SQLAlchemyError) as e:
            logger.error(f"Error sincronizando FastDL: {e}")

        try:
            tas = await self.sync_tas()
        except (FeedError, SQLAlchemyError) as e:
            logger.error(f"Error sincronizando TAS: {e}")

        return BulkSyncResult(fastdl_upserted=fastdl_upserted, tas=tas)


def _optional_column(row: List[str], index: int) -> Optional[str]:
    if len(row) <= index:
        return None
    value = row[index].strip()
    return value or None
