"""
Casos de uso de consulta de mapas.
Contiene la logica para buscar mapas y obtener su detalle, incluida la
carga perezosa del WR cuando el mapa todavia no tiene tiempo guardado.
"""
from dataclasses import replace
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bhop_records.application.dto.map_dto import MapDetailsDTO
from bhop_records.domain.entities.map_record import MapDetails
from bhop_records.infrastructure.external.errors import FeedError
from bhop_records.infrastructure.external.sourcejump.client import SourceJumpClient
from bhop_records.infrastructure.repositories.map_repository import MapRepository
from bhop_records.shared.exceptions.domain import EntityNotFoundException
from bhop_records.shared.utils.time_codec import format_seconds, is_valid_time


class MapLookupUseCases:
    """
    Casos de uso para consultar mapas.
    """

    def __init__(
        self,
        db: AsyncSession,
        sourcejump: SourceJumpClient,
        *,
        search_limit: int = 50,
        fastdl_download_base: str = "https://main.fastdl.me/h2",
    ):
        self.db = db
        self.repository = MapRepository(db)
        self.sourcejump = sourcejump
        self.search_limit = search_limit
        self.fastdl_download_base = fastdl_download_base.rstrip("/")

    async def search_maps(self, query: str) -> List[str]:
        """
        Busca mapas cuyo nombre contenga el texto.

        Returns:
            List[str]: nombres en orden alfabetico, hasta search_limit
        """
        return await self.repository.search(query, self.search_limit)

    async def get_map_details(self, map_name: str) -> MapDetailsDTO:
        """
        Obtiene el detalle de un mapa.

        Raises:
            EntityNotFoundException: Si el mapa no existe
        """
        details = await self.repository.get_full_details(map_name.strip())
        if details is None:
            raise EntityNotFoundException("Map", map_name)

        details = await self.ensure_map_data(details)
        return self._to_dto(details)

    async def ensure_map_data(self, details: MapDetails) -> MapDetails:
        """
        Si el mapa no tiene WR guardado, lo pide una vez al feed por mapa,
        lo persiste y lo relee (para traer el nombre del servidor recien creado).

        Un fallo del feed o de la base de datos no es fatal: se retorna lo
        que haya.
        """
        if details.has_wr:
            return details

        logger.info(f"Carga perezosa del WR para: {details.name}")
        try:
            wr = await self.sourcejump.fetch_map_wr(details.name)
        except FeedError as e:
            logger.warning(f"No se pudo cargar el WR de {details.name}: {e}")
            return details

        if wr is None:
            logger.info(f"SourceJump no tiene records para {details.name}")
            return details

        if not is_valid_time(wr.time_seconds):
            logger.warning(f"WR de {details.name} con tiempo invalido ({wr.time_seconds}), se ignora")
            return details

        try:
            await self.repository.save_map_wr(wr, map_name=details.name)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"No se pudo guardar el WR de {details.name}: {e}")
            return replace(details, wr_time=wr.time_seconds, wr_runner=wr.name)

        refreshed: Optional[MapDetails] = await self.repository.get_full_details(details.name)
        return refreshed or details

    def _to_dto(self, details: MapDetails) -> MapDetailsDTO:
        fastdl_url = None
        if details.fastdl_hash:
            fastdl_url = f"{self.fastdl_download_base}/{details.fastdl_hash}/{details.name}.bsp.bz2"

        return MapDetailsDTO(
            name=details.name,
            tier=details.tier,
            wr_time=details.wr_time,
            wr_time_display=_display(details.wr_time),
            wr_runner=details.wr_runner,
            wr_server=details.wr_server,
            tas_time=details.tas_time,
            tas_time_display=_display(details.tas_time),
            tas_runner=details.tas_runner,
            tas_server=details.tas_server,
            fastdl_hash=details.fastdl_hash,
            fastdl_url=fastdl_url,
        )


def _display(seconds: Optional[float]) -> Optional[str]:
    return format_seconds(seconds) if seconds is not None else None
