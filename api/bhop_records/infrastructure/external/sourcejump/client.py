"""
Cliente de la API JSON de SourceJump.

Endpoints usados:
- /ajax/records/wrs           -> WRs recientes (lista resumen)
- /ajax/records/map/{map}     -> records de un mapa (el primero es el WR)
- /ajax/records/id/{id}       -> detalle de un record

Sin logica de negocio: solo transporte y parseo.
"""
from __future__ import annotations

from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from bhop_records.infrastructure.external.errors import FeedParseError
from bhop_records.infrastructure.external.http import get_or_raise
from bhop_records.infrastructure.external.sourcejump.types import (
    RecordDetail,
    RecordListEntry,
    RecordMapEntry,
)

T = TypeVar("T", bound=BaseModel)

FEED_NAME = "sourcejump"


class SourceJumpClient:
    """
    Cliente async de SourceJump sobre un httpx.AsyncClient compartido.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str = "https://www.sourcejump.net") -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def fetch_recent_records(self) -> List[RecordListEntry]:
        """Obtiene la lista de WRs recientes, en el orden del feed."""
        payload = await self._get_json(f"{self._base_url}/ajax/records/wrs")
        return self._parse_list(payload, RecordListEntry)

    async def fetch_map_records(self, map_name: str) -> List[RecordMapEntry]:
        """Obtiene los records de un mapa."""
        url = f"{self._base_url}/ajax/records/map/{quote(map_name, safe='')}"
        payload = await self._get_json(url)
        return self._parse_list(payload, RecordMapEntry)

    async def fetch_map_wr(self, map_name: str) -> Optional[RecordMapEntry]:
        """
        Obtiene el WR de un mapa (primer record del feed).

        Returns:
            None si el feed no tiene records para el mapa.
        """
        records = await self.fetch_map_records(map_name)
        return records[0] if records else None

    async def fetch_record_detail(self, record_id: int) -> RecordDetail:
        """Obtiene el detalle de un record por su ID."""
        payload = await self._get_json(f"{self._base_url}/ajax/records/id/{record_id}")
        if not isinstance(payload, dict):
            raise FeedParseError(f"{FEED_NAME}: detalle {record_id} no es un objeto JSON")
        try:
            return RecordDetail.model_validate(payload)
        except ValidationError as e:
            raise FeedParseError(f"{FEED_NAME}: detalle {record_id} invalido: {e}") from e

    async def _get_json(self, url: str) -> Any:
        response = await get_or_raise(self._http, url, FEED_NAME)
        try:
            return response.json()
        except ValueError as e:
            raise FeedParseError(f"{FEED_NAME}: respuesta no es JSON en {url}") from e

    @staticmethod
    def _parse_list(payload: Any, model: Type[T]) -> List[T]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise FeedParseError(f"{FEED_NAME}: se esperaba una lista JSON")
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as e:
            raise FeedParseError(f"{FEED_NAME}: entrada invalida en lista: {e}") from e
