"""
Cliente del host FastDL (tabla HTML mapa -> hash).
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from bhop_records.infrastructure.external.fastdl.parser import find_map_hash, parse_fastdl_table
from bhop_records.infrastructure.external.http import get_or_raise

FEED_NAME = "fastdl"


class FastDLClient:
    """Descarga la tabla del host FastDL y extrae los hashes."""

    def __init__(self, http: httpx.AsyncClient, table_url: str = "https://main.fastdl.me/69.html") -> None:
        self._http = http
        self._table_url = table_url

    async def fetch_table(self) -> Dict[str, str]:
        """Obtiene la tabla completa mapa -> hash."""
        html = await self._fetch_html()
        return parse_fastdl_table(html)

    async def fetch_hash(self, map_name: str) -> Optional[str]:
        """Obtiene el hash de un mapa; None si no aparece en la tabla."""
        html = await self._fetch_html()
        return find_map_hash(html, map_name)

    async def _fetch_html(self) -> str:
        response = await get_or_raise(self._http, self._table_url, FEED_NAME)
        return response.text
