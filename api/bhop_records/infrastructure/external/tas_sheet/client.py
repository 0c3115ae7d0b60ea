"""
Cliente de la hoja de TAS (export CSV de Google Sheets).

Columnas esperadas: mapa, tiempo, runner, servidor. La primera fila es
cabecera; columnas extra se ignoran mas adelante, en el job de TAS.
"""
from __future__ import annotations

import csv
import io
from typing import List

import httpx

from bhop_records.infrastructure.external.errors import FeedParseError
from bhop_records.infrastructure.external.http import get_or_raise

FEED_NAME = "tas_sheet"


class TASSheetClient:
    """Descarga y parsea el CSV de TAS."""

    def __init__(self, http: httpx.AsyncClient, csv_url: str) -> None:
        self._http = http
        self._csv_url = csv_url

    async def fetch_rows(self) -> List[List[str]]:
        """
        Retorna todas las filas del CSV (cabecera incluida).
        """
        response = await get_or_raise(self._http, self._csv_url, FEED_NAME)
        try:
            return list(csv.reader(io.StringIO(response.text)))
        except csv.Error as e:
            raise FeedParseError(f"{FEED_NAME}: CSV invalido: {e}") from e
