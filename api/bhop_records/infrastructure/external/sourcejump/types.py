"""
Modelos de las respuestas JSON de SourceJump.

Se parsean una vez, se consumen y se descartan: nunca se persisten tal cual.
Las claves JSON se comparan sin distinguir mayusculas (la API mezcla
"Map", "map", "timeSeconds"...) y las claves desconocidas se ignoran.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FeedModel(BaseModel):
    """Base para modelos de feed: claves case-insensitive, extras ignorados."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(k).lower(): v for k, v in data.items()}
        return data


class RecordListEntry(FeedModel):
    """
    Fila resumen del feed de WRs recientes (/ajax/records/wrs).

    El nombre de mapa de este feed no es confiable como identidad: se usa
    solo para el chequeo rapido de "ya esta al dia".
    """

    id: int
    map: str
    time: str
    tier: Optional[int] = None
    name: Optional[str] = None
    country: Optional[str] = None
    wr_dif: Optional[str] = Field(default=None, alias="wrdif")
    steam_id: Optional[str] = Field(default=None, alias="steamid")


class RecordMapEntry(FeedModel):
    """Record de un mapa (/ajax/records/map/{map}); el primero es el WR."""

    id: int
    map: str
    name: Optional[str] = None
    hostname: Optional[str] = None
    time: Optional[str] = None
    time_seconds: float = Field(alias="timeseconds")
    tier: Optional[int] = None
    country: Optional[str] = None
    wr_dif: Optional[str] = Field(default=None, alias="wrdif")
    steam_id: Optional[str] = Field(default=None, alias="steamid")
    date: Optional[str] = None
    video: Optional[str] = None
    points: Optional[int] = None


class RecordDetail(FeedModel):
    """
    Detalle de un record (/ajax/records/id/{id}).

    Su nombre de mapa y hostname son los autoritativos para persistir.
    invalid y bad_zones tienen forma libre en la API: se aceptan como
    valores opacos y no se propagan al modelo de mapa.
    """

    id: int
    map: str
    time: str
    name: Optional[str] = None
    hostname: Optional[str] = None
    tier: Optional[int] = None
    country: Optional[str] = None
    avatar: Optional[str] = None
    banned: Optional[int] = None
    steam_id: Optional[str] = Field(default=None, alias="steamid")
    sync: Optional[float] = None
    strafes: Optional[int] = None
    jumps: Optional[int] = None
    date: Optional[str] = None
    ip: Optional[str] = None
    points: Optional[int] = None
    invalid: Any = None
    bad_zones: Any = Field(default=None, alias="badzones")
