"""
Entidades de lectura del Map State Store.

Son valores inmutables construidos a partir de filas de la base de datos;
nunca se persisten tal cual.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MapState:
    """
    Estado minimo de un mapa para deteccion de cambios.

    source_record_id es el ID del record de SourceJump guardado con el WR
    actual (None si nunca se guardo uno).
    """

    exists: bool
    map_id: Optional[int] = None
    source_record_id: Optional[int] = None

    @classmethod
    def missing(cls) -> "MapState":
        return cls(exists=False)


@dataclass(frozen=True)
class MapDetails:
    """
    Vista completa de un mapa con los nombres de servidor ya resueltos
    (no solo los IDs), lista para presentacion.
    """

    id: int
    name: str
    tier: Optional[int]
    wr_time: Optional[float]
    wr_runner: Optional[str]
    wr_source_record_id: Optional[int]
    wr_server: Optional[str]
    tas_time: Optional[float]
    tas_runner: Optional[str]
    tas_server: Optional[str]
    fastdl_hash: Optional[str]

    @property
    def has_wr(self) -> bool:
        return self.wr_time is not None
