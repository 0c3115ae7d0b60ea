"""
DTOs relacionados con mapas.
Definen la estructura de datos que se entrega a los consumidores de presentacion.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class MapDetailsDTO(BaseModel):
    """
    DTO con el estado completo de un mapa: WR, TAS y enlace FastDL.
    Los *_display vienen ya formateados (H:MM:SS.mmm / M:SS.mmm / S.mmm).
    """
    name: str = Field(..., description="Nombre del mapa")
    tier: Optional[int] = Field(None, description="Dificultad del mapa")

    wr_time: Optional[float] = Field(None, description="Tiempo WR en segundos")
    wr_time_display: Optional[str] = None
    wr_runner: Optional[str] = None
    wr_server: Optional[str] = None

    tas_time: Optional[float] = Field(None, description="Tiempo TAS en segundos")
    tas_time_display: Optional[str] = None
    tas_runner: Optional[str] = None
    tas_server: Optional[str] = None

    fastdl_hash: Optional[str] = None
    fastdl_url: Optional[str] = Field(None, description="Descarga .bsp.bz2 desde FastDL")


class MapSearchResultDTO(BaseModel):
    """Resultado de una busqueda de mapas por nombre."""
    query: str
    results: List[str]
