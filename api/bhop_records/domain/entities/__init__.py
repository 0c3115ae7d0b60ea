"""
Entidades del dominio.
"""
from bhop_records.domain.entities.map_record import MapDetails, MapState

__all__ = [
    "MapDetails",
    "MapState",
]
