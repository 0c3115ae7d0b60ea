"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .map_dto import MapDetailsDTO, MapSearchResultDTO
from .sync_dto import BulkSyncResultDTO, RecordSyncResultDTO, TASSyncResultDTO

__all__ = [
    "MapDetailsDTO",
    "MapSearchResultDTO",
    "RecordSyncResultDTO",
    "TASSyncResultDTO",
    "BulkSyncResultDTO",
]
