"""
Casos de uso de la aplicacion.
"""
from .bulk_sync_use_cases import BulkSyncUseCases
from .map_lookup_use_cases import MapLookupUseCases
from .record_sync_use_cases import RecordSyncUseCases

__all__ = ["BulkSyncUseCases", "MapLookupUseCases", "RecordSyncUseCases"]
