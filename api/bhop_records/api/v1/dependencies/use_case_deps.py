"""
Dependencias para inyeccion de casos de uso.

Los casos de uso de sync son instancias unicas creadas al inicio (app.state);
los de consulta se crean por request con su propia sesion.
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bhop_records.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from bhop_records.application.use_cases.map_lookup_use_cases import MapLookupUseCases
from bhop_records.application.use_cases.record_sync_use_cases import RecordSyncUseCases
from bhop_records.infrastructure.database.session import get_db


def get_map_lookup_use_cases(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> MapLookupUseCases:
    """
    Dependencia para obtener los casos de uso de consulta de mapas.

    Args:
        request: Request actual (para leer app.state)
        db: Sesion de base de datos

    Returns:
        MapLookupUseCases: Instancia ligada a la sesion del request
    """
    settings = request.app.state.settings
    return MapLookupUseCases(
        db,
        request.app.state.sourcejump,
        search_limit=settings.SEARCH_LIMIT,
        fastdl_download_base=settings.FASTDL_DOWNLOAD_BASE,
    )


def get_record_sync_use_cases(request: Request) -> RecordSyncUseCases:
    """Dependencia para el reconciliador de WRs recientes."""
    return request.app.state.record_sync


def get_bulk_sync_use_cases(request: Request) -> BulkSyncUseCases:
    """Dependencia para los jobs masivos FastDL/TAS."""
    return request.app.state.bulk_sync
