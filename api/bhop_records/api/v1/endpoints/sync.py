"""
Endpoints para disparar sincronizaciones bajo demanda.
Los mismos casos de uso corren periodicamente desde el scheduler.
"""
from fastapi import APIRouter, Depends, status
from loguru import logger

from bhop_records.application.dto.sync_dto import (
    BulkSyncResultDTO,
    RecordSyncResultDTO,
    TASSyncResultDTO,
)
from bhop_records.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from bhop_records.application.use_cases.record_sync_use_cases import RecordSyncUseCases
from bhop_records.api.v1.dependencies.use_case_deps import (
    get_bulk_sync_use_cases,
    get_record_sync_use_cases,
)
from bhop_records.infrastructure.external.errors import FeedError
from bhop_records.shared.exceptions.domain import UpstreamFeedException

router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "/records",
    response_model=RecordSyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar WRs recientes de SourceJump"
)
async def sync_records(
    use_cases: RecordSyncUseCases = Depends(get_record_sync_use_cases),
) -> RecordSyncResultDTO:
    """
    Ejecuta una corrida del reconciliador de WRs recientes.

    Responde 502 si no se pudo obtener la lista de WRs.
    """
    logger.info("Sync de WRs recientes solicitado desde API")
    try:
        result = await use_cases.sync_recent_records()
    except FeedError as e:
        raise UpstreamFeedException("sourcejump", str(e)) from e

    return RecordSyncResultDTO(
        total=result.total,
        created=result.created,
        updated=result.updated,
        skipped=result.skipped,
        failed=result.failed,
    )


@router.post(
    "/bulk",
    response_model=BulkSyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar hashes FastDL y tiempos TAS"
)
async def sync_bulk(
    use_cases: BulkSyncUseCases = Depends(get_bulk_sync_use_cases),
) -> BulkSyncResultDTO:
    """
    Ejecuta FastDL (transaccional) y luego TAS (fila a fila).
    """
    logger.info("Sync FastDL/TAS solicitado desde API")
    result = await use_cases.run_all()

    tas = None
    if result.tas is not None:
        tas = TASSyncResultDTO(
            applied=result.tas.applied,
            skipped=result.tas.skipped,
            failed=result.tas.failed,
        )

    return BulkSyncResultDTO(
        fastdl_upserted=result.fastdl_upserted,
        tas=tas,
        success=result.fastdl_upserted is not None and tas is not None,
    )
