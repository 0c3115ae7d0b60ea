"""
DTOs de resultados de sincronizacion.
"""
from typing import Optional

from pydantic import BaseModel


class RecordSyncResultDTO(BaseModel):
    """Resultado de una corrida del sync de WRs recientes."""
    total: int
    created: int
    updated: int
    skipped: int
    failed: int


class TASSyncResultDTO(BaseModel):
    applied: int
    skipped: int
    failed: int


class BulkSyncResultDTO(BaseModel):
    """Resultado de FastDL + TAS. None indica que esa parte fallo."""
    fastdl_upserted: Optional[int] = None
    tas: Optional[TASSyncResultDTO] = None
    success: bool
