"""
Scheduler de sincronizaciones periodicas.

Dos jobs independientes sobre un AsyncIOScheduler:
- recent_records_sync: WRs recientes de SourceJump (cadencia corta).
- bulk_sync: hashes FastDL + tiempos TAS (cadencia larga).

Cada job registra su propio error y la siguiente ejecucion empieza de cero.
Un mismo job no se solapa consigo mismo (max_instances=1); los dos jobs
si pueden correr a la vez.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from bhop_records.application.use_cases.bulk_sync_use_cases import BulkSyncResult, BulkSyncUseCases
from bhop_records.application.use_cases.record_sync_use_cases import RecordSyncResult, RecordSyncUseCases


class SyncScheduler:
    """
    Dueño de los dos jobs periodicos. Se construye una vez al inicio del
    proceso con referencias explicitas a los casos de uso.
    """

    RECORDS_JOB_ID = "recent_records_sync"
    BULK_JOB_ID = "bulk_sync"

    def __init__(
        self,
        record_sync: RecordSyncUseCases,
        bulk_sync: BulkSyncUseCases,
        *,
        records_interval_minutes: int = 30,
        bulk_interval_hours: int = 6,
        run_initial_sync: bool = True,
        scheduler: Optional[AsyncIOScheduler] = None,
    ) -> None:
        self._record_sync = record_sync
        self._bulk_sync = bulk_sync
        self._records_interval_minutes = records_interval_minutes
        self._bulk_interval_hours = bulk_interval_hours
        self._run_initial_sync = run_initial_sync
        self._scheduler = scheduler or AsyncIOScheduler(timezone=timezone.utc)

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        """Registra los jobs y arranca el scheduler (requiere event loop activo)."""
        self._scheduler.add_job(
            self.run_records_sync,
            trigger=IntervalTrigger(minutes=self._records_interval_minutes),
            id=self.RECORDS_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )

        bulk_kwargs: Dict[str, Any] = {}
        if self._run_initial_sync:
            bulk_kwargs["next_run_time"] = datetime.now(timezone.utc)

        self._scheduler.add_job(
            self.run_bulk_sync,
            trigger=IntervalTrigger(hours=self._bulk_interval_hours),
            id=self.BULK_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
            **bulk_kwargs,
        )

        self._scheduler.start()
        logger.info(
            f"Scheduler iniciado: records cada {self._records_interval_minutes} min, "
            f"FastDL/TAS cada {self._bulk_interval_hours} h"
        )

    async def shutdown(self) -> None:
        """
        Detiene el scheduler sin esperar a los jobs en curso.

        AsyncIOScheduler.shutdown se ejecuta via call_soon_threadsafe; se cede
        el loop una vez para que el scheduler quede detenido al retornar.
        """
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            await asyncio.sleep(0)
            logger.info("Scheduler detenido")

    async def run_records_sync(self) -> Optional[RecordSyncResult]:
        """Job de WRs recientes."""
        logger.info("Sincronizando WRs recientes...")
        try:
            return await self._record_sync.sync_recent_records()
        except Exception as e:
            logger.error(f"Error sincronizando WRs recientes: {e}")
            return None

    async def run_bulk_sync(self) -> Optional[BulkSyncResult]:
        """Job de FastDL + TAS."""
        logger.info("Sincronizando FastDL y TAS...")
        try:
            return await self._bulk_sync.run_all()
        except Exception as e:
            logger.error(f"Error en sync FastDL/TAS: {e}")
            return None
