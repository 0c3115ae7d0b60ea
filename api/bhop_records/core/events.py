"""
Manejadores de eventos de inicio y cierre de la aplicacion.

El inicio construye, una sola vez, todo lo que los jobs y endpoints usan:
engine, session factory, cliente HTTP, collectors, casos de uso y scheduler.
Todo queda colgado de app.state; no hay handles globales de base de datos.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from bhop_records.application.services.sync_scheduler import SyncScheduler
from bhop_records.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from bhop_records.application.use_cases.record_sync_use_cases import RecordSyncUseCases
from bhop_records.core.config import Settings
from bhop_records.infrastructure.database.session import (
    build_engine,
    build_session_factory,
    close_db,
    init_db,
)
from bhop_records.infrastructure.external.fastdl.client import FastDLClient
from bhop_records.infrastructure.external.http import build_http_client
from bhop_records.infrastructure.external.sourcejump.client import SourceJumpClient
from bhop_records.infrastructure.external.tas_sheet.client import TASSheetClient


async def startup(app: FastAPI) -> None:
    """Inicializa recursos al inicio de la aplicacion."""
    settings: Settings = app.state.settings
    try:
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Entorno: {settings.ENVIRONMENT}")

        # Configurar logging a archivo
        logger.add(
            settings.LOG_FILE,
            rotation="500 MB",
            retention="10 days",
            level=settings.LOG_LEVEL
        )

        engine = build_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        await init_db(engine)
        logger.info("Base de datos inicializada")

        session_factory = build_session_factory(engine)
        http_client = build_http_client(settings)

        sourcejump = SourceJumpClient(http_client, settings.SOURCEJUMP_BASE_URL)
        fastdl = FastDLClient(http_client, settings.FASTDL_TABLE_URL)
        tas_sheet = TASSheetClient(http_client, settings.tas_sheet_csv_url)

        record_sync = RecordSyncUseCases(session_factory, sourcejump, fastdl)
        bulk_sync = BulkSyncUseCases(session_factory, fastdl, tas_sheet)

        app.state.engine = engine
        app.state.session_factory = session_factory
        app.state.http_client = http_client
        app.state.sourcejump = sourcejump
        app.state.record_sync = record_sync
        app.state.bulk_sync = bulk_sync
        app.state.scheduler = None

        if settings.SCHEDULER_ENABLED:
            scheduler = SyncScheduler(
                record_sync,
                bulk_sync,
                records_interval_minutes=settings.RECORDS_SYNC_INTERVAL_MINUTES,
                bulk_interval_hours=settings.BULK_SYNC_INTERVAL_HOURS,
                run_initial_sync=settings.RUN_INITIAL_SYNC,
            )
            scheduler.start()
            app.state.scheduler = scheduler
        else:
            logger.warning("CONFIG: SCHEDULER_ENABLED=false, los syncs solo corren bajo demanda")

        logger.success("Aplicacion iniciada correctamente")

    except Exception as e:
        logger.error(f"Error durante startup: {e}")
        logger.exception("Detalle del error:")
        raise


async def shutdown(app: FastAPI) -> None:
    """Libera recursos al cerrar la aplicacion."""
    logger.info("Cerrando aplicacion...")

    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        await scheduler.shutdown()

    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()
        logger.info("Cliente HTTP cerrado")

    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await close_db(engine)
        logger.info("Conexiones de base de datos cerradas")

    logger.success("Aplicacion cerrada correctamente")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ciclo de vida de la aplicacion: startup -> requests -> shutdown."""
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)
