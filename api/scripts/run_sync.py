"""
CLI: ejecuta una corrida de sincronización sin levantar el API.

Uso recomendado:
  - Ejecutar como job (cron/systemd timer) cuando SCHEDULER_ENABLED=false.
  - Útil también para poblar la base de datos la primera vez.

Ejecución:
  python scripts/run_sync.py              # records + FastDL/TAS
  python scripts/run_sync.py --records    # solo WRs recientes
  python scripts/run_sync.py --bulk       # solo FastDL + TAS

Código de salida 1 si alguna de las partes solicitadas falló.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)

from bhop_records.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from bhop_records.application.use_cases.record_sync_use_cases import RecordSyncUseCases
from bhop_records.core.config import Settings
from bhop_records.infrastructure.database.session import (
    build_engine,
    build_session_factory,
    close_db,
    init_db,
)
from bhop_records.infrastructure.external.errors import FeedError
from bhop_records.infrastructure.external.fastdl.client import FastDLClient
from bhop_records.infrastructure.external.http import build_http_client
from bhop_records.infrastructure.external.sourcejump.client import SourceJumpClient
from bhop_records.infrastructure.external.tas_sheet.client import TASSheetClient


async def run(run_records: bool, run_bulk: bool) -> int:
    settings = Settings()
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    http_client = build_http_client(settings)
    ok = True

    try:
        await init_db(engine)
        session_factory = build_session_factory(engine)
        fastdl = FastDLClient(http_client, settings.FASTDL_TABLE_URL)

        if run_bulk:
            bulk = BulkSyncUseCases(
                session_factory,
                fastdl,
                TASSheetClient(http_client, settings.tas_sheet_csv_url),
            )
            result = await bulk.run_all()
            logger.info(f"FastDL/TAS: fastdl_upserted={result.fastdl_upserted}, tas={result.tas}")
            ok = ok and result.fastdl_upserted is not None and result.tas is not None

        if run_records:
            records = RecordSyncUseCases(
                session_factory,
                SourceJumpClient(http_client, settings.SOURCEJUMP_BASE_URL),
                fastdl,
            )
            try:
                summary = await records.sync_recent_records()
                logger.info(
                    f"Records: total={summary.total}, created={summary.created}, "
                    f"updated={summary.updated}, skipped={summary.skipped}, failed={summary.failed}"
                )
            except FeedError as e:
                logger.error(f"No se pudo obtener la lista de WRs: {e}")
                ok = False
    finally:
        await http_client.aclose()
        await close_db(engine)

    return 0 if ok else 1


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--records",
        action="store_true",
        help="Solo sincroniza los WRs recientes de SourceJump.",
    )
    parser.add_argument(
        "--bulk",
        action="store_true",
        help="Solo sincroniza hashes FastDL y tiempos TAS.",
    )
    args = parser.parse_args()

    # Sin flags se ejecuta todo
    run_all = not args.records and not args.bulk
    return asyncio.run(run(args.records or run_all, args.bulk or run_all))


if __name__ == "__main__":
    raise SystemExit(main())
