"""
Script para inicializar la base de datos (crea las tablas si no existen).

Ejecución:
  python scripts/init_db.py
"""
import asyncio
import sys
from pathlib import Path

from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from bhop_records.core.config import settings
from bhop_records.infrastructure.database.session import build_engine, close_db, init_db


async def main():
    """Función principal para inicializar la base de datos."""
    logger.info("Inicializando base de datos...")
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    try:
        await init_db(engine)
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db(engine)


if __name__ == "__main__":
    asyncio.run(main())
