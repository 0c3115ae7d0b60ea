"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales del sync de records.
"""
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno (o .env) y proporciona valores por defecto.

    - DATABASE_URL: por defecto un archivo SQLite local (aiosqlite).
    - Los intervalos del scheduler se expresan en minutos (records) y horas (bulk).
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Bhop Records Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Base de datos
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./bot_data.db")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # Feeds externos
    SOURCEJUMP_BASE_URL: str = Field(default="https://www.sourcejump.net")
    FASTDL_TABLE_URL: str = Field(default="https://main.fastdl.me/69.html")
    FASTDL_DOWNLOAD_BASE: str = Field(default="https://main.fastdl.me/h2")
    TAS_SHEET_ID: str = Field(default="1D02pV-VWrJK8M_GVpk434YvfEZbkfUIplEQlOlq0rTc")
    TAS_SHEET_GID: str = Field(default="1663410541")

    # Cliente HTTP
    HTTP_TIMEOUT_S: float = Field(default=30.0)
    HTTP_USER_AGENT: str = Field(default="bhop-records-sync/1.0")

    # Scheduler
    SCHEDULER_ENABLED: bool = Field(default=True)
    RUN_INITIAL_SYNC: bool = Field(default=True)
    RECORDS_SYNC_INTERVAL_MINUTES: int = Field(default=30)
    BULK_SYNC_INTERVAL_HOURS: int = Field(default=6)

    # Busqueda
    SEARCH_LIMIT: int = Field(default=50)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def tas_sheet_csv_url(self) -> str:
        """URL de exportacion CSV de la hoja de TAS."""
        return (
            f"https://docs.google.com/spreadsheets/d/{self.TAS_SHEET_ID}"
            f"/export?format=csv&gid={self.TAS_SHEET_GID}"
        )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Indica si la base de datos configurada es SQLite."""
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


# Instancia global de configuracion
settings = Settings()
