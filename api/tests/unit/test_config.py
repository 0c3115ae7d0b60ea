"""
Tests de la configuracion (Settings).
"""
from bhop_records.core.config import Settings


def test_tas_sheet_csv_url_is_built_from_id_and_gid():
    settings = Settings(TAS_SHEET_ID="sheet123", TAS_SHEET_GID="42")

    assert settings.tas_sheet_csv_url == (
        "https://docs.google.com/spreadsheets/d/sheet123/export?format=csv&gid=42"
    )


def test_is_sqlite_follows_database_url():
    assert Settings(DATABASE_URL="sqlite+aiosqlite:///./x.db").is_sqlite is True
    assert Settings(DATABASE_URL="postgresql+asyncpg://u:p@h/db").is_sqlite is False
