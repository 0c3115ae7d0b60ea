"""
Tests del registro de servidores: idempotencia y carrera de insercion.
"""
import pytest
from sqlalchemy import func, select

from bhop_records.infrastructure.database.models import ServerModel
from bhop_records.infrastructure.repositories.server_repository import ServerRepository


async def _server_count(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(ServerModel))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_resolve_is_idempotent(db_session):
    repo = ServerRepository(db_session)

    first = await repo.resolve("ServerA")
    second = await repo.resolve("ServerA")

    assert first is not None
    assert first == second
    assert await _server_count(db_session) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("name", [None, "", "   "])
async def test_resolve_blank_name_returns_none(db_session, name):
    repo = ServerRepository(db_session)

    assert await repo.resolve(name) is None
    assert await _server_count(db_session) == 0


@pytest.mark.asyncio
async def test_resolve_distinct_names_get_distinct_ids(db_session):
    repo = ServerRepository(db_session)

    eu = await repo.resolve("EU-1")
    na = await repo.resolve("NA-1")

    assert eu != na
    assert await _server_count(db_session) == 2


@pytest.mark.asyncio
async def test_resolve_rereads_when_another_writer_won(db_session, session_factory, monkeypatch):
    """
    Simula la carrera: la primera lectura no ve la fila, pero otra
    transaccion ya la inserto. El INSERT se ignora y se relee la fila ganadora.
    """
    async with session_factory() as other:
        winner = await ServerRepository(other).resolve("EU-1")
        await other.commit()

    repo = ServerRepository(db_session)

    async def stale_lookup(name):
        return None

    monkeypatch.setattr(repo, "_get_id", stale_lookup)

    assert await repo.resolve("EU-1") == winner
    assert await _server_count(db_session) == 1
