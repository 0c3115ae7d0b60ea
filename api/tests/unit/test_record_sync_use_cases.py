"""
Tests del reconciliador de WRs recientes (RecordSyncUseCases).
"""
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from bhop_records.application.use_cases.record_sync_use_cases import (
    ItemOutcome,
    RecordSyncUseCases,
)
from bhop_records.infrastructure.database.models import MapModel, ServerModel
from bhop_records.infrastructure.external.errors import FeedTransportError
from bhop_records.infrastructure.external.sourcejump.types import RecordDetail, RecordListEntry
from bhop_records.infrastructure.repositories.map_repository import MapRepository


def _entry(record_id: int, map_name: str, time: str = "1:30.000") -> RecordListEntry:
    return RecordListEntry(id=record_id, map=map_name, time=time)


def _detail(record_id: int, map_name: str, time: str = "1:30.000", hostname: str = "EU-1", **extra) -> RecordDetail:
    return RecordDetail(id=record_id, map=map_name, time=time, hostname=hostname, name="Alice", **extra)


def _build(session_factory, records=(), details=None, fastdl_hash=None):
    sourcejump = AsyncMock()
    sourcejump.fetch_recent_records.return_value = list(records)
    details = details or {}
    sourcejump.fetch_record_detail.side_effect = lambda record_id: details[record_id]

    fastdl = AsyncMock()
    fastdl.fetch_hash.return_value = fastdl_hash
    return RecordSyncUseCases(session_factory, sourcejump, fastdl), sourcejump, fastdl


def _spy(monkeypatch, method_name: str) -> list:
    calls = []
    original = getattr(MapRepository, method_name)

    async def spy(self, *args, **kwargs):
        calls.append((args, kwargs))
        return await original(self, *args, **kwargs)

    monkeypatch.setattr(MapRepository, method_name, spy)
    return calls


async def _seed(session_factory, name, record_id, time="2:00.000"):
    async with session_factory() as session:
        await MapRepository(session).create(name, 1, time, "Old", "EU-1", source_record_id=record_id)
        await session.commit()


@pytest.mark.asyncio
async def test_end_to_end_new_map_is_created(session_factory, monkeypatch):
    creates = _spy(monkeypatch, "create")
    use_cases, _, fastdl = _build(
        session_factory,
        records=[_entry(5, "surf_test")],
        details={5: _detail(5, "surf_test")},
        fastdl_hash="c0ffee",
    )

    result = await use_cases.sync_recent_records()

    assert result.total == 1
    assert result.created == 1
    assert len(creates) == 1
    fastdl.fetch_hash.assert_awaited_once_with("surf_test")

    async with session_factory() as session:
        details = await MapRepository(session).get_full_details("surf_test")
        server_count = (await session.execute(select(func.count()).select_from(ServerModel))).scalar_one()

    assert details.wr_time == pytest.approx(90.0)
    assert details.wr_server == "EU-1"
    assert details.wr_source_record_id == 5
    assert details.fastdl_hash == "c0ffee"
    assert server_count == 1


@pytest.mark.asyncio
async def test_known_token_is_skipped_without_mutations(session_factory, monkeypatch):
    await _seed(session_factory, "bhop_same", 42)
    creates = _spy(monkeypatch, "create")
    updates = _spy(monkeypatch, "update_wr")
    use_cases, sourcejump, _ = _build(session_factory, records=[_entry(42, "bhop_same")])

    result = await use_cases.sync_recent_records()

    assert result.skipped == 1
    assert creates == []
    assert updates == []
    sourcejump.fetch_record_detail.assert_not_awaited()


@pytest.mark.asyncio
async def test_existing_map_is_updated_not_created(session_factory, monkeypatch):
    await _seed(session_factory, "bhop_known", 1)
    creates = _spy(monkeypatch, "create")
    updates = _spy(monkeypatch, "update_wr")
    use_cases, _, fastdl = _build(
        session_factory,
        records=[_entry(2, "bhop_known")],
        details={2: _detail(2, "bhop_known", time="1:45.250", hostname="NA-1", tier=4)},
    )

    result = await use_cases.sync_recent_records()

    assert result.updated == 1
    assert len(updates) == 1
    assert creates == []
    fastdl.fetch_hash.assert_not_awaited()

    async with session_factory() as session:
        details = await MapRepository(session).get_full_details("bhop_known")
    assert details.wr_time == pytest.approx(105.25)
    assert details.wr_server == "NA-1"
    assert details.wr_source_record_id == 2
    assert details.tier == 4


@pytest.mark.asyncio
async def test_detail_map_name_is_authoritative(session_factory):
    await _seed(session_factory, "bhop_Real", 1)
    use_cases, _, _ = _build(
        session_factory,
        records=[_entry(2, "bhop_real")],
        details={2: _detail(2, "bhop_Real")},
    )

    result = await use_cases.sync_recent_records()

    assert result.updated == 1
    async with session_factory() as session:
        count = (await session.execute(select(func.count()).select_from(MapModel))).scalar_one()
        details = await MapRepository(session).get_full_details("bhop_Real")
    assert count == 1
    assert details.wr_source_record_id == 2


@pytest.mark.asyncio
async def test_invalid_detail_time_is_skipped(session_factory, monkeypatch):
    creates = _spy(monkeypatch, "create")
    use_cases, _, _ = _build(
        session_factory,
        records=[_entry(7, "bhop_bad")],
        details={7: _detail(7, "bhop_bad", time="??")},
    )

    result = await use_cases.sync_recent_records()

    assert result.skipped == 1
    assert creates == []


@pytest.mark.asyncio
async def test_failing_item_does_not_abort_batch(session_factory):
    def detail_for(record_id):
        if record_id == 1:
            raise FeedTransportError("sourcejump: timeout")
        return _detail(record_id, f"bhop_{record_id}")

    use_cases, sourcejump, _ = _build(
        session_factory,
        records=[_entry(1, "bhop_1"), _entry(2, "bhop_2"), _entry(3, "bhop_3")],
    )
    sourcejump.fetch_record_detail.side_effect = detail_for

    result = await use_cases.sync_recent_records()

    assert result.failed == 1
    assert result.created == 2
    async with session_factory() as session:
        repo = MapRepository(session)
        assert (await repo.get_state("bhop_1")).exists is False
        assert (await repo.get_state("bhop_3")).exists is True


@pytest.mark.asyncio
async def test_storage_failure_is_caught_per_item(session_factory, monkeypatch):
    async def broken_create(self, *args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(MapRepository, "create", broken_create)
    use_cases, _, _ = _build(
        session_factory,
        records=[_entry(9, "bhop_io")],
        details={9: _detail(9, "bhop_io")},
    )

    outcome = await use_cases.process_item(_entry(9, "bhop_io"))

    assert outcome == ItemOutcome.FAILED


@pytest.mark.asyncio
async def test_fastdl_failure_does_not_block_creation(session_factory):
    use_cases, _, fastdl = _build(
        session_factory,
        records=[_entry(4, "bhop_nohash")],
        details={4: _detail(4, "bhop_nohash")},
    )
    fastdl.fetch_hash.side_effect = FeedTransportError("fastdl: 500")

    result = await use_cases.sync_recent_records()

    assert result.created == 1
    async with session_factory() as session:
        details = await MapRepository(session).get_full_details("bhop_nohash")
    assert details.fastdl_hash is None


@pytest.mark.asyncio
async def test_list_feed_failure_propagates(session_factory):
    use_cases, sourcejump, _ = _build(session_factory)
    sourcejump.fetch_recent_records.side_effect = FeedTransportError("sourcejump: 503")

    with pytest.raises(FeedTransportError):
        await use_cases.sync_recent_records()
