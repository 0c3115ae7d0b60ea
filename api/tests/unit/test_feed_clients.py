"""
Tests de los collectors HTTP (SourceJump, FastDL, hoja TAS) con httpx.MockTransport.
"""
import httpx
import pytest

from bhop_records.infrastructure.external.errors import FeedParseError, FeedTransportError
from bhop_records.infrastructure.external.fastdl.client import FastDLClient
from bhop_records.infrastructure.external.sourcejump.client import SourceJumpClient
from bhop_records.infrastructure.external.tas_sheet.client import TASSheetClient

BASE_URL = "https://sj.test"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_recent_records_parse_with_mixed_case_keys():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/ajax/records/wrs"
        return httpx.Response(200, json=[
            {"ID": 5, "Map": "surf_test", "Time": "1:30.000", "Tier": 3, "wrDif": "-0.5", "SteamID": "STEAM_1"},
            {"id": 6, "map": "bhop_x", "time": "12.000", "unknown_field": [1, 2]},
        ])

    async with _client(handler) as http:
        records = await SourceJumpClient(http, BASE_URL).fetch_recent_records()

    assert [r.id for r in records] == [5, 6]
    assert records[0].map == "surf_test"
    assert records[0].tier == 3
    assert records[0].wr_dif == "-0.5"
    assert records[0].steam_id == "STEAM_1"
    assert records[1].tier is None


@pytest.mark.asyncio
async def test_record_detail_accepts_opaque_fields():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/ajax/records/id/5"
        return httpx.Response(200, json={
            "id": 5, "map": "surf_test", "time": "1:30.000", "hostname": "EU-1",
            "name": "Alice", "invalid": {"reason": "n/a"}, "badZones": [1, "x"],
        })

    async with _client(handler) as http:
        detail = await SourceJumpClient(http, BASE_URL).fetch_record_detail(5)

    assert detail.map == "surf_test"
    assert detail.hostname == "EU-1"
    assert detail.invalid == {"reason": "n/a"}
    assert detail.bad_zones == [1, "x"]


@pytest.mark.asyncio
async def test_map_wr_is_first_entry_and_name_is_quoted():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(200, json=[
            {"id": 1, "map": "bhop a/b", "timeSeconds": 10.5, "name": "Fast"},
            {"id": 2, "map": "bhop a/b", "timeSeconds": 11.0, "name": "Slow"},
        ])

    async with _client(handler) as http:
        wr = await SourceJumpClient(http, BASE_URL).fetch_map_wr("bhop a/b")

    assert wr.id == 1
    assert wr.time_seconds == 10.5
    assert seen == [b"/ajax/records/map/bhop%20a%2Fb"]


@pytest.mark.asyncio
async def test_map_wr_is_none_for_empty_feed():
    async with _client(lambda request: httpx.Response(200, json=[])) as http:
        assert await SourceJumpClient(http, BASE_URL).fetch_map_wr("bhop_none") is None


@pytest.mark.asyncio
async def test_non_2xx_is_transport_error():
    async with _client(lambda request: httpx.Response(503)) as http:
        with pytest.raises(FeedTransportError):
            await SourceJumpClient(http, BASE_URL).fetch_recent_records()


@pytest.mark.asyncio
async def test_network_failure_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as http:
        with pytest.raises(FeedTransportError):
            await FastDLClient(http, "https://fastdl.test/69.html").fetch_table()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"error": "not a list"}),
        httpx.Response(200, json=[{"id": "abc", "map": "x", "time": "1.0"}]),
    ],
)
async def test_malformed_payload_is_parse_error(response):
    async with _client(lambda request: response) as http:
        with pytest.raises(FeedParseError):
            await SourceJumpClient(http, BASE_URL).fetch_recent_records()


@pytest.mark.asyncio
async def test_fastdl_client_fetches_table_and_single_hash():
    html = (
        '<tr><td><a href="x">bhop_one</a></td><td>aa11</td></tr>'
        '<tr><td><a href="y">bhop_two</a></td><td>bb22</td></tr>'
    )
    async with _client(lambda request: httpx.Response(200, text=html)) as http:
        client = FastDLClient(http, "https://fastdl.test/69.html")
        assert await client.fetch_table() == {"bhop_one": "aa11", "bhop_two": "bb22"}
        assert await client.fetch_hash("bhop_two") == "bb22"
        assert await client.fetch_hash("bhop_three") is None


@pytest.mark.asyncio
async def test_tas_sheet_rows_include_header_and_quoted_cells():
    csv_text = 'Map,Time,Runner,Server\nbhop_a,12.5,"Doe, John",TAS-1\nbhop_b,1:00.000\n'
    async with _client(lambda request: httpx.Response(200, text=csv_text)) as http:
        rows = await TASSheetClient(http, "https://sheet.test/export").fetch_rows()

    assert rows == [
        ["Map", "Time", "Runner", "Server"],
        ["bhop_a", "12.5", "Doe, John", "TAS-1"],
        ["bhop_b", "1:00.000"],
    ]
