import pytest
import httpx
import logging

from unittest.mock import AsyncMock, Mock
from sys import path
path.append(".")

from galaxy_reporter.log_setup import configure_logging
from galaxy_reporter.config import GalaxyConfig
from galaxy_reporter.client import ApiError, ApiFailure, ApiSuccess, create_galaxy_api
from galaxy_reporter.schemas import History
from galaxy_reporter.reporters.session import get_current_user, list_histories

configure_logging()

USER = {
    "id": "f2db41e1fa331b3e",
    "username": "alice",
    "email": "alice@example.org",
    "total_disk_usage": 1048576,
    "nice_total_disk_usage": "1.0 MB",
}

HISTORIES = [
    {"id": "h1", "name": "RNA-seq", "nice_size": "12.3 MB", "state": "ok", "tags": ["rna", "name:paired"]},
    {"id": "h2", "name": "Unnamed history", "nice_size": "0 bytes", "state": "new", "tags": []},
]


@pytest.fixture
def session_test_log():
    return logging.getLogger("TestSessionReporters")


@pytest.fixture
def mock_api():
    api = Mock()
    api.get = AsyncMock()
    return api


class TestGetCurrentUser:

    @pytest.mark.asyncio
    async def test_no_api_makes_no_call(self, capsys):
        assert await get_current_user(None) is None
        out = capsys.readouterr().out
        assert "no API key" in out
        assert "galaxy-session <galaxy-url> <api-key>" in out

    @pytest.mark.asyncio
    async def test_success_prints_user(self, mock_api, capsys, session_test_log):
        session_test_log.info("TEST: test_success_prints_user starting")
        mock_api.get.return_value = ApiSuccess(data=USER)

        user = await get_current_user(mock_api)

        assert user.username == "alice"
        mock_api.get.assert_called_once_with("/api/users/current")
        out = capsys.readouterr().out
        assert "- Username: alice" in out
        assert "- Email: alice@example.org" in out
        assert "- Total disk usage: 1.0 MB" in out
        session_test_log.info("TEST: test_success_prints_user PASSED")

    @pytest.mark.asyncio
    async def test_raw_disk_usage_when_no_nice_value(self, mock_api, capsys):
        mock_api.get.return_value = ApiSuccess(data={"username": "bob", "email": "bob@example.org", "total_disk_usage": 42})

        await get_current_user(mock_api)

        assert "- Total disk usage: 42" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_api_error_returns_none(self, mock_api, caplog):
        mock_api.get.return_value = ApiFailure(error=ApiError(status_code=403, message="bad key", path="/api/users/current"))

        assert await get_current_user(mock_api) is None
        assert "Error fetching current user" in caplog.text

    @pytest.mark.asyncio
    async def test_anonymous_user_returns_none(self, mock_api):
        mock_api.get.return_value = ApiSuccess(data={"total_disk_usage": 0, "nice_total_disk_usage": "0 bytes"})
        assert await get_current_user(mock_api) is None

    @pytest.mark.asyncio
    async def test_unexpected_exception_returns_none(self, mock_api, caplog):
        mock_api.get.side_effect = RuntimeError("socket exploded")

        assert await get_current_user(mock_api) is None
        assert "Error in get_current_user" in caplog.text


class TestListHistories:

    @pytest.mark.asyncio
    async def test_no_api_returns_empty(self, capsys):
        assert await list_histories(None) == []
        assert "Skipping history listing" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_success_prints_histories(self, mock_api, capsys):
        mock_api.get.return_value = ApiSuccess(data=HISTORIES)

        histories = await list_histories(mock_api)

        assert [h.id for h in histories] == ["h1", "h2"]
        mock_api.get.assert_called_once_with(
            "/api/histories", query={"deleted": "false", "published": "false"}
        )
        out = capsys.readouterr().out
        assert "Found 2 histories" in out
        assert "- RNA-seq (h1)" in out
        assert "  Size: 12.3 MB" in out
        assert "  State: ok" in out
        assert "  Tags: rna, name:paired" in out
        assert "  Tags: None" in out
        assert out.index("RNA-seq") < out.index("Unnamed history")

    @pytest.mark.asyncio
    async def test_api_error_returns_empty(self, mock_api, caplog):
        mock_api.get.return_value = ApiFailure(error=ApiError(status_code=500, message="boom", path="/api/histories"))

        assert await list_histories(mock_api) == []
        assert "Error fetching histories" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_history_skipped_others_printed(self, mock_api, capsys, caplog):
        mock_api.get.return_value = ApiSuccess(data=[
            {"id": "h1", "name": "Assembly run", "nice_size": "3 MB", "state": "ok", "tags": ["asm"]},
            {"name": "missing id"},
            {"id": "h3", "name": "QC", "nice_size": "1 MB", "state": "ok", "tags": 42},
            {"id": "h4", "name": "Variant calling", "nice_size": "8 MB", "state": "queued", "tags": []},
        ])

        histories = await list_histories(mock_api)

        assert [h.id for h in histories] == ["h1", "h4"]
        out = capsys.readouterr().out
        assert "Found 2 histories" in out
        assert "- Assembly run (h1)" in out
        assert "- Variant calling (h4)" in out
        assert "Skipping malformed history entry None" in caplog.text
        assert "Skipping malformed history entry 'h3'" in caplog.text
        assert "Error in list_histories" not in caplog.text

    @pytest.mark.asyncio
    async def test_null_tags_render_none(self, mock_api, capsys):
        mock_api.get.return_value = ApiSuccess(data=[
            {"id": "h1", "name": "good", "tags": []},
            {"id": "h2", "name": "also good", "tags": None},
        ])

        histories = await list_histories(mock_api)

        assert [h.id for h in histories] == ["h1", "h2"]
        assert histories[1].tags == []
        out = capsys.readouterr().out
        assert "- also good (h2)" in out
        assert out.count("  Tags: None") == 2

    @pytest.mark.asyncio
    async def test_query_sent_over_http(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        transport = httpx.MockTransport(handler)
        config = GalaxyConfig(galaxy_url="http://galaxy.test", api_key="key")
        async with create_galaxy_api(config, transport=transport) as api:
            assert await list_histories(api) == []

        assert str(calls[0].url) == "http://galaxy.test/api/histories?deleted=false&published=false"


class TestHistoryTags:

    def test_empty_tags_render_none(self):
        assert History(id="h", name="n").tags_display == "None"

    def test_tags_joined(self):
        assert History(id="h", name="n", tags=["a", "b"]).tags_display == "a, b"

    def test_null_tags_are_empty(self):
        assert History(id="h", name="n", tags=None).tags_display == "None"
