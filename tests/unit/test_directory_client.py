"""Tests for the directory record source."""

import json

import httpx
import pytest

from doclisting.clients.directory import (
    create_source,
    fetch_records,
    load_records_from_file,
)
from doclisting.config import Settings
from doclisting.utils.exceptions import (
    APIError,
    DataFormatError,
    ErrorCategory,
    NetworkError,
    SourceFetchError,
)


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFetchRecords:
    """Tests for fetch_records."""

    @pytest.mark.asyncio
    async def test_fetches_and_maps(self, settings, directory_payload):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json=directory_payload)

        async with mock_client(handler) as client:
            records = await fetch_records(settings, client)

        assert requested == ["https://directory.test/doctors.json"]
        assert len(records) == len(directory_payload)
        assert records[0].name == "Dr. Kshitija Jagdale"

    @pytest.mark.asyncio
    async def test_error_status(self, settings):
        async with mock_client(lambda request: httpx.Response(500)) as client:
            with pytest.raises(APIError) as exc_info:
                await fetch_records(settings, client)

        assert exc_info.value.message == "HTTP error! status: 500"
        assert exc_info.value.status_code == 500
        assert exc_info.value.category == ErrorCategory.API_ERROR
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_transport_failure(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await fetch_records(settings, client)

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.url == settings.source_url

    @pytest.mark.asyncio
    async def test_malformed_url_is_a_network_error(self):
        settings = Settings(source_url="http://[::1")

        with pytest.raises(NetworkError) as exc_info:
            await fetch_records(settings)

        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
        assert exc_info.value.url == "http://[::1"

    @pytest.mark.asyncio
    async def test_invalid_json(self, settings):
        def handler(request):
            return httpx.Response(200, content=b"<html>not json</html>")

        async with mock_client(handler) as client:
            with pytest.raises(DataFormatError):
                await fetch_records(settings, client)

    @pytest.mark.asyncio
    async def test_payload_must_be_a_list(self, settings):
        def handler(request):
            return httpx.Response(200, json={"doctors": []})

        async with mock_client(handler) as client:
            with pytest.raises(DataFormatError) as exc_info:
                await fetch_records(settings, client)

        assert "got dict" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_source_errors_share_a_base(self, settings):
        async with mock_client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(SourceFetchError):
                await fetch_records(settings, client)


class TestLoadRecordsFromFile:
    """Tests for load_records_from_file."""

    def test_reads_json_array(self, directory_file):
        records = load_records_from_file(directory_file)

        assert [record.id for record in records][:2] == ["111418", "200"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceFetchError) as exc_info:
            load_records_from_file(tmp_path / "missing.json")

        assert "missing.json" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(DataFormatError) as exc_info:
            load_records_from_file(path)

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_object_payload(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"id": "1"}), encoding="utf-8")

        with pytest.raises(DataFormatError):
            load_records_from_file(path)


class TestCreateSource:
    """Tests for create_source."""

    @pytest.mark.asyncio
    async def test_file_source(self, settings, pair_file):
        records = await create_source(settings, pair_file)()

        assert [record.name for record in records] == ["Dr. A", "Dr. B"]

    @pytest.mark.asyncio
    async def test_http_source(self, settings, pair_payload):
        async with mock_client(lambda request: httpx.Response(200, json=pair_payload)) as client:
            records = await create_source(settings, client=client)()

        assert [record.name for record in records] == ["Dr. A", "Dr. B"]
