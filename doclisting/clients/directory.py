"""
Doctor directory client functions.

Functional async client for the directory endpoint, plus a local JSON file
reader sharing the same payload format.
"""

import json
from pathlib import Path
from typing import Any

import httpx

from ..config import Settings
from ..core.mappers import map_raw_records
from ..core.models import Record
from ..core.session import RecordSource
from ..utils.exceptions import APIError, DataFormatError, NetworkError, SourceFetchError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _records_from_payload(payload: Any, source: str) -> list[Record]:
    if not isinstance(payload, list):
        raise DataFormatError(
            f"Expected a JSON array of doctors, got {type(payload).__name__}",
            url=source,
        )
    return map_raw_records(payload)


async def fetch_records(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> list[Record]:
    """Fetch the full doctor collection from the configured source URL."""
    url = settings.source_url

    should_close_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.http_timeout)

    try:
        response = await client.get(url)

        if response.is_error:
            raise APIError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DataFormatError(f"Invalid JSON from directory source: {e}", url=url) from e

        records = _records_from_payload(payload, url)
        logger.debug("Fetched directory", url=url, records=len(records))
        return records

    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise NetworkError(str(e) or type(e).__name__, url=url) from e
    finally:
        if should_close_client:
            await client.aclose()


def load_records_from_file(path: Path) -> list[Record]:
    """Read a doctor collection from a local JSON file."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SourceFetchError(f"Failed to read {path}: {e.strerror or e}", url=str(path)) from e
    except ValueError as e:
        raise DataFormatError(f"Invalid JSON in {path}: {e}", url=str(path)) from e

    return _records_from_payload(payload, str(path))


def create_source(
    settings: Settings,
    path: Path | None = None,
    client: httpx.AsyncClient | None = None,
) -> RecordSource:
    """Create a record source reading from a file if given, else from the URL."""
    if path is not None:

        async def file_source() -> list[Record]:
            return load_records_from_file(path)

        return file_source

    async def http_source() -> list[Record]:
        return await fetch_records(settings, client)

    return http_source
