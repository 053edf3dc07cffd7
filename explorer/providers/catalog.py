# providers/catalog.py
# Remote catalog: search + create over the fixed JSON contract. No retries here.

import logging
import httpx
from pydantic import ValidationError
from typing import List, Optional
from models import AttractionRecord, SearchCriteria

log = logging.getLogger("attraction-explorer.catalog")

HEADERS = {
    "User-Agent": "AttractionExplorer/0.1",
    "Accept": "application/json",
    "Content-Type": "application/json",
}

SEARCH_PATH = "/api/attractions/search"
CREATE_PATH = "/api/attractions"


class CatalogError(Exception):
    """Base for every failure coming out of the catalog client."""


class TransportError(CatalogError):
    """The request never completed: connection/timeout, or an unreadable body."""


class RemoteStatusError(CatalogError):
    """The catalog answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Failed: {status_code}")


# name used for the status-code failure in the client contract
NetworkError = RemoteStatusError


def describe_error(exc: CatalogError) -> str:
    """Single user-visible string for any catalog failure."""
    if isinstance(exc, RemoteStatusError):
        return f"Failed: {exc.status_code}"
    return str(exc) or exc.__class__.__name__


class CatalogClient:
    def __init__(self, base_url: str, timeout: float = 20.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # tests hand in an httpx.MockTransport
        self._transport = transport

    async def _post(self, path: str, body: dict) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=HEADERS, transport=self._transport) as client:
                r = await client.post(url, json=body)
        except httpx.TimeoutException as e:
            log.warning("POST %s timed out after %ss", path, self.timeout)
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            log.warning("POST %s failed: %s", path, e)
            raise TransportError(f"Network error: {e}") from e

        if not r.is_success:
            log.warning("POST %s -> %s body: %s", path, r.status_code, r.text[:400])
            raise RemoteStatusError(r.status_code, r.text[:400])
        return r

    async def search_attractions(self, criteria: SearchCriteria) -> List[AttractionRecord]:
        r = await self._post(SEARCH_PATH, criteria.payload())
        try:
            js = r.json()
        except ValueError as e:
            raise TransportError("Malformed response body") from e
        if not isinstance(js, dict):
            raise TransportError("Malformed response body")

        raw = js.get("items") or []
        try:
            return [AttractionRecord.model_validate(it) for it in raw]
        except (ValidationError, TypeError) as e:
            log.warning("search returned records that do not validate: %s", e)
            raise TransportError("Malformed response body") from e

    async def create_attraction(self, record: AttractionRecord) -> None:
        # assigned id is not read back; the caller refreshes with a search
        await self._post(CREATE_PATH, record.create_payload())
