"""
Pytest configuration and fixtures
"""

import asyncio
import json
import httpx
import pytest

from providers.catalog import CatalogClient

BASE_URL = "http://catalog.test"


class FakeCatalog:
    """In-memory stand-in for the remote catalog, served through httpx.MockTransport."""

    def __init__(self, items=None):
        self.items = list(items or [])
        self.calls = []    # ("search" | "create", body)
        self.events = []   # ("start" | "end", create number)
        self.search_status = 200
        self.fail_create_at = None
        self._creates = 0

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def kinds(self):
        return [k for k, _ in self.calls]

    def matching(self, body):
        out = []
        q = (body.get("q") or "").lower()
        for it in self.items:
            text = " ".join([it.get("name") or "", it.get("description") or ""] + list(it.get("tags") or [])).lower()
            if q and q not in text:
                continue
            if body.get("category") and it.get("category") != body["category"]:
                continue
            if body.get("location") and it.get("location") != body["location"]:
                continue
            out.append(it)
        return out[: body.get("limit") or 100]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content or b"null")
        if request.url.path == "/api/attractions/search":
            self.calls.append(("search", body))
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"detail": "search broke"})
            return httpx.Response(200, json={"items": self.matching(body)})

        if request.url.path == "/api/attractions":
            self._creates += 1
            n = self._creates
            self.calls.append(("create", body))
            self.events.append(("start", n))
            await asyncio.sleep(0)
            self.events.append(("end", n))
            if self.fail_create_at == n:
                return httpx.Response(500, json={"detail": "insert failed"})
            self.items.append({**body, "id": f"att-{n}"})
            return httpx.Response(201, json={"id": f"att-{n}"})

        return httpx.Response(404)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def catalog_client(fake_catalog):
    return CatalogClient(BASE_URL, transport=fake_catalog.transport())


@pytest.fixture
def beach_record():
    return {
        "id": "att-1",
        "name": "Tarkarli Beach",
        "description": "Pristine white sands, clear waters and scuba/snorkeling.",
        "category": "Beach",
        "location": "Tarkarli",
        "image_url": None,
        "rating": 4.7,
        "tags": ["water sports", "snorkeling", "scuba"],
    }


@pytest.fixture
def fort_record():
    return {
        "id": "att-2",
        "name": "Sindhudurg Fort",
        "description": "Historic sea fort off Malvan.",
        "category": "Fort",
        "location": "Malvan",
        "rating": 4.6,
        "tags": ["history"],
    }
