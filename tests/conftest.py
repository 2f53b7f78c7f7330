"""Shared fixtures: sample job records and a scripted fake of the job board API."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Union

import httpx
import pytest

from job_browser.cache import MemoryStore, PageCache
from job_browser.controller import BrowserController
from job_browser.models import JobRecord
from job_browser.sources import ArbeitnowSource

BASE_URL = "https://jobs.example.test/api/job-board-api"


def job(slug: str, **fields: Any) -> Dict[str, Any]:
    """Raw job entry as the API would send it."""
    data = {
        "slug": slug,
        "title": f"Job {slug}",
        "company_name": "Acme",
        "location": "Berlin",
        "remote": False,
        "tags": [],
        "job_types": [],
    }
    data.update(fields)
    return data


def page(*jobs: Dict[str, Any]) -> Dict[str, Any]:
    return {"data": list(jobs), "links": {}, "meta": {}}


Scripted = Union[Dict[str, Any], httpx.Response, Exception]


class FakeJobBoard:
    """Scripted upstream: maps page number to a payload, a response or an error."""

    def __init__(self) -> None:
        self.pages: Dict[int, Scripted] = {}
        self.requests: List[httpx.Request] = []
        self.delay = 0.0

    def calls_for(self, page_no: int) -> int:
        return sum(1 for r in self.requests if int(r.url.params.get("page", "1")) == page_no)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Yield so concurrent callers get a chance to run while this one is in flight.
        await asyncio.sleep(self.delay)
        page_no = int(request.url.params.get("page", "1"))
        scripted = self.pages.get(page_no, page())
        if isinstance(scripted, Exception):
            raise scripted
        if isinstance(scripted, httpx.Response):
            return scripted
        return httpx.Response(200, json=scripted)


@pytest.fixture
def board() -> FakeJobBoard:
    return FakeJobBoard()


@pytest.fixture
def client(board: FakeJobBoard) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(board.handler))


@pytest.fixture
def kv_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def cache(kv_store: MemoryStore) -> PageCache:
    return PageCache(kv_store, namespace="arbeitnow")


@pytest.fixture
def source(cache: PageCache, client: httpx.AsyncClient) -> ArbeitnowSource:
    return ArbeitnowSource(cache, base_url=BASE_URL, timeout_s=10.0, client=client)


@pytest.fixture
def controller(source: ArbeitnowSource, cache: PageCache) -> BrowserController:
    return BrowserController(source, cache)


@pytest.fixture
def sample_records() -> List[JobRecord]:
    return [
        JobRecord(slug="a", title="Backend Engineer", company_name="Acme", location="Berlin", remote=False),
        JobRecord(slug="b", title="Data Scientist", company_name="Zen", location="Remote", remote=True),
    ]
