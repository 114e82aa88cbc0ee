"""
Pytest fixtures - in-memory Elasticsearch, page backends, API client (TDD/BDD support).
Challenge: Isolated tests; no real Elasticsearch cluster needed.
"""

from types import SimpleNamespace
from typing import Any

import pytest
import pytest_asyncio
from elasticsearch import BadRequestError, NotFoundError
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.search.elasticsearch_client import get_elasticsearch
from app.search.pagination import Document, Page, Query


def _meta(status: int) -> SimpleNamespace:
    return SimpleNamespace(status=status)


class FakeElasticsearch:
    """Just enough of AsyncElasticsearch for the service: get/index/delete/search/ping/close."""

    def __init__(self):
        self.indices: dict[str, dict[str, dict[str, Any]]] = {}
        self.search_calls: list[dict[str, Any]] = []
        self.error: Exception | None = None
        self.reachable = True
        self.closed = False

    def _raise_if_failing(self):
        if self.error is not None:
            raise self.error

    async def ping(self) -> bool:
        return self.reachable

    async def close(self) -> None:
        self.closed = True

    async def get(self, index: str, id: str) -> dict:
        self._raise_if_failing()
        docs = self.indices.get(index, {})
        if id not in docs:
            raise NotFoundError("not_found", _meta(404), {"found": False})
        return {"_index": index, "_id": id, "found": True, "_source": docs[id]}

    async def index(self, index: str, id: str, document: dict, refresh: Any = False) -> dict:
        self._raise_if_failing()
        docs = self.indices.setdefault(index, {})
        result = "updated" if id in docs else "created"
        docs[id] = dict(document)
        return {"_index": index, "_id": id, "result": result}

    async def delete(self, index: str, id: str) -> dict:
        self._raise_if_failing()
        docs = self.indices.get(index, {})
        if id not in docs:
            raise NotFoundError("not_found", _meta(404), {"result": "not_found"})
        del docs[id]
        return {"_index": index, "_id": id, "result": "deleted"}

    def _matches(self, source: dict, query: dict | None) -> bool:
        if not query or "match_all" in query:
            return True
        for kind in ("match", "term"):
            if kind in query:
                field, value = next(iter(query[kind].items()))
                if isinstance(value, dict):
                    value = value.get("query", value.get("value"))
                return str(source.get(field)) == str(value)
        raise BadRequestError("parsing_exception", _meta(400), {"error": "parsing_exception"})

    async def search(
        self,
        index: str,
        query: dict | None = None,
        sort: list | None = None,
        size: int = 10,
        from_: int = 0,
        search_after: list | None = None,
        source_includes: list[str] | None = None,
        track_total_hits: Any = None,
    ) -> dict:
        self._raise_if_failing()
        self.search_calls.append(
            {"index": index, "query": query, "sort": sort, "size": size, "search_after": search_after}
        )
        docs = self.indices.get(index, {})
        matched = [(doc_id, src) for doc_id, src in docs.items() if self._matches(src, query)]
        total = len(matched)
        sort_field = next(iter(sort[0])) if sort else None
        if sort_field:
            def key_of(item):
                return item[0] if sort_field == "_id" else item[1][sort_field]
            matched.sort(key=key_of)
            if search_after:
                matched = [m for m in matched if key_of(m) > search_after[0]]
        page = matched[from_:from_ + size]
        hits = []
        for doc_id, src in page:
            if source_includes:
                src = {k: v for k, v in src.items() if k in source_includes}
            hit = {"_index": index, "_id": doc_id, "_source": src}
            if sort_field:
                hit["sort"] = [doc_id if sort_field == "_id" else src[sort_field]]
            hits.append(hit)
        return {"hits": {"total": {"value": total, "relation": "eq"}, "hits": hits}}


class MemoryBackend:
    """SearchBackend over sorted keys; honours size and search_after like a well-behaved engine."""

    def __init__(self, keys):
        self.keys = sorted(keys)
        self.queries: list[Query] = []

    async def fetch_page(self, query: Query) -> Page:
        self.queries.append(query)
        remaining = [k for k in self.keys if query.search_after is None or k > query.search_after]
        return Page(documents=[Document(key=k) for k in remaining[: query.size]], total_hint=len(self.keys))


class ScriptedBackend:
    """SearchBackend that replays fixed pages in order, then empty pages (or raises a queued error)."""

    def __init__(self, pages, error: Exception | None = None):
        self.pages = [list(p) for p in pages]
        self.error = error
        self.queries: list[Query] = []

    async def fetch_page(self, query: Query) -> Page:
        self.queries.append(query)
        if len(self.queries) > len(self.pages):
            if self.error is not None:
                raise self.error
            return Page(documents=[])
        keys = self.pages[len(self.queries) - 1]
        return Page(documents=[Document(key=k) for k in keys])


def make_keys(n: int) -> list[str]:
    return [f"id-{i:03d}" for i in range(1, n + 1)]


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture
def memory_backend():
    return MemoryBackend


@pytest.fixture
def scripted_backend():
    return ScriptedBackend


@pytest.fixture
def keys():
    return make_keys


@pytest_asyncio.fixture
async def client(fake_es: FakeElasticsearch):
    app.dependency_overrides[get_elasticsearch] = lambda: fake_es
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
