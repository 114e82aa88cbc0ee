"""
Cursor pagination - collect every matching key from a backend that only serves bounded, sorted pages.
Challenge: Walk an arbitrarily large result set without deep from/size offsets and without looping forever
when the backend stops advancing (replica lag, concurrent writes repeating the tail of a page).
Design: Depends only on the SearchBackend protocol; the Elasticsearch adapter lives in elasticsearch_client.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Protocol

from app.core.metrics import PAGES_FETCHED, PAGINATION_RUNS
from app.search.exceptions import InvalidPageSize

logger = logging.getLogger(__name__)

# Elasticsearch index.max_result_window default
MAX_PAGE_SIZE = 10000


@dataclass(frozen=True)
class Query:
    """Backend-agnostic search request. `filter` is passed through untouched (query DSL for ES)."""

    index_name: str
    filter: dict[str, Any] | None = None
    sort: list[tuple[str, str]] = field(default_factory=list)
    size: int = 10
    search_after: Any = None


@dataclass(frozen=True)
class Document:
    key: Any
    source: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Page:
    documents: list[Document]
    total_hint: int | None = None


class SearchBackend(Protocol):
    async def fetch_page(self, query: Query) -> Page: ...


class Termination(str, Enum):
    EMPTY = "empty"
    EXHAUSTED = "exhausted"
    STALLED = "stalled"


@dataclass
class PaginationResult:
    keys: set[Any]
    termination: Termination
    fetches: int

    @property
    def stalled(self) -> bool:
        return self.termination is Termination.STALLED


class PaginationCursor:
    """Drives search-after pagination against one backend. Every collect_all_keys call is an independent run."""

    def __init__(self, backend: SearchBackend, key_field: str = "_id", max_page_size: int = MAX_PAGE_SIZE):
        self.backend = backend
        self.key_field = key_field
        self.max_page_size = max_page_size

    def build_initial_query(
        self,
        index_name: str,
        page_size: int,
        filter: dict[str, Any] | None = None,
    ) -> Query:
        """First-page query sorted ascending by key. Rejects non-positive sizes, caps at max_page_size."""
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise InvalidPageSize(f"page size must be a positive integer, got {page_size!r}")
        if page_size > self.max_page_size:
            logger.debug("page size %d capped to %d", page_size, self.max_page_size)
            page_size = self.max_page_size
        return Query(
            index_name=index_name,
            filter=filter,
            sort=[(self.key_field, "asc")],
            size=page_size,
        )

    @staticmethod
    def extract_last_key(page: Page) -> Any:
        if not page.documents:
            return None
        return page.documents[-1].key

    def advance_cursor(self, query: Query, page: Page) -> tuple[Query, Any]:
        """Point the query strictly after the page's last key. Query is returned unchanged for an empty page."""
        cursor = self.extract_last_key(page)
        if cursor is None:
            return query, None
        return replace(query, search_after=cursor), cursor

    @staticmethod
    def is_stalled(new_cursor: Any, previous_cursor: Any) -> bool:
        """Cursor did not move since the previous page: the backend is repeating itself."""
        return previous_cursor is not None and new_cursor == previous_cursor

    async def collect_all_keys(self, template: Query) -> PaginationResult:
        """
        Fetch pages until an empty page, a short page or a stalled cursor.
        A page whose last document has no key counts as stalled: there is nothing to search after.
        Backend errors propagate; keys gathered before the failure are dropped.
        """
        if template.size <= 0:
            raise InvalidPageSize(f"page size must be a positive integer, got {template.size!r}")
        query = replace(template, size=min(template.size, self.max_page_size), search_after=None)
        keys: set[Any] = set()
        previous = None
        fetches = 0

        while True:
            try:
                page = await self.backend.fetch_page(query)
            except Exception as e:
                logger.warning(
                    "pagination on %s failed after %d fetches: %s", query.index_name, fetches, e
                )
                raise
            fetches += 1
            PAGES_FETCHED.inc()

            if not page.documents:
                termination = Termination.EMPTY
                break

            # Documents without a key value (missing sort field) cannot be resumed from
            keys.update(doc.key for doc in page.documents if doc.key is not None)
            query, cursor = self.advance_cursor(query, page)

            if cursor is None or self.is_stalled(cursor, previous):
                logger.warning(
                    "pagination on %s stalled at key %r after %d fetches; stopping with %d keys",
                    query.index_name, cursor, fetches, len(keys),
                )
                termination = Termination.STALLED
                break
            if len(page.documents) < query.size:
                termination = Termination.EXHAUSTED
                break
            previous = cursor

        PAGINATION_RUNS.labels(termination=termination.value).inc()
        logger.info(
            "pagination on %s finished (%s): %d keys in %d fetches",
            query.index_name, termination.value, len(keys), fetches,
        )
        return PaginationResult(keys=keys, termination=termination, fetches=fetches)
