"""
Document service - generic document use cases over any index (SOLID: Single Responsibility).
Challenge: Keep controllers thin; pagination runs get their own cursor and result set per call.
Design: Service depends on ElasticOperations (injected); easy to test with an in-memory fake client.
"""

from typing import Any

from app.config import Settings
from app.search.elasticsearch_client import ElasticOperations, SearchResult
from app.search.pagination import PaginationCursor, PaginationResult


class DocumentService:
    """Get, search, index, delete, and enumerate ids of documents."""

    def __init__(self, ops: ElasticOperations, settings: Settings):
        self.ops = ops
        self.settings = settings

    async def get(self, index: str, doc_id: str) -> dict[str, Any]:
        return await self.ops.get(index, doc_id)

    async def put(self, index: str, doc_id: str, document: dict[str, Any], refresh: bool = False) -> str:
        """Index document under doc_id. refresh=True waits until it is searchable."""
        # Null values are dropped (ES rejects null for some mapped types)
        payload = {k: v for k, v in document.items() if v is not None}
        return await self.ops.index(index, doc_id, payload, refresh="wait_for" if refresh else False)

    async def delete(self, index: str, doc_id: str) -> None:
        await self.ops.delete(index, doc_id)

    async def search(
        self,
        index: str,
        query: dict[str, Any] | None,
        skip: int = 0,
        limit: int = 20,
    ) -> SearchResult:
        return await self.ops.search(index, query=query, size=limit, from_=skip)

    async def collect_ids(
        self,
        index: str,
        query: dict[str, Any] | None = None,
        page_size: int | None = None,
    ) -> PaginationResult:
        """Every key matching query, walked with search_after. Page size defaults from settings."""
        cursor = PaginationCursor(
            self.ops,
            key_field=self.settings.pagination_key_field,
            max_page_size=self.settings.max_page_size,
        )
        template = cursor.build_initial_query(
            index,
            page_size if page_size is not None else self.settings.default_page_size,
            filter=query,
        )
        return await cursor.collect_all_keys(template)
