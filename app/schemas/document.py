"""Document request/response schemas - REST API contract."""

from typing import Any

from pydantic import BaseModel, Field

from app.config import get_settings

settings = get_settings()


class IndexResponse(BaseModel):
    id: str
    result: str  # "created" or "updated"


class SearchRequest(BaseModel):
    query: dict[str, Any] | None = None  # Elasticsearch query DSL; match_all when omitted
    skip: int = Field(0, ge=0)
    limit: int = Field(20, ge=1, le=100)


class SearchHit(BaseModel):
    id: str
    source: dict[str, Any]


class SearchResponse(BaseModel):
    total: int
    count: int
    results: list[SearchHit]


class IdsRequest(BaseModel):
    query: dict[str, Any] | None = None
    page_size: int = Field(settings.default_page_size, gt=0)


class IdsResponse(BaseModel):
    ids: list[str]
    count: int
    termination: str  # empty, exhausted or stalled
    fetches: int
