"""
Document endpoints - get/index/delete/search on any index, plus exhaustive id listing.
Challenge: Translate backend failures into status codes; 404 handling.
Design: Thin controller; DocumentService holds the logic.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query, status

from app.core.dependencies import Documents, http_error
from app.schemas.document import (
    IdsRequest,
    IdsResponse,
    IndexResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
)
from app.search.exceptions import InvalidPageSize, SearchBackendError

router = APIRouter()


@router.post("/{index}/_search", response_model=SearchResponse)
async def search_documents(svc: Documents, index: str, data: SearchRequest):
    """Query DSL search with from/size paging."""
    try:
        result = await svc.search(index, data.query, skip=data.skip, limit=data.limit)
    except SearchBackendError as e:
        raise http_error(e)
    hits = [SearchHit(id=h["_id"], source=h.get("_source", {})) for h in result.hits]
    return SearchResponse(total=result.total, count=len(hits), results=hits)


@router.post("/{index}/_ids", response_model=IdsResponse)
async def collect_document_ids(svc: Documents, index: str, data: IdsRequest):
    """All ids matching the query, walked page by page with search_after."""
    try:
        result = await svc.collect_ids(index, data.query, page_size=data.page_size)
    except InvalidPageSize as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except SearchBackendError as e:
        raise http_error(e)
    ids = sorted(str(k) for k in result.keys)
    return IdsResponse(ids=ids, count=len(ids), termination=result.termination.value, fetches=result.fetches)


@router.get("/{index}/{doc_id}")
async def get_document(svc: Documents, index: str, doc_id: str) -> dict[str, Any]:
    try:
        return await svc.get(index, doc_id)
    except SearchBackendError as e:
        raise http_error(e)


@router.put("/{index}/{doc_id}", response_model=IndexResponse)
async def put_document(
    svc: Documents,
    index: str,
    doc_id: str,
    document: dict[str, Any] = Body(...),
    refresh: bool = Query(False),
):
    """Create or replace. refresh=true blocks until the document is searchable."""
    try:
        result = await svc.put(index, doc_id, document, refresh=refresh)
    except SearchBackendError as e:
        raise http_error(e)
    return IndexResponse(id=doc_id, result=result)


@router.delete("/{index}/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(svc: Documents, index: str, doc_id: str):
    try:
        await svc.delete(index, doc_id)
    except SearchBackendError as e:
        raise http_error(e)
