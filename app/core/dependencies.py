"""
FastAPI dependencies - injection for the Elasticsearch handle and services (SOLID: Dependency Inversion).
Challenge: One shared handle, per-request service objects, consistent error responses.
"""

from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, HTTPException, status

from app.config import Settings, get_settings
from app.search.elasticsearch_client import ElasticOperations, get_elasticsearch
from app.search.exceptions import (
    BackendUnavailable,
    DocumentNotFound,
    MalformedQuery,
    SearchBackendError,
)
from app.services.document_service import DocumentService
from app.services.flight_service import FlightService


def get_operations(es: Annotated[AsyncElasticsearch, Depends(get_elasticsearch)]) -> ElasticOperations:
    return ElasticOperations(es)


def get_document_service(
    ops: Annotated[ElasticOperations, Depends(get_operations)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DocumentService:
    return DocumentService(ops, settings)


def get_flight_service(
    ops: Annotated[ElasticOperations, Depends(get_operations)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> FlightService:
    return FlightService(ops, settings)


def http_error(exc: SearchBackendError) -> HTTPException:
    """Map a backend failure to the HTTP status clients see."""
    if isinstance(exc, DocumentNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    if isinstance(exc, MalformedQuery):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, BackendUnavailable):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Search backend unavailable")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Search backend error")


Operations = Annotated[ElasticOperations, Depends(get_operations)]
Documents = Annotated[DocumentService, Depends(get_document_service)]
Flights = Annotated[FlightService, Depends(get_flight_service)]
