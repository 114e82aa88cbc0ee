"""
Search backend errors - what the service layer and endpoints catch.
The Elasticsearch adapter translates client exceptions into these so nothing above it imports elasticsearch.
"""


class SearchBackendError(Exception):
    """Backend call failed. Base for every retrieval failure."""


class BackendUnavailable(SearchBackendError):
    """Backend could not be reached (connection refused, timeout, DNS)."""


class MalformedQuery(SearchBackendError):
    """Backend rejected the request (bad sort field, invalid query DSL)."""


class DocumentNotFound(SearchBackendError):
    """No document with the requested id in the index."""

    def __init__(self, index: str, doc_id: str):
        super().__init__(f"document {doc_id!r} not found in index {index!r}")
        self.index = index
        self.doc_id = doc_id


class InvalidPageSize(ValueError):
    """Page size must be a positive integer. Raised before any backend call."""
