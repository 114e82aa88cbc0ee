"""
Prometheus metrics for search and pagination (served by the /metrics ASGI app).
"""

from prometheus_client import Counter

PAGINATION_RUNS = Counter(
    "pagination_runs_total",
    "Exhaustive pagination runs by termination reason",
    ["termination"],
)

PAGES_FETCHED = Counter(
    "pagination_pages_fetched_total",
    "Pages fetched from the search backend by pagination runs",
)

BACKEND_ERRORS = Counter(
    "search_backend_errors_total",
    "Search backend failures by error kind",
    ["kind"],
)
