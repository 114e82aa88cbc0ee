"""
Flight service - lookup of a flight record by nose number.
Design: Single-hit match query; failures degrade to an empty result (search is best-effort here).
"""

import logging
from typing import Any

from app.config import Settings
from app.search.elasticsearch_client import ElasticOperations
from app.search.exceptions import SearchBackendError

logger = logging.getLogger(__name__)


class FlightService:
    def __init__(self, ops: ElasticOperations, settings: Settings):
        self.ops = ops
        self.settings = settings

    async def get_flight_by_nose_number(self, nose_number: str) -> list[dict[str, Any]]:
        """First flight whose nose-number field matches. Empty list when none or when ES fails."""
        try:
            return await self.ops.find_first(
                self.settings.flight_index,
                self.settings.flight_query_field,
                nose_number,
                source_includes=self.settings.flight_source_fields or None,
            )
        except SearchBackendError as e:
            logger.error("Error querying Elasticsearch for nose number %r: %s", nose_number, e)
            return []
