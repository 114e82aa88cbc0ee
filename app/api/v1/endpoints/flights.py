"""
Flight endpoint - lookup by nose number.
"""

from typing import Any

from fastapi import APIRouter

from app.core.dependencies import Flights

router = APIRouter()


@router.get("/{nose_number}")
async def get_flight(svc: Flights, nose_number: str) -> list[dict[str, Any]]:
    """At most one flight record. Empty list when nothing matches (or search is down)."""
    return await svc.get_flight_by_nose_number(nose_number)
