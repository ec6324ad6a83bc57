import logging
from typing import Any, Dict, Optional

import httpx

from Transit.config import DEFAULT_DIRECTIONS_URL
from Transit.trip_planner.errors import FetchError, TripValidationError
from Transit.trip_planner.models import TripRequest
from Transit.trip_planner.query import build_directions_query, build_target_url

logger = logging.getLogger(__name__)

PROXY_PATH = "/api/proxy"


async def plan_trip(
    request: TripRequest,
    relay_url: str,
    directions_url: str = DEFAULT_DIRECTIONS_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = 60.0,
) -> Dict[str, Any]:
    """
    Ask the relay for transit directions and return the provider's JSON as-is.

    Raises TripValidationError before any network call when origin or
    destination is blank, and FetchError for anything that goes wrong on
    the way to or back from the relay.
    """
    if not request.is_complete():
        raise TripValidationError()

    logger.info(
        f"Submitting trip request: {request.origin!r} -> {request.destination!r} "
        f"({request.time_mode.value} {request.timestamp.isoformat(timespec='minutes')})"
    )

    query = build_directions_query(request)
    target = build_target_url(query, directions_url)

    try:
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.get(
                f"{relay_url.rstrip('/')}{PROXY_PATH}",
                params={"target": target},
            )
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        logger.error(f"Error fetching transit route: {e}")
        raise FetchError() from e

    logger.info(f"Transit route response: status={data.get('status') if isinstance(data, dict) else None}")
    return data
