import math
from datetime import datetime
from typing import Dict

import httpx

from Transit.config import DEFAULT_DIRECTIONS_URL
from Transit.trip_planner.errors import TripValidationError
from Transit.trip_planner.models import TimeMode, TripRequest

# Query parameter the relay fills in server-side. Never sent by the planner.
KEY_PARAM = "key"


def epoch_seconds(ts: datetime) -> int:
    # naive datetimes are local time, same as the browser date picker
    return math.floor(ts.timestamp())


def build_directions_query(request: TripRequest) -> Dict[str, str]:
    if not request.is_complete():
        raise TripValidationError()

    query = {
        "origin": request.origin,
        "destination": request.destination,
        "mode": "transit",
    }

    time_param = str(epoch_seconds(request.timestamp))
    if request.time_mode == TimeMode.DEPART:
        query["departure_time"] = time_param
    else:
        query["arrival_time"] = time_param

    return query


def build_target_url(query: Dict[str, str], base_url: str = DEFAULT_DIRECTIONS_URL) -> str:
    params = {k: v for k, v in query.items() if k != KEY_PARAM}
    url = httpx.URL(base_url).copy_remove_param(KEY_PARAM).copy_merge_params(params)
    return str(url)
