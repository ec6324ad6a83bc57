import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from Transit.config import PlannerSettings, RelaySettings
from Transit.relay.main import create_app as create_relay_app
from Transit.trip_planner.main import create_app as create_planner_app

SECRET = "test-secret-key-123"

DIRECTIONS_RESULT = {
    "status": "OK",
    "routes": [
        {
            "legs": [
                {
                    "steps": [
                        {"html_instructions": "Walk to <b>Chehalis Library</b>", "travel_mode": "WALKING"},
                        {
                            "html_instructions": "Bus towards Centralia",
                            "travel_mode": "TRANSIT",
                            "transit_details": {
                                "line": {"short_name": "1"},
                                "headsign": "Twin Transit Center",
                                "departure_stop": {"name": "Chehalis Library"},
                                "departure_time": {"text": "8:05 AM"},
                                "arrival_stop": {"name": "Twin Transit Center"},
                                "arrival_time": {"text": "8:25 AM"},
                            },
                        },
                    ]
                }
            ]
        }
    ],
}


class Upstream:
    """Records outbound calls and answers them like the directions provider."""

    def __init__(self, body=None, status_code=200, raw=None, exc=None):
        self.body = DIRECTIONS_RESULT if body is None else body
        self.status_code = status_code
        self.raw = raw
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, content=json.dumps(self.body))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def relay_settings():
    return RelaySettings(maps_api_key=SECRET)


@pytest.fixture
def relay_app(relay_settings, upstream):
    return create_relay_app(relay_settings, transport=upstream.transport)


@pytest.fixture
async def relay_client(relay_app):
    """Async client for the relay, with the directions provider mocked."""
    async with AsyncClient(transport=ASGITransport(app=relay_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def relay_transport(relay_app):
    """Transport that lets the trip planner talk to the in-process relay."""
    return ASGITransport(app=relay_app)


@pytest.fixture
async def planner_client(relay_transport):
    settings = PlannerSettings(relay_url="http://relay", timezone="America/Los_Angeles")
    app = create_planner_app(settings, transport=relay_transport)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
