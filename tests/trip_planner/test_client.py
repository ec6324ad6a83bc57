import httpx
import pytest

from Transit.trip_planner.client import plan_trip
from Transit.trip_planner.errors import FetchError, TripValidationError
from Transit.trip_planner.models import TimeMode, TripRequest

from conftest import DIRECTIONS_RESULT, SECRET


def _relay(handler):
    calls = []

    def record(request):
        calls.append(request)
        return handler(request)

    return httpx.MockTransport(record), calls


async def test_plan_trip_returns_provider_body(relay_transport, upstream):
    request = TripRequest(origin="Chehalis Library", destination="Twin Transit Center")
    result = await plan_trip(request, relay_url="http://relay", transport=relay_transport)

    assert result == DIRECTIONS_RESULT
    outbound = upstream.requests[0].url
    assert outbound.params["key"] == SECRET
    assert outbound.params["origin"] == "Chehalis Library"
    assert outbound.params["mode"] == "transit"


async def test_relay_call_carries_no_key():
    transport, calls = _relay(lambda r: httpx.Response(200, json={"routes": []}))
    request = TripRequest(origin="A", destination="B", time_mode=TimeMode.ARRIVE)
    await plan_trip(request, relay_url="http://relay", transport=transport)

    assert len(calls) == 1
    assert calls[0].url.path == "/api/proxy"
    target = httpx.URL(calls[0].url.params["target"])
    assert "key" not in target.params
    assert "arrival_time" in target.params
    assert "departure_time" not in target.params


async def test_validation_happens_before_network():
    transport, calls = _relay(lambda r: httpx.Response(200, json={}))
    with pytest.raises(TripValidationError) as exc:
        await plan_trip(TripRequest(origin="", destination="B"), relay_url="http://relay", transport=transport)

    assert calls == []
    assert exc.value.message == "Please enter both origin and destination."


@pytest.mark.parametrize(
    "handler",
    [
        lambda r: httpx.Response(500, json={"error": "Proxy failed", "detail": "boom"}),
        lambda r: httpx.Response(400, json={"error": "Missing target URL"}),
        lambda r: httpx.Response(200, content=b"not json"),
    ],
)
async def test_relay_problems_become_fetch_error(handler):
    transport, calls = _relay(handler)
    with pytest.raises(FetchError) as exc:
        await plan_trip(TripRequest(origin="A", destination="B"), relay_url="http://relay", transport=transport)

    assert len(calls) == 1
    assert exc.value.message.startswith("Failed to get directions")


async def test_network_failure_becomes_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    transport, calls = _relay(handler)
    with pytest.raises(FetchError) as exc:
        await plan_trip(TripRequest(origin="A", destination="B"), relay_url="http://relay", transport=transport)

    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    assert len(calls) == 1


async def test_malformed_relay_url_becomes_fetch_error():
    transport, calls = _relay(lambda r: httpx.Response(200, json={}))
    with pytest.raises(FetchError) as exc:
        await plan_trip(TripRequest(origin="A", destination="B"), relay_url="http://re\x01lay", transport=transport)

    assert isinstance(exc.value.__cause__, httpx.InvalidURL)
    assert calls == []
