import logging
from datetime import datetime, tzinfo
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from Transit.config import PlannerSettings, configure_logging, load_planner_settings
from Transit.trip_planner.client import plan_trip
from Transit.trip_planner.errors import TripPlannerError
from Transit.trip_planner.models import FormState
from Transit.trip_planner.pages import render_page

logger = logging.getLogger(__name__)


def build_form_state(
    origin: str = "",
    destination: str = "",
    date: Optional[str] = None,
    time: Optional[str] = None,
    mode: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> FormState:
    """Form fields as a FormState; date and time are wall-clock values in `tz`."""
    state = FormState(trip_time=datetime.now(tz)).set_origin(origin).set_destination(destination)
    if date:
        state = state.set_date(date)
    if time:
        state = state.set_time(time)
    if mode:
        state = state.set_mode(mode)
    return state


def create_app(
    settings: PlannerSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    app = FastAPI(title="Transit Trip Planner")
    tz = settings.tzinfo

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return render_page(FormState(trip_time=datetime.now(tz)))

    @app.get("/plan", response_class=HTMLResponse)
    async def plan(
        origin: str = "",
        destination: str = "",
        date: Optional[str] = None,
        time: Optional[str] = None,
        mode: Optional[str] = None,
    ):
        # fields are kept on every outcome so the user can fix and resubmit
        state = FormState(trip_time=datetime.now(tz)).set_origin(origin).set_destination(destination)
        try:
            state = build_form_state(origin, destination, date, time, mode, tz)
            result = await plan_trip(
                state.to_trip_request(),
                relay_url=settings.relay_url,
                directions_url=settings.directions_url,
                transport=transport,
                timeout=settings.timeout_sec,
            )
            state = state.with_result(result)
        except TripPlannerError as e:
            logger.warning(f"Trip request not planned: {e.message}")
            state = state.with_error(e.message)

        return render_page(state)

    return app


configure_logging()
app = create_app(load_planner_settings())


def main():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)


if __name__ == "__main__":
    main()
