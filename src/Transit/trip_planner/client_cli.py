import asyncio
from datetime import datetime, tzinfo
from typing import Optional

from Transit.config import configure_logging, load_planner_settings
from Transit.trip_planner.client import plan_trip
from Transit.trip_planner.errors import TripPlannerError, TripValidationError
from Transit.trip_planner.models import TimeMode, TripRequest
from Transit.trip_planner.render import RouteSteps, format_steps_text, has_route, route_status


def parse_when(text: str, tz: Optional[tzinfo] = None) -> datetime:
    """Empty means now; otherwise 'YYYY-MM-DD HH:MM' or just 'HH:MM' today, wall-clock in `tz`."""
    text = text.strip()
    now = datetime.now(tz)
    if not text:
        return now
    for fmt in ("%Y-%m-%d %H:%M", "%H:%M"):
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if fmt == "%H:%M":
            return now.replace(hour=parsed.hour, minute=parsed.minute, second=0, microsecond=0)
        return parsed.replace(tzinfo=tz)
    raise TripValidationError(f"Could not read time '{text}', use YYYY-MM-DD HH:MM or HH:MM.")


def parse_mode(text: str) -> TimeMode:
    return TimeMode.ARRIVE if text.strip().lower().startswith("a") else TimeMode.DEPART


def describe_result(result: dict) -> str:
    if not has_route(result):
        status, message = route_status(result)
        return f"No route found. ({status or 'unknown status'}) {message or ''}".rstrip()
    return "Route Preview:\n" + format_steps_text(RouteSteps(result))


async def run_cli():
    settings = load_planner_settings()
    print("Lewis County Transit Trip Planner")
    print(f"Relay: {settings.relay_url}")
    print("Type 'exit' to quit.")

    while True:
        try:
            origin = input("\nFrom: ").strip()
            if origin.lower() in ("exit", "quit"):
                break
            destination = input("To: ").strip()
            when = input("When (YYYY-MM-DD HH:MM, empty = now): ")
            mode = input("[d]epart at / [a]rrive by (default d): ")
        except EOFError:
            break

        try:
            request = TripRequest(
                origin=origin,
                destination=destination,
                timestamp=parse_when(when, settings.tzinfo),
                time_mode=parse_mode(mode),
            )
            result = await plan_trip(
                request,
                relay_url=settings.relay_url,
                directions_url=settings.directions_url,
                timeout=settings.timeout_sec,
            )
        except TripPlannerError as e:
            print(f"Error: {e.message}")
            continue

        print(describe_result(result))


def main():
    configure_logging("WARNING")
    asyncio.run(run_cli())


if __name__ == "__main__":
    main()
