from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from Transit.trip_planner.models import StepDescriptor, TransitDetail


def _get(data: Any, *path) -> Any:
    """Walk nested dicts/lists; any missing or mistyped hop gives None."""
    for key in path:
        if isinstance(key, int):
            if not isinstance(data, list) or len(data) <= key:
                return None
        elif not isinstance(data, dict):
            return None
        data = data[key] if isinstance(key, int) else data.get(key)
    return data


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _transit_detail(step: Dict[str, Any]) -> Optional[TransitDetail]:
    details = step.get("transit_details")
    if not isinstance(details, dict):
        return None

    return TransitDetail(
        line=_text(_get(details, "line", "short_name")),
        headsign=_text(details.get("headsign")),
        departure_stop=_text(_get(details, "departure_stop", "name")),
        departure_time=_text(_get(details, "departure_time", "text")),
        arrival_stop=_text(_get(details, "arrival_stop", "name")),
        arrival_time=_text(_get(details, "arrival_time", "text")),
    )


class RouteSteps:
    """
    Steps of the first leg of the first route, one StepDescriptor each.

    Iterating walks the payload again every time, so the same object can be
    rendered more than once.
    """

    def __init__(self, result: Optional[Dict[str, Any]]):
        self.result = result

    def __iter__(self) -> Iterator[StepDescriptor]:
        steps = _get(self.result, "routes", 0, "legs", 0, "steps")
        if not isinstance(steps, list):
            return
        for step in steps:
            if not isinstance(step, dict):
                continue
            yield StepDescriptor(
                instructions_html=_text(step.get("html_instructions")) or "",
                transit=_transit_detail(step),
            )

    def __bool__(self) -> bool:
        return any(True for _ in self)


def has_route(result: Optional[Dict[str, Any]]) -> bool:
    return isinstance(_get(result, "routes", 0), dict)


def route_status(result: Optional[Dict[str, Any]]) -> Tuple[Optional[str], Optional[str]]:
    """Provider status and error message, e.g. ("ZERO_RESULTS", None)."""
    if not isinstance(result, dict):
        return None, None
    return _text(result.get("status")), _text(result.get("error_message"))


def transit_lines(detail: TransitDetail) -> List[str]:
    lines = []
    bus = " - ".join(p for p in (detail.line, detail.headsign) if p)
    if bus:
        lines.append(f"Bus: {bus}")
    if detail.departure_stop or detail.departure_time:
        lines.append(_stop_line("From", detail.departure_stop, detail.departure_time))
    if detail.arrival_stop or detail.arrival_time:
        lines.append(_stop_line("To", detail.arrival_stop, detail.arrival_time))
    return lines


def _stop_line(label: str, stop: Optional[str], at: Optional[str]) -> str:
    line = f"{label}: {stop or ''}".rstrip()
    if at:
        line += f" at {at}"
    return line


def format_steps_text(steps: Iterable[StepDescriptor]) -> str:
    out = []
    for i, step in enumerate(steps, start=1):
        out.append(f"{i}. {step.instructions_text}")
        if step.transit is not None:
            out.extend(f"     {line}" for line in transit_lines(step.transit))
    return "\n".join(out)
