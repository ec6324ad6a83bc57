from html import escape
from typing import List

from Transit.trip_planner.markup import sanitize_instructions
from Transit.trip_planner.models import FormState, StepDescriptor, TimeMode
from Transit.trip_planner.render import RouteSteps, has_route, route_status, transit_lines

TITLE = "Lewis County Transit Trip Planner"

STYLE = """
body { font-family: system-ui, sans-serif; background: #f4f4f5; }
.card { max-width: 36rem; margin: 2rem auto; padding: 1.5rem; background: #fff;
        border-radius: .75rem; box-shadow: 0 10px 25px rgba(0,0,0,.12); }
label { display: block; font-weight: 600; margin-top: .75rem; }
input[type=text] { width: 100%; padding: .4rem; box-sizing: border-box; }
.row { display: flex; gap: 1rem; align-items: center; margin-top: .75rem; }
.muted { color: #71717a; font-size: .85rem; }
.error { color: #b91c1c; margin-top: 1rem; }
.transit { margin-left: .5rem; font-size: .75rem; color: #71717a; }
button { margin-top: 1rem; padding: .5rem 1rem; }
"""


def _attr(value: str) -> str:
    return escape(value, quote=True)


def render_step(step: StepDescriptor) -> str:
    # provider markup is sanitised, then inserted without escaping
    html = f"<li><span>{sanitize_instructions(step.instructions_html)}</span>"
    if step.transit is not None:
        lines = transit_lines(step.transit)
        if lines:
            html += '<div class="transit">' + "<br>".join(escape(line) for line in lines) + "</div>"
    return html + "</li>"


def render_result(state: FormState) -> str:
    if state.error:
        return f'<p class="error" role="alert">{escape(state.error)}</p>'
    if state.result is None:
        return ""

    if not has_route(state.result):
        status, message = route_status(state.result)
        text = "No route found."
        if status:
            text += f" ({status})"
        if message:
            text += f" {message}"
        return f'<p class="muted">{escape(text)}</p>'

    items: List[str] = [render_step(step) for step in RouteSteps(state.result)]
    return (
        '<div class="result"><h2>Route Preview</h2>'
        f'<ul>{"".join(items)}</ul></div>'
    )


def render_page(state: FormState) -> str:
    depart = " checked" if state.mode == TimeMode.DEPART else ""
    arrive = " checked" if state.mode == TimeMode.ARRIVE else ""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{TITLE}</title>
<style>{STYLE}</style>
</head>
<body>
<div class="card">
<h1>{TITLE}</h1>
<p class="muted">Plan your route using Lewis County public transportation.</p>
<form method="get" action="/plan">
<label for="origin">From</label>
<input type="text" id="origin" name="origin" value="{_attr(state.origin)}" placeholder="e.g., Chehalis Library, Centralia College">
<label for="destination">To</label>
<input type="text" id="destination" name="destination" value="{_attr(state.destination)}" placeholder="e.g., Twin Transit Center, Yard Birds Mall">
<div class="row">
<div><label for="date">Date</label>
<input type="date" id="date" name="date" value="{state.trip_time.strftime('%Y-%m-%d')}"></div>
<div><label for="time">Time</label>
<input type="time" id="time" name="time" value="{state.trip_time.strftime('%H:%M')}"></div>
</div>
<div class="row">
<label><input type="radio" name="mode" value="depart"{depart}> Leave At</label>
<label><input type="radio" name="mode" value="arrive"{arrive}> Arrive By</label>
</div>
<button type="submit">Plan My Trip</button>
</form>
{render_result(state)}
</div>
</body>
</html>
"""
