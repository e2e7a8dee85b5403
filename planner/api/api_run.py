from fastapi import FastAPI, Request, Query, HTTPException
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from datetime import datetime
from typing import Optional
import logging

from planner.api.workspace import get_workspace
from planner.api.routes import plans, activities, gestures, transfer
from planner.events.web_observers import start as start_event_observers, get_events as get_web_events
from planner.logic.aggregation.stripes import compute_view
from planner.logic.reporting.allocation import compute_allocation_summary
from planner.utilities.config import TEMPLATES_DIR
from planner.utilities.constants import DAYS, TIME_SCALES, ICON_KEYS, PRESET_COLOURS
from planner.utilities.formatting import format_minutes, hex_with_alpha, icon_label

# Logging
logger = logging.getLogger("planner_app")

# Initialize FastAPI app
app = FastAPI(title="Weekly 5-minute Planner API")

# Include routers
app.include_router(plans.router)
app.include_router(activities.router)
app.include_router(gestures.router)
app.include_router(transfer.router)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["minutes"] = format_minutes
templates.env.filters["tint"] = hex_with_alpha


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web polling when the app starts."""
    start_event_observers()
    logger.info("Web observers for plan events started")


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
async def main_page(request: Request, scale: Optional[str] = Query(default=None)):
    ws = get_workspace()
    scale = scale or ws.scale
    if scale not in TIME_SCALES:
        raise HTTPException(status_code=400, detail=f"Scale must be one of {', '.join(TIME_SCALES)}")
    plan = ws.active_plan
    g = TIME_SCALES[scale]
    view = compute_view(plan, g)
    # rows x days for the table body
    rows = [[view[day][r] for day in range(len(DAYS))] for r in range(len(view[0]))]
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "plan": plan,
            "plans": ws.book.plans,
            "days": DAYS,
            "rows": rows,
            "scale": scale,
            "scales": list(TIME_SCALES),
            "summary": compute_allocation_summary(plan),
            "icons": [(key, icon_label(key)) for key in ICON_KEYS],
            "colours": PRESET_COLOURS,
            "time": _ts(),
        }
    )


# -------------------- API: Events --------------------
@app.get('/api/events')
async def api_events(since: Optional[int] = Query(default=None)):
    """Recent plan events; poll with since=<next_cursor>."""
    return get_web_events(since)
