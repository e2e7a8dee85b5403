import pytest
from httpx import ASGITransport, AsyncClient
from planner.api.api_run import app
from planner.api.workspace import Workspace, set_workspace
from planner.events import web_observers
from planner.infra.Plan_Repository import PlanRepository


@pytest.mark.asyncio
async def test_stroke_across_days_and_reload(tmp_path):
    """A stroke dragged across three day columns paints each column, and survives a reload."""

    store = tmp_path / "plans.json"
    set_workspace(Workspace(PlanRepository(store)))
    # the startup hook does not run under ASGITransport
    web_observers.start()
    cursor = web_observers.get_events()["next_cursor"]
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            # === 1. Switch to the 15-minute view ===
            resp = await ac.put("/api/view/scale", json={"scale": "15"})
            assert resp.json()["granularity"] == 3

            # === 2. Paint Monday to Wednesday at 08:00 ===
            await ac.post("/api/paint/begin", json={"day": 0, "slot": 97})
            await ac.post("/api/paint/continue", json={"day": 1, "slot": 96})
            await ac.post("/api/paint/continue", json={"day": 2, "slot": 98})
            resp = await ac.post("/api/paint/end")
            assert resp.json()["writes"] == 3

            # === 3. One grid event per column was recorded for the page to poll ===
            resp = await ac.get("/api/events", params={"since": cursor})
            assert resp.status_code == 200
            grid_events = [e for e in resp.json()["events"] if e["type"] == "plan.grid_changed"]
            assert [e["day"] for e in grid_events] == [0, 1, 2]
            assert all(e["start_slot"] == 96 and e["changed"] == 3 for e in grid_events)
            assert resp.json()["next_cursor"] > cursor

        # === 4. A fresh workspace reads the same grid back ===
        reloaded = Workspace(PlanRepository(store)).active_plan
        for day in range(3):
            assert reloaded.grid.slice(day, 96, 3) == ["a_work"] * 3
        assert reloaded.grid.get(3, 96) is None
    finally:
        set_workspace(None)
