from fastapi import APIRouter, HTTPException

from planner.api.routes.plans import plan_or_404
from planner.api.workspace import get_workspace
from planner.utilities.validators import ActivityInput, ActivityUpdateInput

router = APIRouter()


def _require_activity(plan, activity_id: str):
    if activity_id not in plan.activities:
        raise HTTPException(status_code=404, detail='Activity not found')


@router.get('/api/plans/{plan_id}/activities')
async def list_activities(plan_id: str):
    plan = plan_or_404(plan_id)
    return {"activities": plan.activities.to_dict(), "selected_activity_id": plan.selected_activity_id}


@router.post('/api/plans/{plan_id}/activities')
async def add_activity(plan_id: str, payload: ActivityInput):
    plan = plan_or_404(plan_id)
    activity = plan.add_activity(payload.name, payload.colour.upper(), payload.icon)
    get_workspace().persist()
    return {**activity.to_dict(), "selected": plan.selected_activity_id == activity.id}


@router.put('/api/plans/{plan_id}/activities/{activity_id}')
async def edit_activity(plan_id: str, activity_id: str, payload: ActivityUpdateInput):
    plan = plan_or_404(plan_id)
    _require_activity(plan, activity_id)
    colour = payload.colour.upper() if payload.colour else None
    activity = plan.update_activity(activity_id, name=payload.name, colour=colour, icon=payload.icon)
    get_workspace().persist()
    return activity.to_dict()


@router.post('/api/plans/{plan_id}/activities/{activity_id}/clear')
async def clear_activity(plan_id: str, activity_id: str):
    """Free every cell of the activity, keep the activity."""
    plan = plan_or_404(plan_id)
    _require_activity(plan, activity_id)
    cleared = plan.clear_activity_cells(activity_id)
    get_workspace().persist()
    return {"success": True, "cleared": cleared}


@router.delete('/api/plans/{plan_id}/activities/{activity_id}')
async def delete_activity(plan_id: str, activity_id: str):
    ws = get_workspace()
    plan = plan_or_404(plan_id)
    _require_activity(plan, activity_id)
    drag = ws.reorder.drag
    if plan is ws.active_plan and drag is not None and drag.activity_id == activity_id:
        ws.reorder.cancel()
    cleared = plan.delete_activity(activity_id)
    ws.persist()
    return {"success": True, "cleared": cleared, "selected_activity_id": plan.selected_activity_id}
