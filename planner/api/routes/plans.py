from fastapi import APIRouter, HTTPException, Query

from planner.api.workspace import get_workspace
from planner.logic.aggregation.stripes import compute_view
from planner.logic.reporting.allocation import compute_allocation_summary
from planner.utilities.constants import TIME_SCALES
from planner.utilities.validators import PlanNameInput, SelectionInput, ToolInput

router = APIRouter()


def plan_or_404(plan_id: str):
    plan = get_workspace().book.get(plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail='Plan not found')
    return plan


def _plan_row(plan, active_id):
    return {
        "id": plan.id,
        "name": plan.name,
        "activities": len(plan.activities),
        "active": plan.id == active_id,
    }


@router.get('/api/plans')
async def list_plans():
    book = get_workspace().book
    return {"plans": [_plan_row(p, book.active_plan_id) for p in book.plans], "active_plan_id": book.active_plan_id}


@router.post('/api/plans')
async def create_plan(payload: PlanNameInput):
    ws = get_workspace()
    try:
        plan = ws.book.create_plan(payload.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    ws.reset_gestures()
    ws.persist()
    return plan.to_dict()


@router.get('/api/plans/{plan_id}')
async def get_plan(plan_id: str):
    return plan_or_404(plan_id).to_dict()


@router.put('/api/plans/{plan_id}')
async def rename_plan(plan_id: str, payload: PlanNameInput):
    ws = get_workspace()
    plan_or_404(plan_id)
    try:
        plan = ws.book.rename_plan(plan_id, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    ws.persist()
    return {"success": True, "id": plan.id, "name": plan.name}


@router.post('/api/plans/{plan_id}/duplicate')
async def duplicate_plan(plan_id: str, payload: PlanNameInput):
    ws = get_workspace()
    plan_or_404(plan_id)
    try:
        copy = ws.book.duplicate_plan(plan_id, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    ws.reset_gestures()
    ws.persist()
    return copy.to_dict()


@router.delete('/api/plans/{plan_id}')
async def delete_plan(plan_id: str):
    ws = get_workspace()
    plan_or_404(plan_id)
    was_active = plan_id == ws.book.active_plan_id
    if not ws.book.delete_plan(plan_id):
        raise HTTPException(status_code=400, detail='Cannot delete the last plan')
    if was_active:
        ws.reset_gestures()
    ws.persist()
    return {"success": True, "active_plan_id": ws.book.active_plan_id}


@router.post('/api/plans/{plan_id}/activate')
async def activate_plan(plan_id: str):
    ws = get_workspace()
    plan_or_404(plan_id)
    ws.activate(plan_id)
    ws.persist()
    return {"success": True, "active_plan_id": plan_id}


@router.put('/api/plans/{plan_id}/tool')
async def set_tool(plan_id: str, payload: ToolInput):
    plan = plan_or_404(plan_id)
    plan.set_tool(payload.tool)
    get_workspace().persist()
    return {"success": True, "tool": plan.tool}


@router.put('/api/plans/{plan_id}/selection')
async def set_selection(plan_id: str, payload: SelectionInput):
    plan = plan_or_404(plan_id)
    try:
        plan.select_activity(payload.activity_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    get_workspace().persist()
    return {"success": True, "selected_activity_id": plan.selected_activity_id}


@router.get('/api/plans/{plan_id}/view')
async def plan_view(plan_id: str, scale: str = Query(default=None)):
    """Stripes of every (day, row) at the requested or current scale."""
    plan = plan_or_404(plan_id)
    scale = scale or get_workspace().scale
    if scale not in TIME_SCALES:
        raise HTTPException(status_code=400, detail=f"Scale must be one of {', '.join(TIME_SCALES)}")
    g = TIME_SCALES[scale]
    view = compute_view(plan, g)
    return {
        "plan_id": plan.id,
        "scale": scale,
        "granularity": g,
        "days": [[stripe.to_dict() for stripe in col] for col in view],
    }


@router.get('/api/plans/{plan_id}/summary')
async def plan_summary(plan_id: str):
    plan = plan_or_404(plan_id)
    return {"plan_id": plan.id, **compute_allocation_summary(plan)}
