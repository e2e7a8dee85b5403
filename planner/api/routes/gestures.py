"""Pointer gesture endpoints: paint strokes, activity reordering and the view scale.

Both gestures act on the active plan and keep their state in the workspace
engines between requests.
"""
import logging

from fastapi import APIRouter, HTTPException

from planner.api.workspace import get_workspace
from planner.logic.reorder.drag import RowRect
from planner.utilities.validators import (
    ScaleInput, StrokeBeginInput, StrokeMoveInput,
    ReorderPressInput, ReorderMoveInput, ReorderPointerInput,
)

router = APIRouter()
logger = logging.getLogger("planner_app")


def _layout(rows):
    return {r.id: RowRect(r.top, r.height, r.width) for r in rows}


# -------------------- View scale --------------------
@router.get('/api/view/scale')
async def get_scale():
    ws = get_workspace()
    return {"scale": ws.scale, "granularity": ws.granularity}


@router.put('/api/view/scale')
async def set_scale(payload: ScaleInput):
    ws = get_workspace()
    ws.set_scale(payload.scale)
    return {"scale": ws.scale, "granularity": ws.granularity}


# -------------------- Paint strokes --------------------
@router.post('/api/paint/begin')
async def paint_begin(payload: StrokeBeginInput):
    ws = get_workspace()
    write = ws.paint.begin_stroke(payload.day, payload.slot, payload.button)
    return {"state": ws.paint.state, "mode": ws.paint.stroke.mode, "write": write.to_dict()}


@router.post('/api/paint/continue')
async def paint_continue(payload: StrokeMoveInput):
    ws = get_workspace()
    write = ws.paint.continue_stroke(payload.day, payload.slot)
    return {"state": ws.paint.state, "write": write.to_dict() if write else None}


async def _finish_stroke():
    ws = get_workspace()
    writes = ws.paint.end_stroke()
    if writes:
        ws.persist()
    return {"state": ws.paint.state, "writes": writes}


@router.post('/api/paint/end')
async def paint_end():
    return await _finish_stroke()


@router.post('/api/paint/leave')
async def paint_leave():
    """Pointer left the grid: treated exactly like a release."""
    return await _finish_stroke()


# -------------------- Activity reorder --------------------
@router.get('/api/reorder')
async def reorder_state(viewport_width: float = 0):
    ws = get_workspace()
    drag = ws.reorder.drag
    if drag is None:
        return {"state": ws.reorder.state}
    out = {"state": ws.reorder.state, **drag.to_dict()}
    if viewport_width:
        out["preview"] = drag.preview_position(viewport_width)
    return out


@router.post('/api/reorder/press')
async def reorder_press(payload: ReorderPressInput):
    ws = get_workspace()
    if payload.activity_id not in ws.active_plan.activities:
        raise HTTPException(status_code=404, detail='Activity not found')
    drag = ws.reorder.press(payload.activity_id, payload.pointer_id, payload.client_x,
                            payload.client_y, _layout(payload.rows), payload.button)
    if drag is None:
        return {"state": ws.reorder.state, "accepted": False}
    return {"state": ws.reorder.state, "accepted": True, **drag.to_dict()}


@router.post('/api/reorder/move')
async def reorder_move(payload: ReorderMoveInput):
    ws = get_workspace()
    layout = _layout(payload.rows) if payload.rows is not None else None
    insertion = ws.reorder.move(payload.pointer_id, payload.client_x, payload.client_y, layout)
    if insertion is None:
        return {"state": ws.reorder.state, "accepted": False}
    return {"state": ws.reorder.state, "accepted": True, **insertion.to_dict()}


@router.post('/api/reorder/release')
async def reorder_release(payload: ReorderPointerInput):
    ws = get_workspace()
    drag = ws.reorder.drag
    pointer_id = payload.pointer_id if payload.pointer_id is not None else (drag.pointer_id if drag else -1)
    result = ws.reorder.release(pointer_id)
    if result is None:
        return {"state": ws.reorder.state, "accepted": False}
    if result["moved"]:
        ws.persist()
        logger.info("Activity order changed: %s -> %s", result["from_index"], result["to_index"])
    return {
        "state": ws.reorder.state,
        "accepted": True,
        **result,
        "order": ws.active_plan.activities.ids(),
    }


@router.post('/api/reorder/cancel')
async def reorder_cancel(payload: ReorderPointerInput):
    ws = get_workspace()
    cancelled = ws.reorder.cancel(payload.pointer_id)
    return {"state": ws.reorder.state, "cancelled": cancelled}
