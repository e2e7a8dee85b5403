"""Reorder engine: pointer-driven drag-to-reorder of a plan's activity list.

States: idle -> dragging -> idle. The drag only touches the registry order on
release, with a single-item move; cancel never mutates anything.

Insertion is computed against the list *without* the dragged row: the row is
inserted before the first remaining row whose vertical midpoint lies below
the pointer, or after the last row when there is none.
"""
from typing import Callable, Dict, List, Optional
import logging

from planner.domain.Plan import Plan

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0
PREVIEW_MARGIN = 16

IDLE = "idle"
DRAGGING = "dragging"

ABOVE = "above"
BELOW = "below"


class RowRect:
    """Measured box of one list row (client coordinates)."""

    def __init__(self, top: float, height: float, width: float = 0.0):
        self.top = top
        self.height = height
        self.width = width

    @property
    def mid_y(self) -> float:
        return self.top + self.height / 2


class Insertion:
    """Insert position within the list without the dragged item, plus the indicator hint."""

    def __init__(self, index: int, indicator_id: Optional[str], indicator_pos: str):
        self.index = index
        self.indicator_id = indicator_id
        self.indicator_pos = indicator_pos

    def to_dict(self):
        return {"insert_index": self.index, "indicator_id": self.indicator_id, "indicator_pos": self.indicator_pos}


class ReorderDrag:
    """Gesture-scoped state of an active drag."""

    def __init__(self, activity_id: str, pointer_id: int, start_index: int,
                 client_x: float, client_y: float, offset_y: float, width: float, height: float):
        self.activity_id = activity_id
        self.pointer_id = pointer_id
        self.start_index = start_index
        self.client_x = client_x
        self.client_y = client_y
        self.offset_y = offset_y
        self.width = width
        self.height = height
        # set by the first pointer move
        self.insertion: Optional[Insertion] = None

    def preview_position(self, viewport_width: float) -> Dict[str, float]:
        '''Where the floating copy of the row is drawn, anchored to the grab point.'''
        top = self.client_y - self.offset_y
        x = self.client_x - self.width / 2
        x = max(PREVIEW_MARGIN, min(viewport_width - self.width - PREVIEW_MARGIN, x))
        return {"top": top, "left": x, "width": self.width}

    def to_dict(self):
        return {
            "activity_id": self.activity_id,
            "pointer_id": self.pointer_id,
            "start_index": self.start_index,
            "client_x": self.client_x,
            "client_y": self.client_y,
            **(self.insertion.to_dict() if self.insertion else Insertion(None, None, None).to_dict()),
        }


def compute_insertion(order: List[str], dragged_id: str, layout: Dict[str, RowRect], client_y: float) -> Insertion:
    """Insertion point for `dragged_id` given the pointer Y and measured rows.

    Rows missing from `layout` are not candidates but still count for indices.
    """
    without = [i for i in order if i != dragged_id]
    before_id = None
    for activity_id in without:
        rect = layout.get(activity_id)
        if rect is not None and client_y < rect.mid_y:
            before_id = activity_id
            break
    if before_id is None:
        last_id = without[-1] if without else None
        return Insertion(len(without), last_id, BELOW)
    return Insertion(without.index(before_id), before_id, ABOVE)


def resolve_target_index(order: List[str], dragged_id: str, insert_index: int) -> int:
    """Map an insertion index (list without the dragged item) back onto the full order.

    "Before X" resolves to X's index in `order`; "after the last item" to the last index.
    """
    without = [i for i in order if i != dragged_id]
    if len(without) == len(order):
        raise ValueError(f"{dragged_id!r} is not in the order")
    clamped = max(0, min(len(without), insert_index))
    if clamped >= len(without):
        return len(order) - 1
    return order.index(without[clamped])


class ReorderEngine:
    def __init__(self, get_plan: Callable[[], Plan]):
        self._get_plan = get_plan
        self.drag: Optional[ReorderDrag] = None
        self.layout: Dict[str, RowRect] = {}

    @property
    def state(self) -> str:
        return DRAGGING if self.drag is not None else IDLE

    def press(self, activity_id: str, pointer_id: int, client_x: float, client_y: float,
              layout: Dict[str, RowRect], button: int = PRIMARY_BUTTON) -> Optional[ReorderDrag]:
        '''
        Primary-button press on a row's drag handle. Ignored (returns None) when
        a drag is already running, for other buttons, or for unknown/unmeasured rows.
        '''
        if self.drag is not None or button != PRIMARY_BUTTON:
            return None
        rect = layout.get(activity_id)
        start_index = self._get_plan().activities.index_of(activity_id)
        if rect is None or start_index < 0:
            return None
        self.layout = dict(layout)
        self.drag = ReorderDrag(activity_id, pointer_id, start_index, client_x, client_y,
                                client_y - rect.top, rect.width, rect.height)
        logger.debug("Reorder press id=%s index=%s", activity_id, start_index)
        return self.drag

    def move(self, pointer_id: int, client_x: float, client_y: float,
             layout: Optional[Dict[str, RowRect]] = None) -> Optional[Insertion]:
        if self.drag is None or pointer_id != self.drag.pointer_id:
            return None
        if layout is not None:
            self.layout = dict(layout)
        order = self._get_plan().activities.ids()
        self.drag.client_x = client_x
        self.drag.client_y = client_y
        self.drag.insertion = compute_insertion(order, self.drag.activity_id, self.layout, client_y)
        return self.drag.insertion

    def release(self, pointer_id: int) -> Optional[Dict]:
        '''
        Ends the drag and applies at most one move. Returns a summary dict, or
        None when the event belongs to another pointer / no drag is running.
        '''
        if self.drag is None or pointer_id != self.drag.pointer_id:
            return None
        drag, self.drag = self.drag, None
        self.layout = {}
        plan = self._get_plan()
        order = plan.activities.ids()
        from_index = plan.activities.index_of(drag.activity_id)
        if from_index < 0:
            # dragged activity vanished mid-gesture
            return {"moved": False, "from_index": -1, "to_index": -1}
        if drag.insertion is None:
            # released before any move: nothing was dropped anywhere
            to_index = from_index
        else:
            to_index = resolve_target_index(order, drag.activity_id, drag.insertion.index)
        moved = from_index != to_index and plan.move_activity(from_index, to_index)
        logger.debug("Reorder release id=%s %s -> %s moved=%s", drag.activity_id, from_index, to_index, moved)
        return {"moved": bool(moved), "from_index": from_index, "to_index": to_index}

    def cancel(self, pointer_id: Optional[int] = None) -> bool:
        '''Abort without touching the order (device lost, gesture cancelled).'''
        if self.drag is None:
            return False
        if pointer_id is not None and pointer_id != self.drag.pointer_id:
            return False
        self.drag = None
        self.layout = {}
        return True
