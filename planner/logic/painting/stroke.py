"""Paint engine: turns a continuous pointer stroke into block-aligned range writes.

A stroke is a small state machine:

    idle --begin_stroke--> active --continue_stroke*--> active --end_stroke/leave_surface--> idle

While active it remembers the stroke mode (paint or erase, resolved once at
begin) and the last coarse cell written, so re-entering the same cell does not
write again. Granularity and the selected activity are read from the current
view/plan on every write, so a zoom change mid-stroke applies from the next
cell on.
"""
from typing import Callable, Optional, Tuple
import logging

from planner.domain.Plan import Plan
from planner.utilities.constants import TOOL_ERASE, GRANULARITIES

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0
SECONDARY_BUTTON = 2

IDLE = "idle"
ACTIVE = "active"


class StrokeWrite:
    """One range write performed by the engine."""

    def __init__(self, day: int, start_slot: int, length: int, value: Optional[str], changed: int):
        self.day = day
        self.start_slot = start_slot
        self.length = length
        self.value = value
        self.changed = changed

    def to_dict(self):
        return {
            "day": self.day,
            "start_slot": self.start_slot,
            "length": self.length,
            "value": self.value,
            "changed": self.changed,
        }

    def __repr__(self) -> str:
        return f"StrokeWrite(day={self.day}, start={self.start_slot}, len={self.length}, value={self.value!r})"


class PaintStroke:
    """Gesture-scoped state of an active stroke."""

    def __init__(self, mode: str, day: int, block_start: int):
        self.mode = mode
        self.last_cell: Tuple[int, int] = (day, block_start)
        self.writes = 0


def block_start(slot: int, granularity: int) -> int:
    """First fine slot of the coarse block containing `slot`."""
    return (slot // granularity) * granularity


class PaintEngine:
    def __init__(self, get_plan: Callable[[], Plan], get_granularity: Callable[[], int]):
        self._get_plan = get_plan
        self._get_granularity = get_granularity
        self.stroke: Optional[PaintStroke] = None

    @property
    def state(self) -> str:
        return ACTIVE if self.stroke is not None else IDLE

    def _granularity(self) -> int:
        g = self._get_granularity()
        if g not in GRANULARITIES:
            raise ValueError(f"Unsupported granularity: {g}")
        return g

    def _write(self, plan: Plan, day: int, start: int, g: int) -> StrokeWrite:
        value = None if self.stroke.mode == TOOL_ERASE else plan.selected_activity_id
        changed = plan.write_range(day, start, g, value)
        self.stroke.writes += 1
        return StrokeWrite(day, start, g, value, changed)

    def begin_stroke(self, day: int, slot: int, button: int = PRIMARY_BUTTON) -> StrokeWrite:
        '''
        Pointer down on a cell. The secondary button always erases for this
        stroke only; the plan's configured tool is left untouched.
        '''
        plan = self._get_plan()
        g = self._granularity()
        mode = TOOL_ERASE if button == SECONDARY_BUTTON else plan.tool
        start = block_start(slot, g)
        self.stroke = PaintStroke(mode, day, start)
        logger.debug("Stroke begin plan=%s day=%s slot=%s mode=%s g=%s", plan.id, day, slot, mode, g)
        return self._write(plan, day, start, g)

    def continue_stroke(self, day: int, slot: int) -> Optional[StrokeWrite]:
        '''
        Pointer entered a cell. Returns None when idle or when the coarse cell
        is the one written last.
        '''
        if self.stroke is None:
            return None
        g = self._granularity()
        start = block_start(slot, g)
        if self.stroke.last_cell == (day, start):
            return None
        self.stroke.last_cell = (day, start)
        return self._write(self._get_plan(), day, start, g)

    def end_stroke(self) -> int:
        '''
        Pointer released. Returns the number of writes the stroke performed.
        '''
        if self.stroke is None:
            return 0
        writes = self.stroke.writes
        self.stroke = None
        logger.debug("Stroke end after %s writes", writes)
        return writes

    # pointer left the tracked surface: same terminal transition as a release
    leave_surface = end_stroke
