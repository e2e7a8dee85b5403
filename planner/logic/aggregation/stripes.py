"""Stripe computation: collapse fine 5-minute slots into coarse visual rows.

For a granularity g (1, 3 or 12 slots per row) every (day, row) is classified as

  free   - every slot is free
  single - every slot holds the same activity
  mixed  - anything else; rendered as proportional left-to-right segments

Mixed segments are sorted by count descending. Ties keep the order in which
the activity first appears when scanning the row top to bottom; the synthetic
free segment is appended after all activities, so it loses every tie.
"""
from typing import Dict, List, Optional

from planner.domain.Activity import Activity
from planner.domain.Plan import Plan
from planner.utilities.constants import (
    SLOTS_PER_DAY, DAYS_PER_WEEK, SLOT_MINUTES, GRANULARITIES,
    FREE_LABEL, FREE_COLOUR, UNKNOWN_ACTIVITY_LABEL, UNKNOWN_ACTIVITY_COLOUR,
)
from planner.utilities.formatting import format_minutes, time_range_label

FREE = "free"
SINGLE = "single"
MIXED = "mixed"

FREE_SEGMENT_KEY = "__free__"


class Segment:
    def __init__(self, key: str, colour: str, count: int, label: str):
        self.key = key
        self.colour = colour
        self.count = count
        self.label = label
        self.start = 0.0  # fraction of the row width
        self.end = 0.0

    def to_dict(self):
        return {
            "key": self.key,
            "colour": self.colour,
            "count": self.count,
            "label": self.label,
            "minutes": self.count * SLOT_MINUTES,
            "start": self.start,
            "end": self.end,
        }


class Stripe:
    def __init__(self, kind: str, day: int, row: int, granularity: int,
                 activity: Optional[Activity] = None, activity_id: Optional[str] = None,
                 segments: Optional[List[Segment]] = None):
        self.kind = kind
        self.day = day
        self.row = row
        self.granularity = granularity
        self.activity = activity
        self.activity_id = activity_id
        self.segments = segments or []

    @property
    def start_slot(self) -> int:
        return self.row * self.granularity

    @property
    def time_label(self) -> str:
        return time_range_label(self.start_slot, self.granularity)

    @property
    def tooltip(self) -> str:
        """One line per segment: '<label>: <Hh MMm>'."""
        return "\n".join(
            f"{s.label}: {format_minutes(s.count * SLOT_MINUTES)}" for s in self.segments if s.count > 0
        )

    @property
    def gradient(self) -> str:
        """CSS linear-gradient with hard stops at the segment bands."""
        if self.kind != MIXED:
            return ""
        stops = [f"{s.colour} {s.start * 100:.2f}% {s.end * 100:.2f}%" for s in self.segments]
        return f"linear-gradient(to right, {', '.join(stops)})"

    def to_dict(self):
        d = {
            "kind": self.kind,
            "day": self.day,
            "row": self.row,
            "start_slot": self.start_slot,
            "label": self.time_label,
        }
        if self.kind == SINGLE:
            d["activity_id"] = self.activity_id
            d["activity"] = self.activity.to_dict() if self.activity else None
        elif self.kind == MIXED:
            d["segments"] = [s.to_dict() for s in self.segments]
            d["gradient"] = self.gradient
            d["tooltip"] = self.tooltip
        return d


def _check_granularity(granularity: int):
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unsupported granularity: {granularity}")


def classify_cells(cells: List[Optional[str]], activities: Dict[str, Activity],
                   day: int = 0, row: int = 0, granularity: Optional[int] = None) -> Stripe:
    """Classify one coarse row given its fine cells (scan order = slot order)."""
    g = granularity or len(cells)
    counts: Dict[str, int] = {}
    free = 0
    for cell in cells:
        if not cell:
            free += 1
        else:
            counts[cell] = counts.get(cell, 0) + 1

    if not counts:
        return Stripe(FREE, day, row, g)

    if len(counts) == 1 and free == 0:
        only_id = next(iter(counts))
        return Stripe(SINGLE, day, row, g, activity=activities.get(only_id), activity_id=only_id)

    segments = []
    for activity_id, n in counts.items():
        a = activities.get(activity_id)
        segments.append(Segment(
            activity_id,
            a.colour if a else UNKNOWN_ACTIVITY_COLOUR,
            n,
            a.name if a else UNKNOWN_ACTIVITY_LABEL,
        ))
    if free > 0:
        segments.append(Segment(FREE_SEGMENT_KEY, FREE_COLOUR, free, FREE_LABEL))

    # stable: equal counts keep first-encountered order
    segments.sort(key=lambda s: -s.count)

    acc = 0
    for s in segments:
        s.start = acc / g
        acc += s.count
        s.end = acc / g
    return Stripe(MIXED, day, row, g, segments=segments)


def classify_row(plan: Plan, day: int, row: int, granularity: int) -> Stripe:
    """Classification of visual row `row` of `day` at the given granularity."""
    _check_granularity(granularity)
    if not 0 <= row < SLOTS_PER_DAY // granularity:
        raise IndexError(f"Row index out of range: {row}")
    cells = plan.grid.slice(day, row * granularity, granularity)
    return classify_cells(cells, plan.activities.by_id(), day, row, granularity)


def compute_view(plan: Plan, granularity: int) -> List[List[Stripe]]:
    """All stripes of the week: 7 day columns of 288/g rows."""
    _check_granularity(granularity)
    activities = plan.activities.by_id()
    rows = SLOTS_PER_DAY // granularity
    view = []
    for day in range(DAYS_PER_WEEK):
        col = plan.grid.columns[day]
        view.append([
            classify_cells(col[r * granularity:(r + 1) * granularity], activities, day, r, granularity)
            for r in range(rows)
        ])
    return view


__all__ = ["Segment", "Stripe", "classify_cells", "classify_row", "compute_view", "FREE", "SINGLE", "MIXED"]
