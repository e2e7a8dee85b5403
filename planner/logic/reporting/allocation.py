"""Allocation summary: minutes per activity and free minutes for one plan.

Recomputed from the grid on every call; nothing is cached on the plan.
"""
from typing import Any, Dict

from planner.utilities.constants import SLOT_MINUTES, WEEK_MINUTES
from planner.utilities.formatting import format_minutes


def compute_allocation_summary(plan) -> Dict[str, Any]:
    """Aggregate allocation for the given plan.

    Returns structure:
    {
      'activities': [ {'id', 'name', 'colour', 'icon', 'minutes', 'label'}, ... ],   # registry order
      'minutes_by_id': { id: minutes },
      'allocated_minutes': int,
      'free_minutes': int,      # includes cells naming an unknown activity
      'unknown_minutes': int,
      'total_minutes': 10080,
    }
    """
    counts = plan.grid.counts()
    known = set(plan.activities.ids())

    free_cells = counts.get(None, 0)
    unknown_cells = sum(n for key, n in counts.items() if key is not None and key not in known)

    activities = []
    minutes_by_id = {}
    for a in plan.activities:
        minutes = counts.get(a.id, 0) * SLOT_MINUTES
        minutes_by_id[a.id] = minutes
        activities.append({
            'id': a.id,
            'name': a.name,
            'colour': a.colour,
            'icon': a.icon,
            'minutes': minutes,
            'label': format_minutes(minutes),
        })

    free_minutes = (free_cells + unknown_cells) * SLOT_MINUTES
    return {
        'activities': activities,
        'minutes_by_id': minutes_by_id,
        'allocated_minutes': sum(minutes_by_id.values()),
        'free_minutes': free_minutes,
        'free_label': format_minutes(free_minutes),
        'unknown_minutes': unknown_cells * SLOT_MINUTES,
        'total_minutes': WEEK_MINUTES,
    }


__all__ = ["compute_allocation_summary"]
