"""Event helper utilities.

Helpers for publishing plan-related events on a bus (the global one unless
the caller passes its own).

Quick import:
    from planner.events.event_helpers import (
        publish_grid_changed, publish_activities_changed,
        publish_activity_deleted, publish_document_imported,
    )
"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    PLAN_GRID_CHANGED, PLAN_ACTIVITIES_CHANGED, PLAN_ACTIVITY_DELETED, DOCUMENT_IMPORTED,
)

__all__ = [
    'publish_grid_changed', 'publish_activities_changed',
    'publish_activity_deleted', 'publish_document_imported',
]


def publish_grid_changed(plan_id: str, day: int, start_slot: int, length: int,
                         value: Optional[str], changed: int, bus: Optional[EventBus] = None):
    """Publish a plan.grid_changed event."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_GRID_CHANGED, {
        'plan_id': plan_id,
        'day': day,
        'start_slot': start_slot,
        'length': length,
        'value': value,
        'changed': changed,
    })


def publish_activities_changed(plan_id: str, action: str, activity_id: Optional[str] = None,
                               bus: Optional[EventBus] = None):
    """Publish a plan.activities_changed event (action: added, updated, moved, selected, cleared)."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_ACTIVITIES_CHANGED, {
        'plan_id': plan_id,
        'action': action,
        'activity_id': activity_id,
    })


def publish_activity_deleted(plan_id: str, activity_id: str, cleared: int, bus: Optional[EventBus] = None):
    """Publish a plan.activity_deleted event; `cleared` is the number of grid cells freed."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_ACTIVITY_DELETED, {
        'plan_id': plan_id,
        'activity_id': activity_id,
        'cleared': cleared,
    })


def publish_document_imported(plans: int, active_plan_id: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(DOCUMENT_IMPORTED, {
        'plans': plans,
        'active_plan_id': active_plan_id,
    })
