"""Simple Event Bus / Observer implementation for plan mutations.

Event names used so far:
  plan.grid_changed -> payload {"plan_id": str, "day": int, "start_slot": int, "length": int, "value": str | None, "changed": int}
  plan.activities_changed -> payload {"plan_id": str, "action": str, "activity_id": str | None}
  plan.activity_deleted -> payload {"plan_id": str, "activity_id": str, "cleared": int}
  document.imported -> payload {"plans": int, "active_plan_id": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_GRID_CHANGED = "plan.grid_changed"
PLAN_ACTIVITIES_CHANGED = "plan.activities_changed"
PLAN_ACTIVITY_DELETED = "plan.activity_deleted"
DOCUMENT_IMPORTED = "document.imported"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("[EventBus] Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'PLAN_GRID_CHANGED', 'PLAN_ACTIVITIES_CHANGED', 'PLAN_ACTIVITY_DELETED', 'DOCUMENT_IMPORTED'
]
