"""Plan domain entity: one TimeGrid, one ActivityRegistry, the selected activity and the tool mode."""
from typing import Optional
from uuid import uuid4

from planner.domain.Activity import Activity
from planner.domain.ActivityRegistry import ActivityRegistry
from planner.domain.TimeGrid import TimeGrid
from planner.events.Event_Bus import GLOBAL_EVENT_BUS
from planner.events.event_helpers import (
    publish_grid_changed, publish_activities_changed, publish_activity_deleted
)
from planner.utilities.constants import (
    TOOLS, TOOL_PAINT, DEFAULT_PLAN_NAME, DEFAULT_ACTIVITIES,
    NEW_ACTIVITY_NAME, NEW_ACTIVITY_COLOUR, DEFAULT_ICON,
)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


class Plan:
    def __init__(self, id: str, name: str, grid: Optional[TimeGrid] = None,
                 activities: Optional[ActivityRegistry] = None,
                 selected_activity_id: Optional[str] = None, tool: str = TOOL_PAINT):
        self.id = id
        self.name = name
        self.grid = grid if grid is not None else TimeGrid.create()
        self.activities = activities if activities is not None else ActivityRegistry()
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool: {tool}")
        self.tool = tool
        # selection must always name a registered activity (or nothing)
        self.selected_activity_id = selected_activity_id if selected_activity_id in self.activities else None
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    @classmethod
    def make_default(cls, name: str = DEFAULT_PLAN_NAME) -> "Plan":
        activities = ActivityRegistry([Activity.from_dict(a) for a in DEFAULT_ACTIVITIES])
        return cls(new_id("p"), name, activities=activities, selected_activity_id="a_work")

    # --- Grid ---------------------------------------------------------------
    def write_range(self, day: int, start_slot: int, length: int, value: Optional[str]) -> int:
        '''
        The only grid mutation path used by the engines. Returns the number of cells changed.
        '''
        changed = self.grid.write_range(day, start_slot, length, value)
        if changed:
            publish_grid_changed(self.id, day, start_slot, length, value, changed, bus=self._event_bus)
        return changed

    def clear_activity_cells(self, activity_id: str) -> int:
        '''
        Frees every cell of one activity but keeps the activity itself.
        '''
        self.activities.require(activity_id)
        cleared = self.grid.clear_activity(activity_id)
        publish_activities_changed(self.id, "cleared", activity_id, bus=self._event_bus)
        return cleared

    # --- Activities ---------------------------------------------------------
    def add_activity(self, name: str = NEW_ACTIVITY_NAME, colour: str = NEW_ACTIVITY_COLOUR,
                     icon: str = DEFAULT_ICON, activity_id: Optional[str] = None) -> Activity:
        '''
        Appends a new activity and selects it.
        '''
        activity = self.activities.add(Activity(activity_id or new_id("a"), name, colour, icon))
        self.selected_activity_id = activity.id
        publish_activities_changed(self.id, "added", activity.id, bus=self._event_bus)
        return activity

    def update_activity(self, activity_id: str, name: Optional[str] = None,
                        colour: Optional[str] = None, icon: Optional[str] = None) -> Activity:
        activity = self.activities.require(activity_id).update(name=name, colour=colour, icon=icon)
        publish_activities_changed(self.id, "updated", activity_id, bus=self._event_bus)
        return activity

    def delete_activity(self, activity_id: str) -> int:
        '''
        Cascade delete: cells are cleared before the activity leaves the registry,
        then selection falls back to the first remaining activity (or None).
        Returns the number of cells cleared.
        '''
        self.activities.require(activity_id)
        cleared = self.grid.clear_activity(activity_id)
        self.activities.remove(activity_id)
        if self.selected_activity_id == activity_id:
            first = self.activities.first()
            self.selected_activity_id = first.id if first else None
        publish_activity_deleted(self.id, activity_id, cleared, bus=self._event_bus)
        return cleared

    def move_activity(self, from_index: int, to_index: int) -> bool:
        moved = self.activities.move(from_index, to_index)
        if moved:
            landed = max(0, min(len(self.activities) - 1, to_index))
            publish_activities_changed(self.id, "moved", self.activities.items[landed].id, bus=self._event_bus)
        return moved

    def select_activity(self, activity_id: Optional[str]):
        if activity_id is not None:
            self.activities.require(activity_id)
        self.selected_activity_id = activity_id
        publish_activities_changed(self.id, "selected", activity_id, bus=self._event_bus)

    def set_tool(self, tool: str):
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool: {tool}")
        self.tool = tool

    # --- Copy / persistence -------------------------------------------------
    def duplicate(self, name: str) -> "Plan":
        return Plan.from_dict({**self.to_dict(), "id": new_id("p"), "name": name})

    def __str__(self) -> str:
        return f"Plan {self.name} ({self.id}) - {len(self.activities)} activities - tool: {self.tool}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Plan from a document dictionary (camelCase keys, as exported).'''
        d = dict(data)
        return Plan(
            d["id"],
            d["name"],
            grid=TimeGrid.from_list(d["grid"]),
            activities=ActivityRegistry.from_dict(d.get("activities", [])),
            selected_activity_id=d.get("selectedActivityId"),
            tool=d.get("tool") or TOOL_PAINT,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "activities": self.activities.to_dict(),
            "grid": self.grid.to_list(),
            "selectedActivityId": self.selected_activity_id,
            "tool": self.tool,
        }
