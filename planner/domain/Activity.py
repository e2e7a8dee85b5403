"""Activity domain entity: immutable id plus editable name, colour and icon."""
from typing import Optional

from planner.utilities.constants import DEFAULT_ICON, UNKNOWN_ACTIVITY_COLOUR


class Activity:
    def __init__(self, id: str, name: str = "", colour: str = UNKNOWN_ACTIVITY_COLOUR, icon: str = DEFAULT_ICON):
        self._id = id
        self.name = name
        self.colour = colour
        self.icon = icon

    @property
    def id(self) -> str:
        return self._id

    def update(self, name: Optional[str] = None, colour: Optional[str] = None, icon: Optional[str] = None):
        '''Applies a partial edit; identity is never touched.'''
        if name is not None:
            self.name = name
        if colour is not None:
            self.colour = colour
        if icon is not None:
            self.icon = icon
        return self

    def __str__(self) -> str:
        return f"{self.name} ({self.id}) - {self.colour} - {self.icon}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Activity) and self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an Activity from a dictionary. Ignores unknown keys.'''
        d = dict(data)
        return Activity(
            d["id"],
            d.get("name", ""),
            d.get("colour") or UNKNOWN_ACTIVITY_COLOUR,
            d.get("icon") or DEFAULT_ICON,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "colour": self.colour,
            "icon": self.icon,
        }
