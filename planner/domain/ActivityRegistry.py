"""ActivityRegistry aggregate: ordered activities of one plan, unique by id."""
from typing import Dict, Iterator, List, Optional

from planner.domain.Activity import Activity


class ActivityRegistry:
    def __init__(self, activities: Optional[List[Activity]] = None):
        self.items: List[Activity] = []
        for activity in activities or []:
            self.add(activity)

    def add(self, activity: Activity) -> Activity:
        '''
        Appends an activity at the end of the list.
        '''
        if activity.id in self:
            raise ValueError(f"Duplicate activity id: {activity.id}")
        self.items.append(activity)
        return activity

    def get(self, activity_id: Optional[str]) -> Optional[Activity]:
        for activity in self.items:
            if activity.id == activity_id:
                return activity
        return None

    def require(self, activity_id: str) -> Activity:
        activity = self.get(activity_id)
        if activity is None:
            raise ValueError(f"Activity '{activity_id}' not found in plan.")
        return activity

    def index_of(self, activity_id: str) -> int:
        '''Position in display order, -1 when absent.'''
        for i, activity in enumerate(self.items):
            if activity.id == activity_id:
                return i
        return -1

    def remove(self, activity_id: str) -> Activity:
        activity = self.require(activity_id)
        self.items.remove(activity)
        return activity

    def move(self, from_index: int, to_index: int) -> bool:
        '''
        Single-item move: remove at from_index, insert at to_index (clamped to the list).
        Returns False when nothing moved.
        '''
        n = len(self.items)
        if from_index < 0 or from_index >= n:
            return False
        to_index = max(0, min(n - 1, to_index))
        if from_index == to_index:
            return False
        item = self.items.pop(from_index)
        self.items.insert(to_index, item)
        return True

    def ids(self) -> List[str]:
        return [a.id for a in self.items]

    def by_id(self) -> Dict[str, Activity]:
        return {a.id: a for a in self.items}

    def first(self) -> Optional[Activity]:
        return self.items[0] if self.items else None

    def __contains__(self, activity_id) -> bool:
        return any(a.id == activity_id for a in self.items)

    def __iter__(self) -> Iterator[Activity]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(a) for a in self.items)
        return f"Activities:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        return ActivityRegistry([Activity.from_dict(d) for d in data])

    def to_dict(self):
        return [a.to_dict() for a in self.items]
