"""TimeGrid domain entity: fixed 7 x 288 matrix of optional activity ids (None = free)."""
from collections import Counter
from typing import List, Optional

from planner.utilities.constants import DAYS_PER_WEEK, SLOTS_PER_DAY


class TimeGrid:
    def __init__(self, columns: Optional[List[List[Optional[str]]]] = None):
        if columns is None:
            self.columns = [[None] * SLOTS_PER_DAY for _ in range(DAYS_PER_WEEK)]
            return
        if len(columns) != DAYS_PER_WEEK or any(len(col) != SLOTS_PER_DAY for col in columns):
            raise ValueError(f"Grid must be {DAYS_PER_WEEK} columns of {SLOTS_PER_DAY} slots")
        # cells are plain identifiers; empty strings count as free
        self.columns = [[cell or None for cell in col] for col in columns]

    @classmethod
    def create(cls) -> "TimeGrid":
        return cls()

    @staticmethod
    def _check_day(day: int):
        if not 0 <= day < DAYS_PER_WEEK:
            raise IndexError(f"Day index out of range: {day}")

    def get(self, day: int, slot: int) -> Optional[str]:
        self._check_day(day)
        if not 0 <= slot < SLOTS_PER_DAY:
            raise IndexError(f"Slot index out of range: {slot}")
        return self.columns[day][slot]

    def column(self, day: int) -> List[Optional[str]]:
        '''Returns a copy of one day column.'''
        self._check_day(day)
        return list(self.columns[day])

    def slice(self, day: int, start_slot: int, length: int) -> List[Optional[str]]:
        self._check_day(day)
        return self.columns[day][start_slot:start_slot + length]

    def write_range(self, day: int, start_slot: int, length: int, value: Optional[str]) -> int:
        '''
        Writes `value` into [start_slot, min(288, start_slot + length)) of one day.
        Returns the number of cells whose value actually changed.
        '''
        self._check_day(day)
        if not 0 <= start_slot < SLOTS_PER_DAY:
            raise IndexError(f"Slot index out of range: {start_slot}")
        if length < 0:
            raise IndexError(f"Negative range length: {length}")
        col = self.columns[day]
        end = min(SLOTS_PER_DAY, start_slot + length)
        changed = 0
        for slot in range(start_slot, end):
            if col[slot] != value:
                col[slot] = value
                changed += 1
        return changed

    def clear_activity(self, activity_id: str) -> int:
        '''
        Frees every cell holding `activity_id`. Returns the number of cells cleared.
        '''
        cleared = 0
        for col in self.columns:
            for slot, cell in enumerate(col):
                if cell == activity_id:
                    col[slot] = None
                    cleared += 1
        return cleared

    def counts(self) -> Counter:
        '''Occurrences of every cell value across the week (None key = free cells).'''
        c: Counter = Counter()
        for col in self.columns:
            c.update(col)
        return c

    def copy(self) -> "TimeGrid":
        return TimeGrid([list(col) for col in self.columns])

    def to_list(self) -> List[List[Optional[str]]]:
        return [list(col) for col in self.columns]

    @staticmethod
    def from_list(data) -> "TimeGrid":
        return TimeGrid(data)

    def __eq__(self, other) -> bool:
        return isinstance(other, TimeGrid) and self.columns == other.columns

    def __repr__(self) -> str:
        used = sum(1 for col in self.columns for cell in col if cell is not None)
        return f"TimeGrid({used} of {DAYS_PER_WEEK * SLOTS_PER_DAY} slots used)"
