"""
Bounded history of reported opportunities.
"""
from collections import deque
from typing import Deque, Iterable, List

from models.opportunity import Opportunity


class HistoryLog:
    """Newest-first log that drops its oldest entry once full."""

    def __init__(self, capacity: int = 100):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: Deque[Opportunity] = deque(maxlen=capacity)

    def append(self, opportunity: Opportunity):
        """Insert at the front, evicting the oldest entry past capacity."""
        self._entries.appendleft(opportunity)

    def extend(self, opportunities: Iterable[Opportunity]):
        """Append a batch; the last item ends up newest."""
        for opportunity in opportunities:
            self.append(opportunity)

    def read(self) -> List[Opportunity]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
