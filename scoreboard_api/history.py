from __future__ import annotations

import copy
from typing import List, Optional

from scoreboard_api.models import MatchState

DEFAULT_HISTORY_LIMIT = 20


class HistoryStack:
    """
    Bounded undo stack of full MatchState snapshots.

    Snapshots are deep copies, so later mutation of the live state never
    leaks into history. Oldest snapshots are dropped first once `limit`
    is exceeded; undo pops the newest.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit <= 0:
            raise ValueError("History limit must be positive")
        self.limit = limit
        self._snapshots: List[MatchState] = []

    def push(self, state: MatchState) -> None:
        self._snapshots.append(copy.deepcopy(state))
        if len(self._snapshots) > self.limit:
            # Always evict from the head (oldest)
            del self._snapshots[: len(self._snapshots) - self.limit]

    def pop(self) -> Optional[MatchState]:
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def entries(self) -> List[MatchState]:
        """Current snapshots, oldest first (shallow list copy)."""
        return list(self._snapshots)

    def replace(self, entries: List[MatchState]) -> None:
        self._snapshots = list(entries)[-self.limit :]

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)
