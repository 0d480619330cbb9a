"""Rolling time window of frame statistics."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from jump_trigger.core.types import FrameStat


class FrameHistory:
    """Insertion-ordered FrameStat sequence bounded by elapsed time.

    Entries are appended in timestamp order, so pruning is always a trim
    from the head.
    """

    def __init__(self, retention_ms: int = 1000) -> None:
        """Initialize an empty history.

        Args:
            retention_ms: Entries this old or older are pruned
        """
        self.retention_ms = retention_ms
        self._entries: deque[FrameStat] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FrameStat]:
        return iter(self._entries)

    @property
    def latest(self) -> FrameStat | None:
        """Most recent entry."""
        return self._entries[-1] if self._entries else None

    def append(self, stat: FrameStat) -> None:
        """Add a stat at the tail."""
        self._entries.append(stat)

    def prune(self, now: int) -> int:
        """Drop entries with ``now - timestamp >= retention_ms``.

        Returns:
            Number of entries removed
        """
        removed = 0
        while self._entries and now - self._entries[0].timestamp >= self.retention_ms:
            self._entries.popleft()
            removed += 1
        return removed

    def update(self, stat: FrameStat, now: int) -> None:
        """Append then prune, once per tick."""
        self.append(stat)
        self.prune(now)

    def snapshot(self) -> tuple[FrameStat, ...]:
        """Retained entries, oldest first."""
        return tuple(self._entries)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
