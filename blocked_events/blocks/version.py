"""
Version numbering for rebuilt event indexes.

Every rebuild of an event index is stamped with a new version number.
Consumers that cache query results remember the version they read and
refetch when it changes. Version 0 is never handed out, so a consumer
can start from 0 to mean "nothing read yet".
"""

from __future__ import annotations

from threading import Lock


class VersionCounter:
    """Strictly increasing version allocator.

    One counter may be shared by several event sets so that their
    version numbers never collide; by default each event set owns one.
    """

    def __init__(self, start: int = 1) -> None:
        """
        Args:
            start: First version number handed out (at least 1)

        Raises:
            ValueError: If start is below 1
        """
        if start < 1:
            raise ValueError(f"Versions start at 1 or later, got {start}")
        self._last = start - 1
        self._lock = Lock()

    def next_version(self) -> int:
        """Allocate the version for a new rebuild."""
        with self._lock:
            self._last += 1
            return self._last

    def get_current(self) -> int:
        """Last version handed out, 0 before the first rebuild."""
        return self._last

    def is_stale(self, seen: int) -> bool:
        """Whether results read at version ``seen`` predate the latest rebuild.

        Meaningful when one event set owns the counter; with a shared counter
        a rebuild of any event set makes every earlier version stale.
        """
        return seen < self._last
