from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class IdAllocator:
    """Monotonic id source. Ids are never reused, so stale references stay unambiguous."""

    next_id: int = 0

    def peek(self) -> int:
        return self.next_id

    def allocate(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value
