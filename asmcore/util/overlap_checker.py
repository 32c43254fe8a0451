"""Detection of overlapping output ranges."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


class OverlapError(ValueError):
    """An output range overlaps one written before."""

    def __init__(self, span: Any, other_span: Any) -> None:
        super().__init__("output overlap")
        self.message = "output overlap"
        self.note = "overlaps with:"
        self.span = span
        self.other_span = other_span


@dataclass
class _Entry:
    position: int
    size: int
    span: Any


class OverlapChecker:
    """Keeps ranges sorted by position and rejects overlapping ones."""

    def __init__(self) -> None:
        self._entries: List[_Entry] = []

    def check_and_insert(self, span: Any, position: int, size: int) -> None:
        """Record a range, raising OverlapError if it overlaps a recorded one."""
        index, overlapping = self._check_overlap(position, size)
        if overlapping is not None:
            raise OverlapError(span, overlapping.span)
        self._entries.insert(index, _Entry(position, size, span))

    def _check_overlap(self, position: int, size: int) -> Tuple[int, Optional[_Entry]]:
        entries = self._entries
        i = bisect.bisect_left(entries, position, key=lambda e: e.position)

        if i < len(entries) and entries[i].position == position:
            found = entries[i]
            if found.size > 0 and size > 0:
                return i + 1, found
            return i + 1, None

        if i < len(entries):
            following = entries[i]
            if position + size > following.position:
                return i, following

        if i > 0:
            preceding = entries[i - 1]
            if preceding.position + preceding.size > position:
                return i - 1, preceding

        return i, None