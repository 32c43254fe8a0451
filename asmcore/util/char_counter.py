"""Line and column lookups over a source text."""

from __future__ import annotations

from typing import Tuple


class CharCounter:
    """Answers position questions about one source text."""

    def __init__(self, src: str) -> None:
        self.src = src
        self._encoded = src.encode("utf-8")

    def get_excerpt(self, start: int, end: int) -> str:
        """The text between two byte offsets."""
        if not 0 <= start <= end <= len(self._encoded):
            raise IndexError(f"excerpt range {start}..{end} out of bounds")
        return self._encoded[start:end].decode("utf-8")

    def get_line_count(self) -> int:
        return self.src.count("\n") + 1

    def get_line_column_at_index(self, index: int) -> Tuple[int, int]:
        """Zero-based (line, column) of a character index."""
        line = 0
        column = 0
        for c in self.src[: max(index, 0)]:
            if c == "\n":
                line += 1
                column = 0
            else:
                column += 1
        return line, column

    def get_index_range_of_line(self, line: int) -> Tuple[int, int]:
        """Character range of a zero-based line, including its line break."""
        chars = self.src
        line_begin = 0
        line_count = 0
        while line_count < line and line_begin < len(chars):
            line_begin += 1
            if chars[line_begin - 1] == "\n":
                line_count += 1

        newline = chars.find("\n", line_begin)
        line_end = len(chars) if newline < 0 else newline + 1
        return line_begin, line_end