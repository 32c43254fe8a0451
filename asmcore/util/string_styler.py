"""Building strings with optional ANSI colour codes."""

from __future__ import annotations

import re
from typing import Callable

STYLE_DEFAULT = "\u001b[0m"
STYLE_GRAY = "\u001b[90m"
STYLE_RED = "\u001b[91m"
STYLE_YELLOW = "\u001b[93m"
STYLE_CYAN = "\u001b[96m"
STYLE_WHITE = "\u001b[97m"
STYLE_BOLD = "\u001b[1m"


class StringStyler:
    """Accumulates text in `result`, adding styles only when colours are on."""

    def __init__(self, use_colors: bool) -> None:
        self.result = ""
        self.use_colors = use_colors

    def add(self, string: str) -> None:
        self.result += string

    def add_char(self, ch: str) -> None:
        self.result += ch

    def addln(self, string: str) -> None:
        self.result += string + "\n"

    def indent(self, indent: int) -> None:
        self.result += " " * indent

    def add_styled(
        self,
        string: str,
        pattern: str,
        fn_start: Callable[["StringStyler"], None],
        fn_end: Callable[["StringStyler"], None],
    ) -> None:
        """Add `string`, wrapping each occurrence of `pattern` in the two callbacks."""
        index = 0
        for match in re.finditer(re.escape(pattern), string):
            pos = match.start()
            if index < pos:
                self.add(string[index:pos])
                index = match.end()
            fn_start(self)
            self.add(match.group())
            fn_end(self)

        if index < len(string):
            self.add(string[index:])

    def add_style(self, style: str) -> None:
        if self.use_colors:
            self.add(style)

    def reset(self) -> None:
        self.add_style(STYLE_DEFAULT)

    def gray(self) -> None:
        self.add_style(STYLE_GRAY)

    def white(self) -> None:
        self.add_style(STYLE_WHITE)

    def red(self) -> None:
        self.add_style(STYLE_RED)

    def yellow(self) -> None:
        self.add_style(STYLE_YELLOW)

    def cyan(self) -> None:
        self.add_style(STYLE_CYAN)

    def bold(self) -> None:
        self.add_style(STYLE_BOLD)