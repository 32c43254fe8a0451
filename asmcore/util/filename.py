"""Validation and navigation of project-relative file names."""

from __future__ import annotations

import pathlib
from typing import Any

STD_PATH_PREFIX = "<std>/"


class FilenameError(ValueError):
    """A file name that is invalid or leads outside the project."""

    def __init__(self, message: str, span: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span


def is_std_path(path: str) -> bool:
    return path.startswith(STD_PATH_PREFIX)


def filename_validate(filename: str, span: Any = None) -> None:
    """Reject file names carrying a drive or share prefix on this platform."""
    if pathlib.PurePath(filename).drive:
        raise FilenameError("invalid filename", span)


def filename_navigate(current: str, nav: str, span: Any = None) -> str:
    """Resolve `nav` relative to the directory holding `current`."""
    if is_std_path(nav):
        return nav

    current = current.replace("\\", "/")
    nav = nav.replace("\\", "/")
    filename_validate(nav, span)

    components = current.split("/")[:-1]
    if nav.startswith("/"):
        components = []
    components.extend(nav.split("/"))

    resolved: list[str] = []
    for component in components:
        if not component or component == ".":
            continue
        if component == "..":
            if not resolved:
                raise FilenameError("cannot navigate out of project directory", span)
            resolved.pop()
            continue
        resolved.append(component)

    return "/".join(resolved)