"""Access to source files, either held in memory or read from disk."""

from __future__ import annotations

import abc
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

FILESERVER_MOCK_WRITE_FILENAME_SUFFIX = "_written"

_Contents = Union[str, bytes, bytearray]


class FileServerError(OSError):
    """A file that cannot be found, read or written."""

    def __init__(self, message: str, span: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        return self.message


def _as_bytes(contents: _Contents) -> bytes:
    if isinstance(contents, str):
        return contents.encode("utf-8")
    return bytes(contents)


class FileServer(abc.ABC):
    """Hands out integer handles for file names and serves their contents."""

    @abc.abstractmethod
    def get_handle(self, filename: str, span: Any = None) -> int:
        """The handle for `filename`, raising FileServerError if it is unknown."""

    @abc.abstractmethod
    def get_filename(self, handle: int) -> str:
        """The file name a handle was given for."""

    @abc.abstractmethod
    def get_bytes(self, handle: int, span: Any = None) -> bytes:
        """The raw contents of a file."""

    def get_str(self, handle: int, span: Any = None) -> str:
        """The contents of a file decoded as UTF-8, replacing invalid bytes."""
        return self.get_bytes(handle, span).decode("utf-8", errors="replace")

    @abc.abstractmethod
    def write_bytes(self, filename: str, data: bytes, span: Any = None) -> None:
        """Store `data` under `filename`."""


class FileServerMock(FileServer):
    """A file server whose files live only in memory."""

    def __init__(self) -> None:
        self._handles: Dict[str, int] = {}
        self._filenames: List[str] = []
        self._files: List[bytes] = []

    def add_std_files(self, entries: Iterable[Tuple[str, _Contents]]) -> None:
        for filename, contents in entries:
            self.add(filename, contents)

    def _store(self, filename: str, data: bytes) -> int:
        handle = self._handles.setdefault(filename, len(self._handles))
        while handle >= len(self._files):
            self._filenames.append("")
            self._files.append(b"")
        self._filenames[handle] = filename
        self._files[handle] = data
        return handle

    def add(self, filename: str, contents: _Contents) -> None:
        """Add a file, replacing the contents of one with the same name."""
        self._store(filename, _as_bytes(contents))

    def get_handle(self, filename: str, span: Any = None) -> int:
        try:
            return self._handles[filename]
        except KeyError:
            raise FileServerError(f"file not found: `{filename}`", span) from None

    def get_filename(self, handle: int) -> str:
        return self._filenames[handle]

    def get_bytes(self, handle: int, span: Any = None) -> bytes:
        return self._files[handle]

    def write_bytes(self, filename: str, data: bytes, span: Any = None) -> None:
        """Store the data under the name with a fixed suffix appended."""
        self._store(filename + FILESERVER_MOCK_WRITE_FILENAME_SUFFIX, bytes(data))


class FileServerReal(FileServer):
    """A file server reading the file system, with built-in files kept in memory."""

    def __init__(self) -> None:
        self._handles: Dict[str, int] = {}
        self._filenames: List[str] = []
        self._std_files: List[Optional[str]] = []

    def add_std_files(self, entries: Iterable[Tuple[str, str]]) -> None:
        for filename, contents in entries:
            self.add(filename, contents)

    def add(self, filename: str, contents: str) -> None:
        """Add a built-in file whose contents are served from memory."""
        handle = self._handles.setdefault(filename, len(self._handles))
        while handle >= len(self._std_files):
            self._filenames.append("")
            self._std_files.append(None)
        self._filenames[handle] = filename
        self._std_files[handle] = contents

    def get_handle(self, filename: str, span: Any = None) -> int:
        if filename in self._handles:
            return self._handles[filename]

        if not os.path.exists(filename):
            raise FileServerError(f"file not found: `{filename}`", span)

        path_str = os.fspath(filename)
        if path_str in self._handles:
            return self._handles[path_str]

        handle = len(self._handles)
        self._handles[path_str] = handle
        while len(self._filenames) < handle:
            self._filenames.append("")
        self._filenames.append(path_str)
        return handle

    def get_filename(self, handle: int) -> str:
        return self._filenames[handle]

    def get_bytes(self, handle: int, span: Any = None) -> bytes:
        if handle < len(self._std_files) and self._std_files[handle] is not None:
            return self._std_files[handle].encode("utf-8")

        filename = self._filenames[handle]
        try:
            file = open(filename, "rb")
        except OSError as err:
            raise FileServerError(f"could not open file `{filename}`: {err}", span) from err

        with file:
            try:
                return file.read()
            except OSError as err:
                raise FileServerError(
                    f"could not read file `{filename}`: {err}", span
                ) from err

    def write_bytes(self, filename: str, data: bytes, span: Any = None) -> None:
        try:
            file = open(filename, "wb")
        except OSError as err:
            raise FileServerError(
                f"could not create file `{filename}`: {err}", span
            ) from err

        with file:
            try:
                file.write(bytes(data))
            except OSError as err:
                raise FileServerError(
                    f"could not write to file `{filename}`: {err}", span
                ) from err