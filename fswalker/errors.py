"""Exception raised by filesystem operations."""

from __future__ import annotations

import os
from typing import Optional, Union

PathArg = Union[str, "os.PathLike[str]"]


def _as_text(path: Optional[PathArg]) -> Optional[str]:
    if path is None:
        return None
    return os.fspath(path)


class FilesystemError(OSError):
    """An operating-system error tied to the operation and paths that caused it."""

    def __init__(
        self,
        what: str,
        path1: Optional[PathArg] = None,
        errno_value: int = 0,
        path2: Optional[PathArg] = None,
    ) -> None:
        first = _as_text(path1)
        second = _as_text(path2)
        message = os.strerror(errno_value) if errno_value else ""
        super().__init__(errno_value, message, first, None, second)
        self.what = what
        self.path1 = first
        self.path2 = second

    @classmethod
    def from_os_error(
        cls, what: str, exc: OSError, path: Optional[PathArg] = None
    ) -> "FilesystemError":
        """Build an error from an ``OSError``, keeping its errno and paths."""
        first = path if path is not None else exc.filename
        return cls(what, first, exc.errno or 0, exc.filename2)

    def __str__(self) -> str:
        text = self.what
        if self.errno:
            text += f": {self.strerror}"
        if self.path1:
            text += f': "{self.path1}"'
        if self.path2:
            text += f', "{self.path2}"'
        return text