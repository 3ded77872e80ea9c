"""File types, file status and the predicates that query them."""

from __future__ import annotations

import errno
import os
import stat as _stat
from dataclasses import dataclass
from enum import Enum
from typing import Union

from fswalker.errors import FilesystemError

PERMS_MASK = 0o7777
NO_PERMS = 0
PERMS_NOT_KNOWN = 0xFFFF

_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


class FileType(Enum):
    """Kind of filesystem object a status describes."""

    status_error = 0
    file_not_found = 1
    regular_file = 2
    directory_file = 3
    symlink_file = 4
    block_file = 5
    character_file = 6
    fifo_file = 7
    socket_file = 8
    reparse_file = 9
    type_unknown = 10


@dataclass(frozen=True)
class FileStatus:
    """Type and permission bits of a filesystem object."""

    type: FileType = FileType.status_error
    permissions: int = PERMS_NOT_KNOWN

    def known(self) -> bool:
        """True unless the status has not been determined."""
        return self.type is not FileType.status_error


StatusOrPath = Union[FileStatus, str, "os.PathLike[str]"]


def _type_from_mode(mode: int) -> FileType:
    checks = (
        (_stat.S_ISREG, FileType.regular_file),
        (_stat.S_ISDIR, FileType.directory_file),
        (_stat.S_ISLNK, FileType.symlink_file),
        (_stat.S_ISBLK, FileType.block_file),
        (_stat.S_ISCHR, FileType.character_file),
        (_stat.S_ISFIFO, FileType.fifo_file),
        (_stat.S_ISSOCK, FileType.socket_file),
    )
    for test, kind in checks:
        if test(mode):
            return kind
    return FileType.type_unknown


def _query(path, follow: bool, what: str) -> FileStatus:
    try:
        result = os.stat(path) if follow else os.lstat(path)
    except OSError as exc:
        if exc.errno in _NOT_FOUND_ERRNOS:
            return FileStatus(FileType.file_not_found, NO_PERMS)
        raise FilesystemError.from_os_error(what, exc, path) from exc
    return FileStatus(_type_from_mode(result.st_mode), result.st_mode & PERMS_MASK)


def status(path) -> FileStatus:
    """Status of ``path``, following symbolic links."""
    return _query(os.fspath(path), True, "status")


def symlink_status(path) -> FileStatus:
    """Status of ``path`` itself, not following a final symbolic link."""
    return _query(os.fspath(path), False, "symlink_status")


def _resolve(st: StatusOrPath, follow: bool = True) -> FileStatus:
    if isinstance(st, FileStatus):
        return st
    return status(st) if follow else symlink_status(st)


def status_known(st: FileStatus) -> bool:
    """True if the status has been determined."""
    return st.known()


def exists(st: StatusOrPath) -> bool:
    """True if the status (or the path's status) names an existing object."""
    resolved = _resolve(st)
    return resolved.known() and resolved.type is not FileType.file_not_found


def is_directory(st: StatusOrPath) -> bool:
    """True for a directory."""
    return _resolve(st).type is FileType.directory_file


def is_regular_file(st: StatusOrPath) -> bool:
    """True for a regular file."""
    return _resolve(st).type is FileType.regular_file


def is_symlink(st: StatusOrPath) -> bool:
    """True for a symbolic link; paths are examined without following links."""
    return _resolve(st, follow=False).type is FileType.symlink_file


def is_other(st: StatusOrPath) -> bool:
    """True for an existing object that is not a file, directory or symlink."""
    resolved = _resolve(st)
    return exists(resolved) and resolved.type not in (
        FileType.regular_file,
        FileType.directory_file,
        FileType.symlink_file,
    )