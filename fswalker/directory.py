"""Directory entries and flat and recursive directory iteration."""

from __future__ import annotations

import enum
import errno
import functools
import os
from typing import Iterator, List, Optional, Tuple

from fswalker.errors import FilesystemError
from fswalker.status import (
    FileStatus,
    FileType,
    is_directory,
    is_symlink,
)
from fswalker.status import status as _query_status
from fswalker.status import symlink_status as _query_symlink_status

_CONSTRUCT = "directory_iterator::construct"
_DIR_INCREMENT = "directory_iterator::operator++"
_RECURSIVE_INCREMENT = "recursive_directory_iterator::increment"
_RECURSIVE_POP = "recursive_directory_iterator::pop"

# Depth is reported as a C int by convention; refuse to go deeper.
_MAX_DEPTH = 2**31 - 1


class DirectoryOptions(enum.IntFlag):
    """Flags that control directory iteration."""

    none = 0
    skip_permission_denied = 1
    follow_directory_symlink = 2
    skip_dangling_symlinks = 4
    pop_on_error = 8


@functools.total_ordering
class DirectoryEntry:
    """A path found in a directory, with lazily determined, cached statuses."""

    def __init__(
        self,
        path,
        status: Optional[FileStatus] = None,
        symlink_status: Optional[FileStatus] = None,
    ) -> None:
        self.path = ""
        self._status = FileStatus()
        self._symlink_status = FileStatus()
        self.assign(path, status, symlink_status)

    def assign(
        self,
        path,
        status: Optional[FileStatus] = None,
        symlink_status: Optional[FileStatus] = None,
    ) -> None:
        """Replace the path and the cached statuses."""
        self.path = os.fspath(path)
        self._status = status if status is not None else FileStatus()
        self._symlink_status = (
            symlink_status if symlink_status is not None else FileStatus()
        )

    def replace_filename(
        self,
        name,
        status: Optional[FileStatus] = None,
        symlink_status: Optional[FileStatus] = None,
    ) -> None:
        """Replace the last path element and the cached statuses."""
        parent = os.path.dirname(self.path)
        self.assign(os.path.join(parent, os.fspath(name)), status, symlink_status)

    def status(self) -> FileStatus:
        """Status of the entry, following symbolic links."""
        if not self._status.known():
            link = self._symlink_status
            if link.known() and not is_symlink(link):
                # Not a symlink, so both statuses are the same.
                self._status = link
            else:
                self._status = _query_status(self.path)
        return self._status

    def symlink_status(self) -> FileStatus:
        """Status of the entry itself, not following a symbolic link."""
        if not self._symlink_status.known():
            self._symlink_status = _query_symlink_status(self.path)
        return self._symlink_status

    def __fspath__(self) -> str:
        return self.path

    def __eq__(self, other) -> bool:
        if not isinstance(other, DirectoryEntry):
            return NotImplemented
        return self.path == other.path

    def __lt__(self, other) -> bool:
        if not isinstance(other, DirectoryEntry):
            return NotImplemented
        return self.path < other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"DirectoryEntry({self.path!r})"


def _cached_statuses(item: os.DirEntry) -> Tuple[FileStatus, FileStatus]:
    """Statuses that the directory listing itself reveals, if any."""
    try:
        if item.is_symlink():
            return FileStatus(), FileStatus(FileType.symlink_file)
        if item.is_dir(follow_symlinks=False):
            found = FileStatus(FileType.directory_file)
            return found, found
        if item.is_file(follow_symlinks=False):
            found = FileStatus(FileType.regular_file)
            return found, found
    except OSError:
        pass
    return FileStatus(), FileStatus()


class DirectoryIterator:
    """Single-pass iterator over the entries of one directory.

    The iterator is positioned on its first entry as soon as it is built;
    "." and ".." are never reported.
    """

    def __init__(self, path, options=DirectoryOptions.none) -> None:
        self._path = os.fspath(path)
        self._options = DirectoryOptions(options)
        self._scanner = None
        self._entry: Optional[DirectoryEntry] = None
        self._yielded = False
        if not self._path:
            raise FilesystemError(_CONSTRUCT, self._path, errno.ENOENT)
        try:
            self._scanner = os.scandir(self._path)
        except OSError as exc:
            if (
                exc.errno == errno.EACCES
                and self._options & DirectoryOptions.skip_permission_denied
            ):
                return
            raise FilesystemError.from_os_error(_CONSTRUCT, exc, self._path) from exc
        self._advance(_CONSTRUCT)

    def _advance(self, what: str) -> None:
        try:
            item = next(self._scanner, None)
        except OSError as exc:
            self.close()
            raise FilesystemError.from_os_error(what, exc, self._path) from exc
        if item is None:
            self.close()
            return
        self._entry = DirectoryEntry(
            os.path.join(self._path, item.name), *_cached_statuses(item)
        )

    def __iter__(self) -> "DirectoryIterator":
        return self

    def __next__(self) -> DirectoryEntry:
        if self._yielded and not self.at_end():
            self.increment()
        if self.at_end():
            raise StopIteration
        self._yielded = True
        return self._entry

    def at_end(self) -> bool:
        """True once the directory has no more entries."""
        return self._entry is None

    def entry(self) -> DirectoryEntry:
        """The current entry."""
        if self._entry is None:
            raise ValueError("end directory iterator has no entry")
        return self._entry

    def increment(self) -> None:
        """Move to the next entry; raises FilesystemError if reading fails."""
        if self._entry is None:
            raise ValueError("attempt to increment end directory iterator")
        self._yielded = False
        self._advance(_DIR_INCREMENT)

    def close(self) -> None:
        """Release the directory handle and become an end iterator."""
        self._entry = None
        if self._scanner is not None:
            scanner, self._scanner = self._scanner, None
            scanner.close()

    def __enter__(self) -> "DirectoryIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class _DepthOverflow(FilesystemError):
    """Descending would exceed the largest representable depth."""


class RecursiveDirectoryIterator:
    """Single-pass iterator over a directory tree, depth first."""

    def __init__(self, path, options=DirectoryOptions.none) -> None:
        self._options = DirectoryOptions(options)
        self._no_push = False
        self._yielded = False
        self._stack: List[DirectoryIterator] = []
        first = DirectoryIterator(path, self._options)
        if not first.at_end():
            self._stack.append(first)

    def __iter__(self) -> "RecursiveDirectoryIterator":
        return self

    def __next__(self) -> DirectoryEntry:
        if self._yielded and not self.at_end():
            self.increment()
        if self.at_end():
            raise StopIteration
        self._yielded = True
        return self.entry()

    def at_end(self) -> bool:
        """True once the whole tree has been visited."""
        return not self._stack

    def entry(self) -> DirectoryEntry:
        """The current entry."""
        if not self._stack:
            raise ValueError("end recursive directory iterator has no entry")
        return self._stack[-1].entry()

    def depth(self) -> int:
        """How many directories below the starting one the current entry is."""
        if not self._stack:
            raise ValueError("end recursive directory iterator has no depth")
        return len(self._stack) - 1

    def recursion_pending(self) -> bool:
        """False if the next increment will not descend into the current entry."""
        return not self._no_push

    def disable_recursion_pending(self) -> None:
        """Do not descend into the current entry on the next increment."""
        self._no_push = True

    def _push_directory(self) -> bool:
        if self._no_push:
            self._no_push = False
            return False

        entry = self._stack[-1].entry()
        follow = bool(self._options & DirectoryOptions.follow_directory_symlink)
        skip_dangling = bool(self._options & DirectoryOptions.skip_dangling_symlinks)

        link_status = FileStatus()
        if not follow or skip_dangling:
            link_status = entry.symlink_status()
            if link_status.type is FileType.file_not_found:
                raise FilesystemError(_RECURSIVE_INCREMENT, entry.path, errno.ENOENT)

        if not follow and is_symlink(link_status):
            return False

        target = entry.status()
        if target.type is FileType.file_not_found:
            if is_symlink(link_status) and follow and skip_dangling:
                return False
            raise FilesystemError(_RECURSIVE_INCREMENT, entry.path, errno.ENOENT)
        if not is_directory(target):
            return False

        if len(self._stack) - 1 >= _MAX_DEPTH:
            raise _DepthOverflow(_RECURSIVE_INCREMENT, entry.path, errno.EOVERFLOW)

        child = DirectoryIterator(entry.path, self._options)
        if child.at_end():
            return False
        self._stack.append(child)
        return True

    def _advance_stack(self) -> None:
        while self._stack:
            top = self._stack[-1]
            top.increment()
            if not top.at_end():
                return
            self._stack.pop().close()

    def _pop_on_error(self) -> None:
        self._stack.pop().close()
        while self._stack:
            top = self._stack[-1]
            try:
                top.increment()
            except FilesystemError:
                pass
            else:
                if not top.at_end():
                    return
            self._stack.pop().close()

    def _recover(self, keep_depth: bool) -> None:
        if not self._options & DirectoryOptions.pop_on_error:
            self.close()
            return
        if keep_depth:
            top = self._stack[-1]
            try:
                top.increment()
            except FilesystemError:
                pass
            else:
                if not top.at_end():
                    return
        self._pop_on_error()

    def increment(self) -> None:
        """Move to the next entry, descending into directories as configured."""
        if not self._stack:
            raise ValueError("attempt to increment end recursive directory iterator")
        self._yielded = False
        try:
            if self._push_directory():
                return
            self._advance_stack()
        except FilesystemError as exc:
            self._recover(keep_depth=isinstance(exc, _DepthOverflow))
            raise FilesystemError(_RECURSIVE_INCREMENT, exc.path1, exc.errno) from exc

    def pop(self) -> None:
        """Leave the current directory and move to the next entry of its parent."""
        if not self._stack:
            raise ValueError("pop() on end recursive directory iterator")
        self._yielded = False
        self._stack.pop().close()
        while self._stack:
            top = self._stack[-1]
            try:
                top.increment()
            except FilesystemError as exc:
                if self._options & DirectoryOptions.pop_on_error:
                    self._pop_on_error()
                else:
                    self.close()
                raise FilesystemError(_RECURSIVE_POP, exc.path1, exc.errno) from exc
            if not top.at_end():
                return
            self._stack.pop().close()

    def close(self) -> None:
        """Release every open directory and become an end iterator."""
        while self._stack:
            self._stack.pop().close()


def walk(path, options=DirectoryOptions.none) -> Iterator[DirectoryEntry]:
    """Yield every entry below ``path``, depth first."""
    iterator = RecursiveDirectoryIterator(path, options)
    try:
        yield from iterator
    finally:
        iterator.close()