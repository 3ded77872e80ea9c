# fswalker

Iterate over directories one level at a time or recursively. Each entry
keeps a cached file status. Where the directory listing already shows an
entry's type, looking that type up needs no extra system call.

## Installation

```
pip install fswalker
```

## Listing one directory

```python
from fswalker.directory import DirectoryIterator

with DirectoryIterator("some/dir") as it:
    for entry in it:
        print(entry.path, entry.status().type)
```

A `DirectoryIterator` moves to its first entry as soon as it is built.
The `.` and `..` entries are never returned.

You can also step through it by hand:

- `at_end()` tells you whether any entries are left.
- `entry()` returns the current `DirectoryEntry`.
- `increment()` moves to the next entry.
- `close()` releases the directory handle.

If the path is empty, or the directory cannot be opened, the iterator
raises `fswalker.errors.FilesystemError`. The same error is raised if
reading the directory fails part way through.

## Directory entries

A `DirectoryEntry` has these members:

- `path`: the entry's path as a string.
- `status()`: the entry's status, following symlinks.
- `symlink_status()`: the status of the entry itself.

Both statuses are cached. If an entry is known not to be a symlink,
`status()` reuses the symlink status.

Entries compare and sort by path. They can also be passed wherever a path
is accepted, because they implement `os.fspath`.

To change an entry in place, use `assign(path, status, symlink_status)`
or `replace_filename(name, status, symlink_status)`.

## Walking a tree

```python
from fswalker.directory import DirectoryOptions, walk

options = DirectoryOptions.follow_directory_symlink | DirectoryOptions.skip_dangling_symlinks
for entry in walk("some/dir", options):
    print(entry.path)
```

`walk` is a generator built on `RecursiveDirectoryIterator`, which visits
the tree depth first. The iterator's methods are:

- `depth()`: how many levels below the starting directory the current entry is.
- `pop()`: leave the current directory and continue with the parent's next entry.
- `disable_recursion_pending()`: do not descend into the current entry on the next step.
- `recursion_pending()`: whether the next step may descend into the current entry.
- `increment()`: step forward by hand.
- `at_end()`: whether the walk is finished.
- `entry()`: the current entry.
- `close()`: release every open directory.

Options (`DirectoryOptions`, an `IntFlag`):

- `none`: the default.
- `skip_permission_denied`: a directory that cannot be opened because of `EACCES` is treated as empty.
- `follow_directory_symlink`: descend into symlinks that point to directories.
- `skip_dangling_symlinks`: when following symlinks, pass over broken ones without an error.
- `pop_on_error`: after an error while stepping, continue at the parent level rather than ending the walk. The error is still raised.

## Status helpers

`fswalker.status` has two functions that read a path's status:

- `status(path)` follows symlinks.
- `symlink_status(path)` does not.

Both return a frozen `FileStatus`. It holds a `type` (a `FileType`) and the
`permissions` bits. A missing path gives the type `FileType.file_not_found`.
Any other OS failure raises `FilesystemError`.

These predicates accept a `FileStatus` or a path:

- `exists`
- `is_directory`
- `is_regular_file`
- `is_symlink` (for a path, this does not follow a final symlink)
- `is_other`

`status_known` takes a `FileStatus`.

## Errors

`FilesystemError` is a subclass of `OSError`. Its attributes are:

- `what`: the name of the operation that failed.
- `path1` and `path2`: the paths involved.
- `errno`: the error number.

`FilesystemError.from_os_error(what, exc, path)` builds one from an
existing `OSError`.

## What it does not do

The package only lists directories and reads file status. It does not create,
copy, rename or remove files, and it has no command-line tool.