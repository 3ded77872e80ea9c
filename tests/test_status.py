import errno
import os

import pytest

from fswalker.errors import FilesystemError
from fswalker.status import (
    FileStatus,
    FileType,
    exists,
    is_directory,
    is_other,
    is_regular_file,
    is_symlink,
    status,
    status_known,
    symlink_status,
)


@pytest.fixture
def tree(tmp_path):
    d1 = tmp_path / "d1"
    d1.mkdir()
    (d1 / "d1f1").write_text("")
    (tmp_path / "f0").write_text("")
    (tmp_path / "f1").write_text("file-f1")
    return tmp_path


def test_default_status_is_unknown():
    st = FileStatus()
    assert not st.known()
    assert not status_known(st)
    assert not exists(st)


def test_status_of_nonexistent():
    p = "nosuch"
    assert not exists(p)
    assert not is_regular_file(p)
    assert not is_directory(p)
    assert not is_symlink(p)
    assert not is_other(p)
    s = status(p)
    assert not exists(s)
    assert s.type is FileType.file_not_found
    assert status_known(s)
    assert not is_regular_file(s)
    assert not is_directory(s)
    assert not is_symlink(s)
    assert not is_other(s)


def test_status_of_missing_equals_not_found_no_perms():
    assert status("no-such-file") == FileStatus(FileType.file_not_found, 0)


def test_status_of_empty_path():
    s = status("")
    assert status_known(s)
    assert not exists(s)
    assert not is_directory(s)
    assert not is_regular_file(s)
    assert not is_other(s)
    assert not is_symlink(s)


def test_nested_missing_directory(tree):
    assert not is_directory(tree / "no-such-directory")
    assert not is_directory(tree / "no-such-directory" / "bar")


def test_path_under_regular_file_is_not_found(tree):
    assert status(tree / "f1" / "child").type is FileType.file_not_found


def test_directory_status(tree):
    assert exists(tree)
    assert is_directory(tree)
    assert not is_regular_file(tree)
    assert not is_other(tree)
    assert not is_symlink(tree)
    st = status(tree)
    assert exists(st)
    assert is_directory(st)
    assert not is_regular_file(st)


def test_regular_file_status(tree):
    st = status(tree / "f1")
    assert status_known(st)
    assert exists(st)
    assert not is_directory(st)
    assert is_regular_file(st)
    assert not is_other(st)
    assert not is_symlink(st)


def test_root_and_dot():
    assert exists("/")
    assert is_directory("/")
    assert not is_regular_file("/")
    assert not is_other("/")
    s = status(".")
    assert exists(s)
    assert is_directory(s)


def test_permissions_readable_by_owner():
    assert status(".").permissions & 0o400 == 0o400
    assert symlink_status(".").permissions & 0o400 == 0o400


def test_permissions_reflect_chmod(tree):
    p = tree / "f0"
    os.chmod(p, 0o700)
    assert status(p).permissions == 0o700


def test_symlink_statuses(tree):
    d1 = tree / "d1"
    f1 = tree / "f1"
    dangling = tree / "dangling-sym"
    sym_d1 = tree / "sym-d1"
    symsym_d1 = tree / "symsym-d1"
    sym_f1 = tree / "sym-f1"
    symsym_f1 = tree / "symsym-f1"
    os.symlink("does not exist", dangling)
    os.symlink(d1, sym_d1, target_is_directory=True)
    os.symlink(sym_d1, symsym_d1, target_is_directory=True)
    os.symlink(f1, sym_f1)
    os.symlink(sym_f1, symsym_f1)

    for link in (dangling, sym_d1, symsym_d1, sym_f1, symsym_f1):
        assert symlink_status(link).type is FileType.symlink_file

    assert status(dangling).type is FileType.file_not_found
    assert status(sym_d1).type is FileType.directory_file
    assert status(sym_d1 / "d1f1").type is FileType.regular_file
    assert status(symsym_d1).type is FileType.directory_file
    assert status(symsym_d1 / "d1f1").type is FileType.regular_file
    assert status(sym_f1).type is FileType.regular_file
    assert status(symsym_f1).type is FileType.regular_file


def test_symlink_to_file_predicates(tree):
    link = tree / "f4"
    os.symlink(tree / "f1", link)
    assert exists(link)
    assert is_symlink(link)
    st = symlink_status(link)
    assert exists(st)
    assert not is_directory(st)
    assert not is_regular_file(st)
    assert not is_other(st)
    assert is_symlink(st)
    st = status(link)
    assert is_regular_file(st)
    assert not is_symlink(st)


def test_dangling_symlink_does_not_exist(tree):
    link = tree / "dangling_link"
    os.symlink("nowhere", link)
    assert not exists(link)
    assert is_symlink(link)


def test_self_referring_symlink_raises(tree):
    link = tree / "link_to_self"
    os.symlink(link, link)
    with pytest.raises(FilesystemError) as info:
        status(link)
    assert info.value.errno == errno.ELOOP
    assert info.value.path1 == str(link)
    assert symlink_status(link).type is FileType.symlink_file


def test_fifo_is_other(tree):
    fifo = tree / "pipe"
    os.mkfifo(fifo)
    assert status(fifo).type is FileType.fifo_file
    assert is_other(fifo)
    assert exists(fifo)