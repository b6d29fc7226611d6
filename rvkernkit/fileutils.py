"""Directory listing and small file commands: ls, ln, mkdir, rm, kill."""

from __future__ import annotations

import os
import signal
import stat
import sys
from enum import IntEnum
from typing import Optional, Sequence, TextIO

from .ulib import atoi

DIRSIZ = 14
_BUFSZ = 512


class FileType(IntEnum):
    DIR = 1
    FILE = 2
    DEVICE = 3


def _file_type(st: os.stat_result) -> FileType:
    if stat.S_ISDIR(st.st_mode):
        return FileType.DIR
    if stat.S_ISREG(st.st_mode):
        return FileType.FILE
    return FileType.DEVICE


def fmtname(path: str) -> str:
    """Last path component, blank-padded to DIRSIZ unless already that long."""
    name = path.rsplit("/", 1)[-1]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _entry_line(path: str, st: os.stat_result) -> str:
    return f"{fmtname(path)} {int(_file_type(st))} {st.st_ino} {st.st_size}\n"


def ls(path: str, out: TextIO) -> None:
    """List a file, or each entry of a directory, to out.

    Raises OSError when path cannot be opened.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        raise OSError(f"ls: cannot open {path}") from exc
    kind = _file_type(st)
    if kind is FileType.FILE:
        out.write(_entry_line(path, st))
    elif kind is FileType.DIR:
        if len(path) + 1 + DIRSIZ + 1 > _BUFSZ:
            out.write("ls: path too long\n")
            return
        try:
            names = [".", ".."] + sorted(os.listdir(path))
        except OSError as exc:
            raise OSError(f"ls: cannot open {path}") from exc
        for name in names:
            full = f"{path}/{name}"
            try:
                est = os.stat(full)
            except OSError:
                out.write(f"ls: cannot stat {full}\n")
                continue
            out.write(_entry_line(full, est))


def _args(argv: Optional[Sequence[str]]) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def main_ls(argv: Optional[Sequence[str]] = None) -> int:
    args = _args(argv) or ["."]
    for path in args:
        try:
            ls(path, sys.stdout)
        except OSError as exc:
            sys.stderr.write(f"{exc}\n")
    return 0


def main_ln(argv: Optional[Sequence[str]] = None) -> int:
    args = _args(argv)
    if len(args) != 2:
        sys.stderr.write("Usage: ln old new\n")
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        sys.stderr.write(f"link {old} {new}: failed\n")
    return 0


def main_mkdir(argv: Optional[Sequence[str]] = None) -> int:
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: mkdir files...\n")
        return 1
    for path in args:
        try:
            os.mkdir(path)
        except OSError:
            sys.stderr.write(f"mkdir: {path} failed to create\n")
            break
    return 0


def _unlink(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.unlink(path)


def main_rm(argv: Optional[Sequence[str]] = None) -> int:
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: rm files...\n")
        return 1
    for path in args:
        try:
            _unlink(path)
        except OSError:
            sys.stderr.write(f"rm: {path} failed to delete\n")
            break
    return 0


def main_kill(argv: Optional[Sequence[str]] = None) -> int:
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    sig = getattr(signal, "SIGKILL", signal.SIGTERM)
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            # No process has such an id; never signal a whole process group.
            continue
        try:
            os.kill(pid, sig)
        except OSError:
            pass
    return 0