"""Copy files to standard output, and echo arguments."""

from __future__ import annotations

import sys
from typing import IO, Optional, Sequence

_CHUNK = 512


def cat(src: IO, out: IO) -> None:
    """Copy src to out in small chunks; raise OSError on a read or write failure."""
    while True:
        try:
            chunk = src.read(_CHUNK)
        except OSError as exc:
            raise OSError("cat: read error") from exc
        if not chunk:
            return
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise OSError("cat: write error") from exc
        if written is not None and written != len(chunk):
            raise OSError("cat: write error")


def echo(args: Sequence[str]) -> str:
    """Return the arguments joined by spaces, ending in a newline if any were given."""
    return " ".join(args) + "\n" if args else ""


def _binary_stdout() -> IO:
    sys.stdout.flush()
    return getattr(sys.stdout, "buffer", sys.stdout)


def main_cat(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    out = _binary_stdout()
    try:
        if not args:
            cat(getattr(sys.stdin, "buffer", sys.stdin), out)
            return 0
        for name in args:
            try:
                f = open(name, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {name}\n")
                return 1
            with f:
                cat(f, out)
    except OSError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    finally:
        out.flush()
    return 0


def main_echo(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    sys.stdout.write(echo(args))
    return 0