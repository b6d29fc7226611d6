"""Count lines, words and characters."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, Optional, Sequence

_CHUNK = 512
# NUL is a separator too: the C search for it matches the string terminator.
_WS_STR = frozenset(" \r\t\n\v\0")
_WS_BYTES = frozenset(b" \r\t\n\v\0")


@dataclass(frozen=True)
class Counts:
    lines: int
    words: int
    chars: int


def wc(stream: IO) -> Counts:
    """Count the lines, words and characters (bytes for binary streams) of stream."""
    lines = words = chars = 0
    inword = False
    while chunk := stream.read(_CHUNK):
        if isinstance(chunk, str):
            ws, newline = _WS_STR, "\n"
        else:
            ws, newline = _WS_BYTES, 10
        for ch in chunk:
            chars += 1
            if ch == newline:
                lines += 1
            if ch in ws:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return Counts(lines, words, chars)


def _report(counts: Counts, name: str) -> None:
    print(f"{counts.lines} {counts.words} {counts.chars} {name}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        _report(wc(getattr(sys.stdin, "buffer", sys.stdin)), "")
        return 0
    for name in args:
        try:
            f = open(name, "rb")
        except OSError:
            print(f"wc: cannot open {name}")
            return 1
        with f:
            _report(wc(f), name)
    return 0