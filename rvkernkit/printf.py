"""Formatted output that understands %d, %l, %x, %p, %s, %c and %%."""

from __future__ import annotations

import operator
import sys
from typing import Any, Iterator, TextIO

_DIGITS = "0123456789ABCDEF"
_U32 = 0xFFFFFFFF
_U64 = (1 << 64) - 1


def _to_int32(value: int) -> int:
    value = operator.index(value) & _U32
    return value - (1 << 32) if value >= 1 << 31 else value


def _format_int(value: Any, base: int, signed: bool) -> str:
    xx = _to_int32(value)
    neg = signed and xx < 0
    x = (-xx if neg else xx) & _U32
    out = []
    while True:
        out.append(_DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if neg:
        out.append("-")
    return "".join(reversed(out))


def _format_ptr(value: Any) -> str:
    return "0x" + format(operator.index(value) & _U64, "016X")


def _format_str(value: Any) -> str:
    if value is None:
        return "(null)"
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"%s needs a string, got {type(value).__name__}")
    return value.split("\0", 1)[0]


def _format_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c needs a single character")
        return value
    return chr(operator.index(value) & 0xFF)


def _next_arg(args: Iterator[Any], conv: str) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError(f"not enough arguments for %{conv}") from None


def sprintf(fmt: str, *args: Any) -> str:
    """Format args according to fmt and return the result."""
    it = iter(args)
    out = []
    pending = False
    for c in fmt:
        if not pending:
            if c == "%":
                pending = True
            else:
                out.append(c)
            continue
        pending = False
        if c == "d":
            out.append(_format_int(_next_arg(it, c), 10, True))
        elif c == "l":
            out.append(_format_int(_next_arg(it, c), 10, False))
        elif c == "x":
            out.append(_format_int(_next_arg(it, c), 16, False))
        elif c == "p":
            out.append(_format_ptr(_next_arg(it, c)))
        elif c == "s":
            out.append(_format_str(_next_arg(it, c)))
        elif c == "c":
            out.append(_format_char(_next_arg(it, c)))
        elif c == "%":
            out.append("%")
        else:
            # Unknown sequence: print it to draw attention.
            out.append("%" + c)
    return "".join(out)


def fprintf(stream: TextIO, fmt: str, *args: Any) -> None:
    """Write formatted output to a text stream."""
    stream.write(sprintf(fmt, *args))


def printf(fmt: str, *args: Any) -> None:
    """Write formatted output to standard output."""
    fprintf(sys.stdout, fmt, *args)