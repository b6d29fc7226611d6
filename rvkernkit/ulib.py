"""Small string and input helpers."""

from __future__ import annotations

from typing import IO, AnyStr, Union


def atoi(s: str) -> int:
    """Convert the leading decimal digits of s to an integer; no sign or spaces."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def _as_bytes(s: Union[str, bytes]) -> bytes:
    data = s.encode("utf-8") if isinstance(s, str) else bytes(s)
    return data.split(b"\0", 1)[0]


def strcmp(p: Union[str, bytes], q: Union[str, bytes]) -> int:
    """Compare two NUL-terminated strings byte by byte.

    Returns the difference of the first differing bytes, or 0 if equal.
    """
    a = _as_bytes(p)
    b = _as_bytes(q)
    for x, y in zip(a, b):
        if x != y:
            return x - y
    if len(a) == len(b):
        return 0
    return a[len(b)] if len(a) > len(b) else -b[len(a)]


def gets(stream: IO[AnyStr], max_len: int) -> AnyStr:
    """Read one line of at most max_len - 1 characters from stream.

    Reading stops after a newline or carriage return, which is kept,
    or at end of input.
    """
    chunks = []
    empty = None
    while len(chunks) + 1 < max_len:
        c = stream.read(1)
        if not c:
            empty = c
            break
        chunks.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    if chunks:
        return chunks[0][:0].join(chunks)
    return empty if empty is not None else ""  # type: ignore[return-value]