"""A small grep supporting the ^ . * $ operators."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

_BUFSZ = 1024


def match(re: str, text: str) -> bool:
    """Search for re anywhere in text."""
    if re.startswith("^"):
        return matchhere(re[1:], text)
    while True:  # must look at the empty string too
        if matchhere(re, text):
            return True
        if not text:
            return False
        text = text[1:]


def matchhere(re: str, text: str) -> bool:
    """Search for re at the beginning of text."""
    if not re:
        return True
    if len(re) >= 2 and re[1] == "*":
        return matchstar(re[0], re[2:], text)
    if re == "$":
        return text == ""
    if text and (re[0] == "." or re[0] == text[0]):
        return matchhere(re[1:], text[1:])
    return False


def matchstar(c: str, re: str, text: str) -> bool:
    """Search for c*re at the beginning of text."""
    while True:  # a * matches zero or more instances
        if matchhere(re, text):
            return True
        if not text:
            return False
        ch, text = text[0], text[1:]
        if not (ch == c or c == "."):
            return False


def grep(pattern: str, stream: TextIO, out: TextIO) -> None:
    """Write each newline-terminated line of stream that matches pattern.

    A line longer than the internal buffer stops the search.
    """
    pending = ""
    while True:
        chunk = stream.read(_BUFSZ - 1 - len(pending))
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                out.write(line + "\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, files = args[0], args[1:]
    if not files:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for name in files:
        try:
            f = open(name, encoding="utf-8", errors="surrogateescape", newline="")
        except OSError:
            print(f"grep: cannot open {name}")
            return 1
        with f:
            grep(pattern, f, sys.stdout)
    return 0