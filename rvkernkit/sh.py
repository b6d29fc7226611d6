"""Command-line parsing for a small shell with pipes, lists, redirection and background jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from .memlayout import O_CREATE, O_RDONLY, O_TRUNC, O_WRONLY

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10


class ShellSyntaxError(ValueError):
    """Raised when a command line cannot be parsed."""


@dataclass
class ExecCmd:
    """Run a program with arguments."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run a command with one file descriptor redirected to a file."""

    cmd: "Command"
    file: str
    mode: int
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of left to the input of right."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run left, wait for it, then run right."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run a command in the background."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class Token(NamedTuple):
    """A token: its kind, its text span, and where scanning resumes."""

    kind: str
    start: int
    end: int
    next: int


def _skip_space(s: str, pos: int) -> int:
    while pos < len(s) and s[pos] in WHITESPACE:
        pos += 1
    return pos


def gettoken(s: str, pos: int = 0) -> Token:
    """Scan one token of s starting at pos.

    The kind is "" at the end of input, "a" for a word, "+" for ">>",
    and the symbol itself for any of | ( ) ; & < >.
    """
    pos = _skip_space(s, pos)
    start = pos
    ch = s[pos] if pos < len(s) else ""
    kind = ch
    if ch == "":
        pass
    elif ch in "|();&<":
        pos += 1
    elif ch == ">":
        pos += 1
        if pos < len(s) and s[pos] == ">":
            kind = "+"
            pos += 1
    else:
        kind = "a"
        while pos < len(s) and s[pos] not in WHITESPACE and s[pos] not in SYMBOLS:
            pos += 1
    return Token(kind, start, pos, _skip_space(s, pos))


class _Parser:
    def __init__(self, s: str) -> None:
        self.s = s
        self.pos = 0

    def peek(self, toks: str) -> bool:
        self.pos = _skip_space(self.s, self.pos)
        return self.pos < len(self.s) and self.s[self.pos] in toks

    def take(self) -> Token:
        tok = gettoken(self.s, self.pos)
        self.pos = tok.next
        return tok

    def text(self, tok: Token) -> str:
        return self.s[tok.start:tok.end]

    def line(self) -> Command:
        cmd = self.pipe()
        while self.peek("&"):
            self.take()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.take()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self) -> Command:
        cmd = self.exec()
        if self.peek("|"):
            self.take()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            tok = self.take()
            target = self.take()
            if target.kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            name = self.text(target)
            if tok.kind == "<":
                cmd = RedirCmd(cmd, name, O_RDONLY, 0)
            elif tok.kind == ">":
                cmd = RedirCmd(cmd, name, O_WRONLY | O_CREATE | O_TRUNC, 1)
            else:
                cmd = RedirCmd(cmd, name, O_WRONLY | O_CREATE, 1)
        return cmd

    def block(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.take()
        cmd = self.line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.take()
        return self.redirs(cmd)

    def exec(self) -> Command:
        if self.peek("("):
            return self.block()
        node = ExecCmd()
        ret: Command = self.redirs(node)
        while not self.peek("|)&;"):
            tok = self.take()
            if tok.kind == "":
                break
            if tok.kind != "a":
                raise ShellSyntaxError("syntax")
            node.argv.append(self.text(tok))
            if len(node.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def parsecmd(s: str) -> Command:
    """Parse a whole command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.line()
    parser.peek("")
    if parser.pos != len(s):
        raise ShellSyntaxError(f"syntax: leftovers: {s[parser.pos:]}")
    return cmd


def cd_target(line: str) -> Optional[str]:
    """Directory named by a "cd " line as read with its terminator, or None.

    The last character of the line, its newline, is dropped.
    """
    if not line.startswith("cd "):
        return None
    return line[3:-1]