"""ELF64 executable file and program headers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntFlag

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as little-endian

ELF_PROG_LOAD = 1


class ProgFlag(IntFlag):
    EXEC = 1
    WRITE = 2
    READ = 4


ELF_PROG_FLAG_EXEC = ProgFlag.EXEC
ELF_PROG_FLAG_WRITE = ProgFlag.WRITE
ELF_PROG_FLAG_READ = ProgFlag.READ

_ELFHDR = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROGHDR = struct.Struct("<IIQQQQQQ")


class ElfError(ValueError):
    """Raised when bytes do not hold a valid ELF structure."""


@dataclass
class ElfHeader:
    """ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = _ELFHDR.size
    phentsize: int = _PROGHDR.size
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE = _ELFHDR.size

    def to_bytes(self) -> bytes:
        if len(self.elf) != 12:
            raise ElfError("elf identification must be 12 bytes")
        try:
            return _ELFHDR.pack(
                self.magic, self.elf, self.type, self.machine, self.version,
                self.entry, self.phoff, self.shoff, self.flags, self.ehsize,
                self.phentsize, self.phnum, self.shentsize, self.shnum,
                self.shstrndx,
            )
        except struct.error as exc:
            raise ElfError(str(exc)) from exc


@dataclass
class ProgramHeader:
    """ELF program section header."""

    type: int = ELF_PROG_LOAD
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE = _PROGHDR.size

    @property
    def prog_flags(self) -> ProgFlag:
        return ProgFlag(self.flags & 7)

    def to_bytes(self) -> bytes:
        try:
            return _PROGHDR.pack(
                self.type, self.flags, self.off, self.vaddr, self.paddr,
                self.filesz, self.memsz, self.align,
            )
        except struct.error as exc:
            raise ElfError(str(exc)) from exc


def parse_elf_header(data: bytes) -> ElfHeader:
    """Parse an ELF header from the start of data; the magic must match."""
    if len(data) < _ELFHDR.size:
        raise ElfError("truncated ELF header")
    values = _ELFHDR.unpack_from(data, 0)
    header = ElfHeader(*values)
    if header.magic != ELF_MAGIC:
        raise ElfError("bad ELF magic")
    return header


def parse_program_header(data: bytes) -> ProgramHeader:
    """Parse a program header from the start of data."""
    if len(data) < _PROGHDR.size:
        raise ElfError("truncated program header")
    return ProgramHeader(*_PROGHDR.unpack_from(data, 0))


def read_program_headers(data: bytes, header: ElfHeader) -> list[ProgramHeader]:
    """Read all program headers that the file header describes."""
    result = []
    for i in range(header.phnum):
        off = header.phoff + i * _PROGHDR.size
        chunk = data[off:off + _PROGHDR.size]
        if len(chunk) < _PROGHDR.size:
            raise ElfError(f"program header {i} lies beyond end of data")
        result.append(parse_program_header(chunk))
    return result