"""Sv39 paging over simulated memory, RISC-V machine layout, ELF headers, a shell parser and small Unix-style tools."""

__version__ = "0.1.0"