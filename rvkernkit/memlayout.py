"""Physical memory layout, kernel parameters, open flags and RTC date."""

from dataclasses import dataclass

from .riscv import MAXVA, PGSIZE

# qemu -machine virt devices.
UART0 = 0x10000000
UART0_IRQ = 10

VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1

CLINT = 0x2000000
CLINT_MTIME = CLINT + 0xBFF8

PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000

KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE

# Kernel parameters.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 1000
MAXPATH = 128

# open() flags.
O_RDONLY = 0x000
O_WRONLY = 0x001
O_RDWR = 0x002
O_CREATE = 0x200
O_TRUNC = 0x400


def clint_mtimecmp(hartid: int) -> int:
    """Address of the timer compare register for a hart."""
    return CLINT + 0x4000 + 8 * hartid


def plic_menable(hart: int) -> int:
    return PLIC + 0x2000 + hart * 0x100


def plic_senable(hart: int) -> int:
    return PLIC + 0x2080 + hart * 0x100


def plic_mpriority(hart: int) -> int:
    return PLIC + 0x200000 + hart * 0x2000


def plic_spriority(hart: int) -> int:
    return PLIC + 0x201000 + hart * 0x2000


def plic_mclaim(hart: int) -> int:
    return PLIC + 0x200004 + hart * 0x2000


def plic_sclaim(hart: int) -> int:
    return PLIC + 0x201004 + hart * 0x2000


def kstack(p: int) -> int:
    """Kernel stack address for process slot p, below the trampoline with guard pages."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE


@dataclass(frozen=True)
class RtcDate:
    """A calendar date and time as reported by the real-time clock."""

    second: int
    minute: int
    hour: int
    day: int
    month: int
    year: int

    def __post_init__(self) -> None:
        for name in ("second", "minute", "hour", "day", "month", "year"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")