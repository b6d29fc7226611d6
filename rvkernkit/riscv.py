"""RISC-V Sv39 constants and page-table arithmetic."""

_U64 = (1 << 64) - 1

# Machine status register, mstatus.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register, sstatus.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1

# Machine-mode interrupt enable.
MIE_MEIE = 1 << 11
MIE_MTIE = 1 << 7
MIE_MSIE = 1 << 3

SATP_SV39 = 8 << 60

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

# One beyond the highest virtual address; one bit less than Sv39 allows.
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

PTES_PER_PAGE = 512


def pgroundup(sz: int) -> int:
    """Round a size up to the next page boundary (64-bit wraparound)."""
    return ((sz + PGSIZE - 1) & ~(PGSIZE - 1)) & _U64


def pgrounddown(a: int) -> int:
    """Round an address down to its page boundary."""
    return (a & ~(PGSIZE - 1)) & _U64


def pa2pte(pa: int) -> int:
    """Shift a physical address into the PPN field of a PTE."""
    return (((pa & _U64) >> 12) << 10) & _U64


def pte2pa(pte: int) -> int:
    """Extract the physical address a PTE refers to."""
    return (((pte & _U64) >> 10) << 12) & _U64


def pte_flags(pte: int) -> int:
    """Return the low ten flag bits of a PTE."""
    return pte & 0x3FF


def pxshift(level: int) -> int:
    """Bit position of the page-table index for the given level."""
    return PGSHIFT + 9 * level


def px(level: int, va: int) -> int:
    """Extract the 9-bit page-table index for a level from a virtual address."""
    return ((va & _U64) >> pxshift(level)) & PXMASK


def make_satp(pagetable: int) -> int:
    """Build a satp value selecting Sv39 with the given root page table."""
    return SATP_SV39 | ((pagetable & _U64) >> 12)