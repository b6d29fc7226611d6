import pytest

from rvkernkit.riscv import (
    MAXVA,
    PGSHIFT,
    PGSIZE,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    PXMASK,
    SATP_SV39,
    make_satp,
    pa2pte,
    pgrounddown,
    pgroundup,
    pte2pa,
    pte_flags,
    px,
    pxshift,
)

KERNBASE = 0x80000000


def test_page_size_matches_shift():
    assert pgroundup(1) == 1 << PGSHIFT
    assert pgroundup(1) == 4096
    assert pgrounddown(2 * PGSIZE - 1) == PGSIZE


@pytest.mark.parametrize("value", [0, 1, PGSIZE - 1, PGSIZE, PGSIZE + 1, 5 * PGSIZE + 7])
def test_rounding_invariants(value):
    up = pgroundup(value)
    down = pgrounddown(value)
    assert up % PGSIZE == 0
    assert down % PGSIZE == 0
    assert down <= value <= up
    assert up - down in (0, PGSIZE)


def test_rounding_examples():
    assert pgroundup(1) == PGSIZE
    assert pgroundup(PGSIZE) == PGSIZE
    assert pgrounddown(PGSIZE + 1) == PGSIZE
    assert pgroundup(0) == 0


def test_roundup_wraps_at_64_bits():
    assert pgroundup((1 << 64) - 1) == 0


@pytest.mark.parametrize("pa", [0, PGSIZE, KERNBASE, KERNBASE + 37 * PGSIZE])
def test_pte_roundtrip(pa):
    pte = pa2pte(pa) | PTE_V | PTE_R | PTE_W
    assert pte2pa(pte) == pa
    assert pte_flags(pte) == PTE_V | PTE_R | PTE_W


def test_pa2pte_drops_page_offset():
    assert pte2pa(pa2pte(KERNBASE + 123)) == KERNBASE


def test_flag_bits_are_distinct_and_within_mask():
    flags = [PTE_V, PTE_R, PTE_W, PTE_X, PTE_U]
    combined = 0
    for flag in flags:
        assert combined & flag == 0
        combined |= flag
    assert pte_flags(combined) == combined


def test_pxshift_levels():
    assert pxshift(0) == PGSHIFT
    assert pxshift(1) - pxshift(0) == 9
    assert pxshift(2) - pxshift(1) == 9


@pytest.mark.parametrize("va", [0, KERNBASE, KERNBASE + 0x12345, MAXVA - 1, 0x3ABCDE123])
def test_px_reassembles_address(va):
    rebuilt = sum(px(level, va) << pxshift(level) for level in range(3))
    rebuilt |= va & (PGSIZE - 1)
    assert rebuilt == va
    for level in range(3):
        assert 0 <= px(level, va) <= PXMASK


def test_top_of_address_space_index():
    assert px(2, MAXVA - 1) == PXMASK >> 1
    assert px(2, MAXVA) == (PXMASK >> 1) + 1


def test_make_satp():
    satp = make_satp(KERNBASE)
    assert satp & SATP_SV39 == SATP_SV39
    assert (satp & ~SATP_SV39) << 12 == KERNBASE


def test_make_satp_of_zero_is_mode_only():
    assert make_satp(0) == SATP_SV39
    assert make_satp(0) == 8 << 60