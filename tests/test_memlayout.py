import dataclasses

import pytest

from rvkernkit.memlayout import (
    CLINT,
    KERNBASE,
    LOGSIZE,
    MAXOPBLOCKS,
    NBUF,
    NPROC,
    PHYSTOP,
    PLIC,
    TRAMPOLINE,
    TRAPFRAME,
    RtcDate,
    clint_mtimecmp,
    kstack,
    plic_mclaim,
    plic_menable,
    plic_mpriority,
    plic_sclaim,
    plic_senable,
    plic_spriority,
)
from rvkernkit import memlayout
from rvkernkit.riscv import PGSIZE, pgrounddown, px


def test_trampoline_and_trapframe():
    assert kstack(0) + 2 * PGSIZE == TRAMPOLINE
    assert pgrounddown(TRAMPOLINE) == TRAMPOLINE
    assert px(0, TRAMPOLINE) == 511
    assert px(1, TRAMPOLINE) == 511
    assert px(2, TRAMPOLINE) == 255
    assert px(0, TRAPFRAME) == 510


def test_kstack_layout():
    assert kstack(0) == TRAMPOLINE - 2 * PGSIZE
    stacks = [kstack(p) for p in range(NPROC)]
    assert len(set(stacks)) == NPROC
    for a, b in zip(stacks, stacks[1:]):
        assert a - b == 2 * PGSIZE
    assert all(s % PGSIZE == 0 for s in stacks)


def test_physical_ram():
    assert pgrounddown(KERNBASE) == 0x80000000
    assert pgrounddown(PHYSTOP) - KERNBASE == 128 * 1024 * 1024
    assert px(2, KERNBASE) == 2


def test_clint_registers():
    assert clint_mtimecmp(0) == CLINT + 0x4000
    assert clint_mtimecmp(1) - clint_mtimecmp(0) == 8
    assert memlayout.CLINT_MTIME == CLINT + 0xBFF8


@pytest.mark.parametrize("hart", [0, 1, 2, 7])
def test_plic_register_relations(hart):
    assert plic_sclaim(hart) - plic_spriority(hart) == 4
    assert plic_mclaim(hart) - plic_mpriority(hart) == 4
    assert plic_senable(hart) - plic_menable(hart) == 0x80
    assert plic_menable(hart) >= PLIC


def test_plic_hart_strides():
    assert plic_menable(1) - plic_menable(0) == 0x100
    assert plic_spriority(1) - plic_spriority(0) == 0x2000
    assert plic_sclaim(0) == PLIC + 0x201004


def test_param_relations():
    assert LOGSIZE == MAXOPBLOCKS * 3
    assert NBUF == LOGSIZE
    assert kstack(NPROC - 1) == TRAMPOLINE - NPROC * 2 * PGSIZE


def test_rtcdate_fields_and_equality():
    d = RtcDate(second=5, minute=4, hour=3, day=2, month=1, year=2020)
    assert d.year == 2020
    assert d == RtcDate(5, 4, 3, 2, 1, 2020)
    assert [f.name for f in dataclasses.fields(RtcDate)] == [
        "second", "minute", "hour", "day", "month", "year"
    ]


def test_rtcdate_is_frozen():
    d = RtcDate(0, 0, 0, 1, 1, 2020)
    with pytest.raises(dataclasses.FrozenInstanceError):
        d.year = 2021
    assert d.year == 2020


def test_rtcdate_rejects_negative():
    with pytest.raises(ValueError):
        RtcDate(-1, 0, 0, 1, 1, 2020)