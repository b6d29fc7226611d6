"""Sv39 page tables over a simulated physical memory."""

from __future__ import annotations

import struct
from typing import Optional

from .memlayout import CLINT, KERNBASE, PHYSTOP, PLIC, TRAMPOLINE, UART0, VIRTIO0
from .riscv import (
    MAXVA,
    PGSIZE,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    PTES_PER_PAGE,
    pa2pte,
    pgrounddown,
    pgroundup,
    pte2pa,
    pte_flags,
    px,
)

_U64 = struct.Struct("<Q")
_PAGE_ENTRIES = struct.Struct(f"<{PTES_PER_PAGE}Q")
_ZERO_PAGE = bytes(PGSIZE)


class VmPanic(RuntimeError):
    """An unrecoverable inconsistency, where the kernel would panic."""


class OutOfMemory(MemoryError):
    """No physical page was left to allocate."""


class PhysicalMemory:
    """A run of physical RAM handed out one page at a time."""

    def __init__(self, base: int, npages: int) -> None:
        if base % PGSIZE:
            raise ValueError("base must be page aligned")
        if npages < 0:
            raise ValueError("npages must be non-negative")
        self.base = base
        self.npages = npages
        self._data = bytearray(npages * PGSIZE)
        self._free = [base + i * PGSIZE for i in range(npages)]
        self._allocated: set[int] = set()

    @property
    def end(self) -> int:
        return self.base + self.npages * PGSIZE

    def kalloc(self) -> int:
        """Allocate one page and return its physical address."""
        if not self._free:
            raise OutOfMemory("out of physical pages")
        pa = self._free.pop()
        self._allocated.add(pa)
        return pa

    def kfree(self, pa: int) -> None:
        """Return a page obtained from kalloc."""
        if pa % PGSIZE or not self.base <= pa < self.end:
            raise VmPanic("kfree")
        if pa not in self._allocated:
            raise VmPanic("kfree: page not allocated")
        self._allocated.remove(pa)
        self._free.append(pa)

    def _offset(self, pa: int, n: int) -> int:
        off = pa - self.base
        if n < 0 or off < 0 or off + n > len(self._data):
            raise VmPanic(f"physical address {pa:#x} out of range")
        return off

    def read(self, pa: int, n: int) -> bytes:
        off = self._offset(pa, n)
        return bytes(self._data[off:off + n])

    def write(self, pa: int, data: bytes) -> None:
        n = len(data)
        off = self._offset(pa, n)
        self._data[off:off + n] = data

    def read_u64(self, pa: int) -> int:
        off = self._offset(pa, 8)
        return _U64.unpack_from(self._data, off)[0]

    def write_u64(self, pa: int, value: int) -> None:
        off = self._offset(pa, 8)
        _U64.pack_into(self._data, off, value)

    def free_pages(self) -> int:
        return len(self._free)

    def _zero_page(self, pa: int) -> None:
        self.write(pa, _ZERO_PAGE)

    def _page_entries(self, pa: int) -> tuple[int, ...]:
        off = self._offset(pa, PGSIZE)
        return _PAGE_ENTRIES.unpack_from(self._data, off)


class PageTable:
    """A three-level Sv39 page table whose root page lives in physical memory."""

    def __init__(self, memory: PhysicalMemory, root: int) -> None:
        self.memory = memory
        self.root = root

    @classmethod
    def create(cls, memory: PhysicalMemory) -> "PageTable":
        """Allocate an empty page table."""
        root = memory.kalloc()
        memory._zero_page(root)
        return cls(memory, root)

    def walk(self, va: int, alloc: bool = False) -> Optional[int]:
        """Return the physical address of the level-0 PTE for va.

        With alloc, missing page-table pages are created. Returns None when
        a table is missing and cannot or may not be allocated.
        """
        if va >= MAXVA:
            raise VmPanic("walk")
        mem = self.memory
        table = self.root
        for level in (2, 1):
            pte_addr = table + 8 * px(level, va)
            pte = mem.read_u64(pte_addr)
            if pte & PTE_V:
                table = pte2pa(pte)
                continue
            if not alloc:
                return None
            try:
                table = mem.kalloc()
            except OutOfMemory:
                return None
            mem._zero_page(table)
            mem.write_u64(pte_addr, pa2pte(table) | PTE_V)
        return table + 8 * px(0, va)

    def walkaddr(self, va: int) -> Optional[int]:
        """Physical page address of a user-accessible va, or None."""
        if va >= MAXVA:
            return None
        pte_addr = self.walk(va)
        if pte_addr is None:
            return None
        pte = self.memory.read_u64(pte_addr)
        if not pte & PTE_V or not pte & PTE_U:
            return None
        return pte2pa(pte)

    def map_pages(self, va: int, size: int, pa: int, perm: int) -> None:
        """Map [va, va+size) to physical addresses starting at pa."""
        if size <= 0:
            raise VmPanic("mappages: size")
        mem = self.memory
        a = pgrounddown(va)
        last = pgrounddown(va + size - 1)
        while True:
            pte_addr = self.walk(a, True)
            if pte_addr is None:
                raise OutOfMemory("mappages: cannot allocate page-table page")
            if mem.read_u64(pte_addr) & PTE_V:
                raise VmPanic("remap")
            mem.write_u64(pte_addr, pa2pte(pa) | perm | PTE_V)
            if a == last:
                break
            a += PGSIZE
            pa += PGSIZE

    def unmap(self, va: int, npages: int, do_free: bool) -> None:
        """Remove npages of existing mappings from va, optionally freeing them."""
        if va % PGSIZE:
            raise VmPanic("uvmunmap: not aligned")
        mem = self.memory
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            pte_addr = self.walk(a)
            if pte_addr is None:
                raise VmPanic("uvmunmap: walk")
            pte = mem.read_u64(pte_addr)
            if not pte & PTE_V:
                raise VmPanic("uvmunmap: not mapped")
            if pte_flags(pte) == PTE_V:
                raise VmPanic("uvmunmap: not a leaf")
            if do_free:
                mem.kfree(pte2pa(pte))
            mem.write_u64(pte_addr, 0)

    def init_code(self, src: bytes) -> None:
        """Load code smaller than a page at virtual address zero."""
        if len(src) >= PGSIZE:
            raise VmPanic("inituvm: more than a page")
        page = self.memory.kalloc()
        self.memory._zero_page(page)
        self.map_pages(0, PGSIZE, page, PTE_W | PTE_R | PTE_X | PTE_U)
        self.memory.write(page, src)

    def grow(self, oldsz: int, newsz: int) -> int:
        """Allocate zeroed user pages to grow from oldsz to newsz."""
        if newsz < oldsz:
            return oldsz
        mem = self.memory
        oldsz = pgroundup(oldsz)
        for a in range(oldsz, newsz, PGSIZE):
            try:
                page = mem.kalloc()
            except OutOfMemory:
                self.shrink(a, oldsz)
                raise
            mem._zero_page(page)
            try:
                self.map_pages(a, PGSIZE, page, PTE_W | PTE_X | PTE_R | PTE_U)
            except OutOfMemory:
                mem.kfree(page)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz: int, newsz: int) -> int:
        """Free user pages to bring the size from oldsz down to newsz."""
        if newsz >= oldsz:
            return oldsz
        if pgroundup(newsz) < pgroundup(oldsz):
            npages = (pgroundup(oldsz) - pgroundup(newsz)) // PGSIZE
            self.unmap(pgroundup(newsz), npages, True)
        return newsz

    def _free_table(self, table: int) -> None:
        mem = self.memory
        for i, pte in enumerate(mem._page_entries(table)):
            if pte & PTE_V and not pte & (PTE_R | PTE_W | PTE_X):
                self._free_table(pte2pa(pte))
                mem.write_u64(table + 8 * i, 0)
            elif pte & PTE_V:
                raise VmPanic("freewalk: leaf")
        mem.kfree(table)

    def free_walk(self) -> None:
        """Free all page-table pages; leaf mappings must already be gone."""
        self._free_table(self.root)

    def free(self, sz: int) -> None:
        """Free the user memory below sz, then the page-table pages."""
        if sz > 0:
            self.unmap(0, pgroundup(sz) // PGSIZE, True)
        self.free_walk()

    def copy_to(self, other: "PageTable", sz: int) -> None:
        """Copy mappings and memory for [0, sz) into another page table."""
        mem = self.memory
        for i in range(0, sz, PGSIZE):
            pte_addr = self.walk(i)
            if pte_addr is None:
                raise VmPanic("uvmcopy: pte should exist")
            pte = mem.read_u64(pte_addr)
            if not pte & PTE_V:
                raise VmPanic("uvmcopy: page not present")
            pa = pte2pa(pte)
            flags = pte_flags(pte)
            try:
                page = other.memory.kalloc()
            except OutOfMemory:
                other.unmap(0, i // PGSIZE, True)
                raise
            other.memory.write(page, mem.read(pa, PGSIZE))
            try:
                other.map_pages(i, PGSIZE, page, flags)
            except OutOfMemory:
                other.memory.kfree(page)
                other.unmap(0, i // PGSIZE, True)
                raise

    def clear_user(self, va: int) -> None:
        """Make the page at va inaccessible to user mode."""
        pte_addr = self.walk(va)
        if pte_addr is None:
            raise VmPanic("uvmclear")
        pte = self.memory.read_u64(pte_addr)
        self.memory.write_u64(pte_addr, pte & ~PTE_U)

    def _user_page(self, va0: int, what: str) -> int:
        pa0 = self.walkaddr(va0)
        if pa0 is None:
            raise ValueError(f"{what}: bad user address {va0:#x}")
        return pa0

    def copy_out(self, dstva: int, data: bytes) -> None:
        """Copy data into user memory at dstva."""
        view = memoryview(bytes(data))
        while view:
            va0 = pgrounddown(dstva)
            pa0 = self._user_page(va0, "copyout")
            n = min(PGSIZE - (dstva - va0), len(view))
            self.memory.write(pa0 + (dstva - va0), view[:n])
            view = view[n:]
            dstva = va0 + PGSIZE

    def copy_in(self, srcva: int, length: int) -> bytes:
        """Copy length bytes from user memory at srcva."""
        out = bytearray()
        while length > 0:
            va0 = pgrounddown(srcva)
            pa0 = self._user_page(va0, "copyin")
            n = min(PGSIZE - (srcva - va0), length)
            out += self.memory.read(pa0 + (srcva - va0), n)
            length -= n
            srcva = va0 + PGSIZE
        return bytes(out)

    def copy_in_str(self, srcva: int, max_len: int) -> bytes:
        """Copy a NUL-terminated string of at most max_len bytes from user memory."""
        out = bytearray()
        while max_len > 0:
            va0 = pgrounddown(srcva)
            pa0 = self._user_page(va0, "copyinstr")
            n = min(PGSIZE - (srcva - va0), max_len)
            chunk = self.memory.read(pa0 + (srcva - va0), n)
            nul = chunk.find(0)
            if nul >= 0:
                out += chunk[:nul]
                return bytes(out)
            out += chunk
            max_len -= n
            srcva = va0 + PGSIZE
        raise ValueError("copyinstr: no terminating NUL within limit")


def _kvmmap(pagetable: PageTable, va: int, pa: int, sz: int, perm: int) -> None:
    try:
        pagetable.map_pages(va, sz, pa, perm)
    except OutOfMemory as exc:
        raise VmPanic("kvmmap") from exc


def kvminit(memory: PhysicalMemory, etext: int, trampoline: int) -> PageTable:
    """Build the kernel's direct-map page table."""
    kpt = PageTable.create(memory)
    _kvmmap(kpt, UART0, UART0, PGSIZE, PTE_R | PTE_W)
    _kvmmap(kpt, VIRTIO0, VIRTIO0, PGSIZE, PTE_R | PTE_W)
    _kvmmap(kpt, CLINT, CLINT, 0x10000, PTE_R | PTE_W)
    _kvmmap(kpt, PLIC, PLIC, 0x400000, PTE_R | PTE_W)
    _kvmmap(kpt, KERNBASE, KERNBASE, etext - KERNBASE, PTE_R | PTE_X)
    _kvmmap(kpt, etext, etext, PHYSTOP - etext, PTE_R | PTE_W)
    _kvmmap(kpt, TRAMPOLINE, trampoline, PGSIZE, PTE_R | PTE_X)
    return kpt


def kvmpa(pagetable: PageTable, va: int) -> int:
    """Translate a kernel virtual address to a physical address."""
    off = va % PGSIZE
    pte_addr = pagetable.walk(va)
    if pte_addr is None:
        raise VmPanic("kvmpa")
    pte = pagetable.memory.read_u64(pte_addr)
    if not pte & PTE_V:
        raise VmPanic("kvmpa")
    return pte2pa(pte) + off