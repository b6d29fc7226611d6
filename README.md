# rvkernkit

A small toolkit for studying a RISC-V teaching kernel from Python.

## Modules

- `rvkernkit.riscv` – Sv39 paging arithmetic: `pgroundup`, `pgrounddown`,
  `pa2pte`, `pte2pa`, `pte_flags`, `pxshift`, `px`, `make_satp`, the PTE
  flag bits (`PTE_V`, `PTE_R`, `PTE_W`, `PTE_X`, `PTE_U`), `PGSIZE`,
  `MAXVA` and the status and interrupt-enable register bits.
- `rvkernkit.memlayout` – the physical memory map of the `virt` machine
  (`UART0`, `VIRTIO0`, `CLINT`, `PLIC`, `KERNBASE`, `PHYSTOP`,
  `TRAMPOLINE`, `TRAPFRAME`), the address helpers `clint_mtimecmp`,
  `plic_menable`, `plic_senable`, `plic_mpriority`, `plic_spriority`,
  `plic_mclaim`, `plic_sclaim` and `kstack`, system parameters such as
  `NPROC` and `MAXPATH`, the `O_*` open flags and the `RtcDate` record.
- `rvkernkit.elf` – `ElfHeader` and `ProgramHeader`, parsed with
  `parse_elf_header`, `parse_program_header` and `read_program_headers`,
  and serialised again with `to_bytes`. Malformed input raises `ElfError`.
- `rvkernkit.vm` – a simulated `PhysicalMemory` page allocator (`kalloc`,
  `kfree`, `read`, `write`, `read_u64`, `write_u64`, `free_pages`) and a
  three-level `PageTable` with `walk`, `walkaddr`, `map_pages`, `unmap`,
  `init_code`, `grow`, `shrink`, `free_walk`, `free`, `copy_to`,
  `clear_user`, `copy_out`, `copy_in` and `copy_in_str`, plus `kvminit` to
  build the kernel's direct map and `kvmpa` to translate through it.
  Kernel panics surface as `VmPanic`, allocation failures as `OutOfMemory`,
  and bad user addresses in the copy routines as `ValueError`.
- `rvkernkit.sh` – the shell's command parser: `parsecmd` turns a command
  line into `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd` and `BackCmd` trees,
  raising `ShellSyntaxError` on bad input. `gettoken` scans a single token,
  and `cd_target` picks the directory out of a `cd ` line.
- `rvkernkit.printf` – `sprintf`, `fprintf` and `printf` understanding
  `%d`, `%l`, `%x`, `%p`, `%s`, `%c` and `%%`, with 32-bit integer
  semantics for `%d`, `%l` and `%x`.
- `rvkernkit.ulib` – `atoi`, byte-wise `strcmp` and `gets`.
- `rvkernkit.grind` – the Park–Miller generator: `do_rand` and
  `ParkMillerRandom`.
- `rvkernkit.grep`, `rvkernkit.wc`, `rvkernkit.cat`,
  `rvkernkit.fileutils` – the user tools listed below, also usable as
  functions (`match`, `grep`, `wc`, `cat`, `echo`, `fmtname`, `ls`).

## Example

```python
from rvkernkit.vm import PhysicalMemory, PageTable
from rvkernkit.memlayout import KERNBASE

memory = PhysicalMemory(KERNBASE, 64)
pagetable = PageTable.create(memory)
size = pagetable.grow(0, 8192)
pagetable.copy_out(100, b"hello\0")
assert pagetable.copy_in_str(100, 64) == b"hello"
pagetable.free(size)
```

```python
from rvkernkit.sh import parsecmd

tree = parsecmd("cat < in.txt | grep x > out.txt; echo done &")
```

## Command-line tools

```
rvk-grep PATTERN [FILE ...]    # ^ . * $ regular expressions
rvk-wc [FILE ...]              # lines, words, bytes
rvk-cat [FILE ...]
rvk-echo WORD ...
rvk-ls [PATH ...]
rvk-ln OLD NEW
rvk-mkdir DIR ...
rvk-rm FILE ...
rvk-kill PID ...
```

`rvk-kill` sends `SIGKILL` (or `SIGTERM` where that is unavailable) to each
positive process id given.

## What it does not do

The package does not boot or run a kernel, and nothing in it executes
programs: the shell support is a parser only, with no command that runs the
parsed trees. Page tables live in simulated memory, not on real hardware.
There is no user-level heap allocator and no tool for building file-system
images.

## Tests

```
pip install -e .[test]
pytest
```