"""Machine, memory-layout and file-system constants shared by the user programs."""

from __future__ import annotations

import enum
from dataclasses import dataclass

MASK64 = (1 << 64) - 1

# Page geometry (Sv39).
PGSIZE = 4096
PGSHIFT = 12
PXMASK = 0x1FF

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

# One beyond the highest usable virtual address; one bit less than Sv39
# allows, so that addresses never need sign extension.
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

SATP_SV39 = 8 << 60

# Machine status register.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1

# Machine interrupt enable.
MIE_MEIE = 1 << 11
MIE_MTIE = 1 << 7
MIE_MSIE = 1 << 3

# Physical memory layout of the virt machine.
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

# System parameters.
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
FSSIZE = 2000
MAXPATH = 128


class FileType(enum.IntEnum):
    """Kind of object an inode describes."""

    DIR = 1
    FILE = 2
    DEVICE = 3


class OpenFlag(enum.IntFlag):
    """Flags accepted by open()."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


@dataclass
class Stat:
    """File status as reported by fstat()."""

    dev: int
    ino: int
    type: FileType
    nlink: int
    size: int


def pg_round_up(sz: int) -> int:
    """Round a size up to the next page boundary."""
    return (sz + PGSIZE - 1) & ~(PGSIZE - 1) & MASK64


def pg_round_down(a: int) -> int:
    """Round an address down to its page boundary."""
    return a & ~(PGSIZE - 1) & MASK64


def pa2pte(pa: int) -> int:
    """Shift a physical address into the position it takes in a PTE."""
    return ((pa & MASK64) >> 12) << 10


def pte2pa(pte: int) -> int:
    """Extract the physical address held in a PTE."""
    return ((pte & MASK64) >> 10) << 12


def pte_flags(pte: int) -> int:
    """Return the flag bits of a PTE."""
    return pte & 0x3FF


def px(level: int, va: int) -> int:
    """Return the 9-bit page-table index of ``va`` at ``level``."""
    return ((va & MASK64) >> (PGSHIFT + 9 * level)) & PXMASK


def make_satp(pagetable: int) -> int:
    """Build a satp register value selecting Sv39 and ``pagetable``."""
    return SATP_SV39 | ((pagetable & MASK64) >> 12)


def kstack(p: int) -> int:
    """Virtual address of the kernel stack for process slot ``p``."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE


def clint_mtimecmp(hartid: int) -> int:
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