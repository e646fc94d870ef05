import pytest

from rvuser import layout
from rvuser.layout import FileType, OpenFlag, Stat


@pytest.mark.parametrize("a", [0, 1, 4095, 4096, 4097, 123456789, 0x80000000])
def test_round_down_bounds(a):
    down = layout.pg_round_down(a)
    assert down <= a < down + layout.PGSIZE
    assert down % layout.PGSIZE == 0


@pytest.mark.parametrize("a", [0, 1, 4095, 4096, 4097, 123456789])
def test_round_up_bounds(a):
    up = layout.pg_round_up(a)
    assert a <= up < a + layout.PGSIZE
    assert up % layout.PGSIZE == 0


def test_round_up_of_aligned_is_identity():
    assert layout.pg_round_up(3 * layout.PGSIZE) == 3 * layout.PGSIZE
    assert layout.pg_round_down(3 * layout.PGSIZE) == 3 * layout.PGSIZE


@pytest.mark.parametrize("pa", [0, layout.KERNBASE, layout.PHYSTOP - layout.PGSIZE])
def test_pte_roundtrip(pa):
    pte = layout.pa2pte(pa) | layout.PTE_V | layout.PTE_R | layout.PTE_W
    assert layout.pte2pa(pte) == pa
    assert layout.pte_flags(pte) == layout.PTE_V | layout.PTE_R | layout.PTE_W


def test_pa2pte_leaves_flag_bits_clear():
    assert layout.pte_flags(layout.pa2pte(layout.KERNBASE + 0x123)) == 0


@pytest.mark.parametrize("va", [0, layout.PGSIZE, layout.TRAPFRAME, layout.TRAMPOLINE, 0x12345678])
def test_px_reassembles_page_address(va):
    rebuilt = sum(layout.px(level, va) << (layout.PGSHIFT + 9 * level) for level in range(3))
    assert rebuilt == layout.pg_round_down(va)
    assert all(0 <= layout.px(level, va) <= layout.PXMASK for level in range(3))


def test_make_satp_mode_and_ppn():
    satp = layout.make_satp(layout.KERNBASE)
    assert satp & layout.SATP_SV39 == layout.SATP_SV39
    assert (satp & ~layout.SATP_SV39) << 12 == layout.KERNBASE


def test_trampoline_is_top_page():
    assert layout.pg_round_down(layout.MAXVA - 1) == layout.TRAMPOLINE
    assert layout.pg_round_down(layout.TRAMPOLINE - 1) == layout.TRAPFRAME
    assert layout.pg_round_up(layout.TRAPFRAME + 1) == layout.TRAMPOLINE


def test_kstacks_separated_by_guard_pages():
    for p in range(layout.NPROC - 1):
        assert layout.kstack(p) - layout.kstack(p + 1) == 2 * layout.PGSIZE
    assert layout.kstack(0) + layout.PGSIZE < layout.TRAMPOLINE


def test_plic_registers_per_hart():
    for hart in range(layout.NCPU):
        assert layout.plic_senable(hart) - layout.plic_menable(hart) == 0x80
        assert layout.plic_sclaim(hart) - layout.plic_spriority(hart) == 4
        assert layout.plic_mclaim(hart) - layout.plic_mpriority(hart) == 4
    assert layout.plic_menable(1) - layout.plic_menable(0) == 0x100


def test_clint_mtimecmp_stride():
    assert layout.clint_mtimecmp(1) - layout.clint_mtimecmp(0) == 8
    assert layout.clint_mtimecmp(0) == layout.CLINT + 0x4000


def test_file_types_and_flags():
    assert FileType(1) is FileType.DIR
    assert FileType(3) is FileType.DEVICE
    flags = OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC
    assert int(flags) == 0x001 | 0x200 | 0x400
    assert OpenFlag.CREATE in flags
    assert OpenFlag.RDWR not in flags


def test_stat_fields():
    st = Stat(dev=layout.ROOTDEV, ino=5, type=FileType.FILE, nlink=1, size=12)
    assert st == Stat(layout.ROOTDEV, 5, FileType.FILE, 1, 12)
    assert st.type is FileType.FILE


def test_param_derived_sizes():
    assert layout.LOGSIZE == layout.MAXOPBLOCKS * 3
    assert layout.NBUF == layout.LOGSIZE
    assert layout.pg_round_up(layout.PHYSTOP) == layout.PHYSTOP
    assert layout.pg_round_down(layout.KERNBASE) == layout.KERNBASE
    assert layout.pte2pa(layout.pa2pte(layout.PHYSTOP)) == layout.PHYSTOP