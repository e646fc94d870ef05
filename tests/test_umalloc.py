import pytest

from rvuser.umalloc import HEADER_SIZE, MIN_GROWTH, Allocator


def test_first_allocation_grows_heap_by_minimum():
    a = Allocator()
    assert a.heap_size == 0
    assert a.malloc(10) is not None
    assert a.heap_size == MIN_GROWTH * HEADER_SIZE


def test_blocks_are_aligned_and_disjoint():
    a = Allocator()
    sizes = [1, 16, 17, 100, 1000, 0]
    ranges = sorted((a.malloc(n), n) for n in sizes)
    for addr, _ in ranges:
        assert addr % HEADER_SIZE == 0
    for (addr, n), (nxt, _) in zip(ranges, ranges[1:]):
        assert addr + n <= nxt - HEADER_SIZE


def test_free_then_malloc_reuses_block():
    a = Allocator()
    p = a.malloc(200)
    a.free(p)
    assert a.malloc(200) == p


def test_limit_makes_malloc_fail():
    assert Allocator(limit=1000).malloc(1) is None


def test_exhaust_free_and_allocate_again():
    a = Allocator(limit=1 << 20)
    blocks = []
    while (p := a.malloc(10001)) is not None:
        blocks.append(p)
    assert blocks
    size = a.heap_size
    for p in blocks:
        a.free(p)
    assert a.malloc(1024 * 20) is not None
    assert a.heap_size == size


def test_freed_neighbours_coalesce():
    a = Allocator()
    blocks = [a.malloc(100) for _ in range(10)]
    for p in blocks[::2] + blocks[1::2]:
        a.free(p)
    whole = (MIN_GROWTH - 1) * HEADER_SIZE
    assert a.malloc(whole) is not None
    assert a.heap_size == MIN_GROWTH * HEADER_SIZE


def test_free_unknown_pointer_raises():
    a = Allocator()
    a.malloc(8)
    with pytest.raises(ValueError):
        a.free(12345)


def test_double_free_raises():
    a = Allocator()
    p = a.malloc(8)
    a.free(p)
    with pytest.raises(ValueError):
        a.free(p)


def test_negative_size_raises():
    with pytest.raises(ValueError):
        Allocator().malloc(-1)


def test_bad_heap_start_raises():
    with pytest.raises(ValueError):
        Allocator(heap_start=7)