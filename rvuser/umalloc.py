"""First-fit free-list allocator over a simulated, growable heap.

Addresses are plain integers. Every block starts with a header of
HEADER_SIZE bytes; the pointer handed out is just past it.
"""

from __future__ import annotations

HEADER_SIZE = 16
MIN_GROWTH = 4096  # header-sized units requested from the heap at least


class Allocator:
    """A circular, address-ordered free list that coalesces neighbours."""

    def __init__(self, limit: int | None = None, heap_start: int = 0x1000) -> None:
        if heap_start <= 0 or heap_start % HEADER_SIZE:
            raise ValueError("heap_start must be a positive multiple of the header size")
        self._limit = limit
        self._start = heap_start // HEADER_SIZE
        self._brk = self._start
        self._base = 0
        self._next: dict[int, int] = {}
        self._size: dict[int, int] = {}
        self._allocated: set[int] = set()
        self._freep: int | None = None

    @property
    def heap_size(self) -> int:
        """Bytes obtained from the heap so far."""
        return (self._brk - self._start) * HEADER_SIZE

    def _sbrk(self, nunits: int) -> int | None:
        if self._limit is not None and (self._brk + nunits - self._start) * HEADER_SIZE > self._limit:
            return None
        old = self._brk
        self._brk += nunits
        return old

    def _release(self, bp: int) -> None:
        nxt, size = self._next, self._size
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        q = nxt[p]
        if bp + size[bp] == q:
            size[bp] += size[q]
            nxt[bp] = nxt[q]
            del size[q], nxt[q]
        else:
            nxt[bp] = q
        if p + size[p] == bp:
            size[p] += size[bp]
            nxt[p] = nxt[bp]
            del size[bp], nxt[bp]
        else:
            nxt[p] = bp
        self._freep = p

    def _morecore(self, nunits: int) -> int | None:
        nunits = max(nunits, MIN_GROWTH)
        hp = self._sbrk(nunits)
        if hp is None:
            return None
        self._size[hp] = nunits
        self._release(hp)
        return self._freep

    def malloc(self, nbytes: int) -> int | None:
        """Return the address of ``nbytes`` of free memory, or None when the heap is exhausted."""
        if nbytes < 0:
            raise ValueError("malloc: negative size")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._next[self._base] = self._base
            self._size[self._base] = 0
            self._freep = self._base
        prevp = self._freep
        p = self._next[prevp]
        while True:
            if self._size[p] >= nunits:
                if self._size[p] == nunits:
                    self._next[prevp] = self._next.pop(p)
                else:
                    self._size[p] -= nunits
                    p += self._size[p]
                    self._size[p] = nunits
                self._freep = prevp
                self._allocated.add(p)
                return (p + 1) * HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
                if p is None:
                    return None
            prevp, p = p, self._next[p]

    def free(self, ap: int) -> None:
        """Return a block obtained from malloc to the free list."""
        if ap % HEADER_SIZE:
            raise ValueError(f"free: {ap:#x} is not a block address")
        bp = ap // HEADER_SIZE - 1
        if bp not in self._allocated:
            raise ValueError(f"free: {ap:#x} is not an allocated block")
        self._allocated.remove(bp)
        self._release(bp)