"""Small string and input helpers used by the user programs."""

from __future__ import annotations

from itertools import zip_longest
from typing import IO, AnyStr


def _cstring(s: str | bytes) -> bytes:
    data = s.encode() if isinstance(s, str) else bytes(s)
    return data.split(b"\0", 1)[0]


def atoi(s: str | bytes) -> int:
    """Parse the leading decimal digits of ``s``; no sign, no whitespace."""
    n = 0
    for ch in _cstring(s):
        if not 0x30 <= ch <= 0x39:
            break
        n = n * 10 + ch - 0x30
    return n


def strcmp(p: str | bytes, q: str | bytes) -> int:
    """Compare two NUL-terminated strings byte-wise, as unsigned values."""
    for a, b in zip_longest(_cstring(p), _cstring(q), fillvalue=0):
        if a != b:
            return a - b
    return 0


def memcmp(a: bytes, b: bytes, n: int) -> int:
    """Compare the first ``n`` bytes of ``a`` and ``b``."""
    if len(a) < n or len(b) < n:
        raise ValueError("memcmp: buffer shorter than the compared length")
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return x - y
    return 0


def gets(stream: IO[AnyStr], max: int) -> AnyStr:
    """Read one line of at most ``max - 1`` characters, keeping its terminator."""
    pieces = []
    empty = ""
    while len(pieces) + 1 < max:
        c = stream.read(1)
        empty = c[:0]
        if not c:
            break
        pieces.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    return empty.join(pieces)