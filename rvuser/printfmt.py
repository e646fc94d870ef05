"""Minimal formatted output understanding %d %l %x %p %s %c and %%."""

from __future__ import annotations

import sys
from typing import IO, Any

_DIGITS = "0123456789ABCDEF"
_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1


def _int32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _printint(value: int, base: int, signed: bool) -> str:
    xx = _int32(value)
    negative = signed and xx < 0
    x = (-xx if negative else xx) & _MASK32
    digits = []
    while True:
        x, r = divmod(x, base)
        digits.append(_DIGITS[r])
        if x == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _printptr(value: int) -> str:
    return "0x" + format(value & _MASK64, "016X")


def _string(value: Any) -> str:
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        return value.split(b"\0", 1)[0].decode("latin-1")
    return str(value)


def _char(value: Any) -> str:
    if isinstance(value, str):
        return value[:1]
    return chr(value & 0xFF)


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text."""
    values = iter(args)

    def take() -> Any:
        try:
            return next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    out = []
    pending = False
    for c in fmt:
        if not pending:
            if c == "%":
                pending = True
            else:
                out.append(c)
            continue
        pending = False
        if c == "d":
            out.append(_printint(take(), 10, True))
        elif c == "l":
            out.append(_printint(take(), 10, False))
        elif c == "x":
            out.append(_printint(take(), 16, False))
        elif c == "p":
            out.append(_printptr(take()))
        elif c == "s":
            out.append(_string(take()))
        elif c == "c":
            out.append(_char(take()))
        elif c == "%":
            out.append("%")
        else:
            # Unknown sequence: echo it to draw attention.
            out.append("%" + c)
    return "".join(out)


def fprintf(stream: IO[str], fmt: str, *args: Any) -> None:
    """Write formatted output to ``stream``."""
    stream.write(sprintf(fmt, *args))


def printf(fmt: str, *args: Any) -> None:
    """Write formatted output to standard output."""
    fprintf(sys.stdout, fmt, *args)