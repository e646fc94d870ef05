"""Count lines, words and bytes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, Iterable

from rvuser.printfmt import sprintf

_CHUNK = 512
# The NUL byte is found by the separator search too, so it separates words.
_SEPARATORS = frozenset(b" \r\t\n\v\0")


@dataclass(frozen=True)
class Counts:
    """Line, word and byte totals of one input."""

    lines: int = 0
    words: int = 0
    chars: int = 0


def count(stream: IO[bytes]) -> Counts:
    """Count lines, words and bytes in a binary stream."""
    lines = words = chars = 0
    inword = False
    while chunk := stream.read(_CHUNK):
        chars += len(chunk)
        lines += chunk.count(b"\n")
        for b in chunk:
            if b in _SEPARATORS:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return Counts(lines, words, chars)


def wc(stream: IO[bytes], name: str, out: IO[str] | None = None) -> Counts:
    """Count ``stream`` and report the totals labelled ``name``."""
    out = sys.stdout if out is None else out
    counts = count(stream)
    out.write(sprintf("%d %d %d %s\n", counts.lines, counts.words, counts.chars, name))
    return counts


def main(argv: Iterable[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        if not args:
            wc(sys.stdin.buffer, "")
            return 0
        for name in args:
            try:
                f = open(name, "rb")
            except OSError:
                sys.stdout.write(f"wc: cannot open {name}\n")
                return 1
            with f:
                wc(f, name)
    except OSError:
        sys.stdout.write("wc: read error\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())