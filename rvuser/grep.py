"""Print the lines that match a pattern.

The pattern language knows only ``^``, ``.``, ``*`` and ``$``.
"""

from __future__ import annotations

import sys
from typing import IO, Iterable

_BUFSIZE = 1024


def _matchhere(re: str, i: int, text: str, j: int) -> bool:
    """Search for ``re[i:]`` at the start of ``text[j:]``."""
    while True:
        if i == len(re):
            return True
        if i + 1 < len(re) and re[i + 1] == "*":
            return _matchstar(re[i], re, i + 2, text, j)
        if re[i] == "$" and i + 1 == len(re):
            return j == len(text)
        if j < len(text) and (re[i] == "." or re[i] == text[j]):
            i += 1
            j += 1
            continue
        return False


def _matchstar(c: str, re: str, i: int, text: str, j: int) -> bool:
    """Search for ``c*`` followed by ``re[i:]`` at the start of ``text[j:]``."""
    while True:
        if _matchhere(re, i, text, j):
            return True
        if j >= len(text):
            return False
        ch = text[j]
        j += 1
        if not (ch == c or c == "."):
            return False


def match(re: str, text: str) -> bool:
    """Return whether ``re`` matches anywhere in ``text``."""
    if re.startswith("^"):
        return _matchhere(re, 1, text, 0)
    return any(_matchhere(re, 0, text, j) for j in range(len(text) + 1))


def grep(pattern: str, stream: IO[str], out: IO[str]) -> None:
    """Copy the newline-terminated lines of ``stream`` that match to ``out``.

    A final line without a newline is not examined, and reading stops once a
    single line fills the whole input buffer.
    """
    pending = ""
    while True:
        room = _BUFSIZE - 1 - len(pending)
        if room <= 0:
            break
        chunk = stream.read(room)
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                out.write(line + "\n")


def main(argv: Iterable[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, *files = args
    if not files:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for name in files:
        try:
            f = open(name, newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {name}\n")
            return 1
        with f:
            grep(pattern, f, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())