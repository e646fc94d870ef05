"""Print the arguments separated by spaces."""

from __future__ import annotations

import sys
from typing import Iterable


def echo(args: Iterable[str]) -> str:
    """Return the text echo prints: the words joined by spaces, then a newline.

    With no words nothing at all is printed.
    """
    words = list(args)
    return " ".join(words) + "\n" if words else ""


def main(argv: Iterable[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    sys.stdout.write(echo(args))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())