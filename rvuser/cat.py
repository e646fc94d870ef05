"""Concatenate files to standard output."""

from __future__ import annotations

import sys
from typing import IO, Iterable

_CHUNK = 512


class _ReadError(OSError):
    pass


class _WriteError(OSError):
    pass


def cat(stream: IO[bytes], out: IO[bytes]) -> None:
    """Copy everything from ``stream`` to ``out``.

    Raises OSError with the message ``read error`` or ``write error``.
    """
    while True:
        try:
            chunk = stream.read(_CHUNK)
        except OSError as exc:
            raise _ReadError("read error") from exc
        if not chunk:
            return
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise _WriteError("write error") from exc
        if written is not None and written != len(chunk):
            raise _WriteError("write error")


def main(argv: Iterable[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout.buffer
    try:
        if not args:
            cat(sys.stdin.buffer, out)
            return 0
        for name in args:
            try:
                f = open(name, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {name}\n")
                return 1
            with f:
                cat(f, out)
    except (_ReadError, _WriteError) as exc:
        sys.stderr.write(f"cat: {exc}\n")
        return 1
    finally:
        out.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())