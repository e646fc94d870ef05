"""List files and directories."""

from __future__ import annotations

import os
import stat as stat_mod
import sys
from typing import IO, Iterable

from rvuser.layout import FileType
from rvuser.printfmt import sprintf

DIRSIZ = 14
_PATHBUF = 512


def fmtname(path: str) -> str:
    """Return the last path component, blank-padded to DIRSIZ characters."""
    name = path.rsplit("/", 1)[-1]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _file_type(st: os.stat_result) -> FileType:
    if stat_mod.S_ISDIR(st.st_mode):
        return FileType.DIR
    if stat_mod.S_ISREG(st.st_mode):
        return FileType.FILE
    return FileType.DEVICE


def ls(path: str, out: IO[str] | None = None) -> None:
    """Describe ``path``, or each entry of it when it is a directory."""
    out = sys.stdout if out is None else out
    try:
        st = os.stat(path)
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return

    kind = _file_type(st)
    if kind is not FileType.DIR:
        out.write(sprintf("%s %d %d %l\n", fmtname(path), kind, st.st_ino, st.st_size))
        return

    if len(path) + 1 + DIRSIZ + 1 > _PATHBUF:
        out.write("ls: path too long\n")
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    for name in (".", "..", *names):
        entry = f"{path}/{name}"
        try:
            est = os.stat(entry)
        except OSError:
            out.write(f"ls: cannot stat {entry}\n")
            continue
        out.write(sprintf("%s %d %d %d\n", fmtname(entry), _file_type(est), est.st_ino, est.st_size))


def main(argv: Iterable[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    for path in args or ["."]:
        ls(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())