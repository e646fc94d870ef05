"""ELF executable header and program header records."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as a little-endian word

ELF_PROG_LOAD = 1

ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4

_ELFHDR = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROGHDR = struct.Struct("<IIQQQQQQ")


class ElfError(ValueError):
    """Raised for malformed or truncated ELF images."""


@dataclass
class ElfHeader:
    """The ELF file header."""

    magic: int = ELF_MAGIC
    ident: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = _ELFHDR.size
    phentsize: int = _PROGHDR.size
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE: ClassVar[int] = _ELFHDR.size

    @classmethod
    def unpack(cls, data: bytes) -> "ElfHeader":
        """Decode a header from the start of ``data``; the magic must match."""
        if len(data) < cls.SIZE:
            raise ElfError("truncated ELF header")
        header = cls(*_ELFHDR.unpack_from(data))
        if header.magic != ELF_MAGIC:
            raise ElfError(f"bad ELF magic {header.magic:#x}")
        return header

    def pack(self) -> bytes:
        return _ELFHDR.pack(
            self.magic, self.ident, self.type, self.machine, self.version,
            self.entry, self.phoff, self.shoff, self.flags, self.ehsize,
            self.phentsize, self.phnum, self.shentsize, self.shnum, self.shstrndx,
        )


@dataclass
class ProgramHeader:
    """An ELF program (segment) header."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE: ClassVar[int] = _PROGHDR.size

    @classmethod
    def unpack(cls, data: bytes) -> "ProgramHeader":
        if len(data) < cls.SIZE:
            raise ElfError("truncated program header")
        return cls(*_PROGHDR.unpack_from(data))

    def pack(self) -> bytes:
        return _PROGHDR.pack(
            self.type, self.flags, self.off, self.vaddr,
            self.paddr, self.filesz, self.memsz, self.align,
        )


def program_headers(data: bytes) -> list[ProgramHeader]:
    """Return every program header of the ELF image in ``data``."""
    header = ElfHeader.unpack(data)
    offsets = (header.phoff + i * ProgramHeader.SIZE for i in range(header.phnum))
    return [ProgramHeader.unpack(data[off:off + ProgramHeader.SIZE]) for off in offsets]