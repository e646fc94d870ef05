"""Layouts, C-style helpers, command-line tools, synchronisation primitives, an allocator and a shell."""

__version__ = "0.1.0"

__all__ = [
    "layout",
    "elf",
    "virtio",
    "ulib",
    "printfmt",
    "grep",
    "wc",
    "cat",
    "echo",
    "ls",
    "fileops",
    "rand",
    "sync",
    "umalloc",
    "producer_consumer",
    "threads",
    "sh",
]