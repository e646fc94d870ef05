# rvuser

The user side of a small RISC-V teaching operating system in plain Python.
It has the constants and binary layouts that the kernel shares with user
programs, a few C-style library helpers, the classic command-line tools, the
user-level synchronisation primitives with two threading demos, a free-list
allocator, and a shell with its command parser.

There are no runtime dependencies.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest for the test suite
```

## Commands

Each tool is installed as a command with an `rv-` prefix, so that none of
them hides a system command of the same name.

| Command                      | What it does                                                       |
|------------------------------|--------------------------------------------------------------------|
| `rv-cat [file ...]`          | copies the files, or standard input, to standard output            |
| `rv-echo [arg ...]`          | prints its arguments separated by spaces and ends with a newline   |
| `rv-grep pattern [file ...]` | prints the lines that match a pattern built from `^ . * $`         |
| `rv-wc [file ...]`           | prints the line, word and byte counts and the name                 |
| `rv-ls [path ...]`           | lists a file, or each entry of a directory, with type, inode and size |
| `rv-kill pid ...`            | sends a kill signal to each process id                             |
| `rv-ln old new`              | makes a hard link                                                  |
| `rv-mkdir dir ...`           | creates directories and stops at the first failure                 |
| `rv-rm path ...`             | removes files or empty directories and stops at the first failure  |
| `rv-producer-consumer`       | passes items 1 to 10 through a five-slot buffer between two threads |
| `rv-threads`                 | runs two threads that add 3200 and 2800 to one balance under a mutex |
| `rv-sh`                      | an interactive shell with `\|`, `;`, `&`, `<`, `>`, `>>`, `( )` and `cd` |

Examples:

```
rv-grep '^def ' rvuser/sh.py
rv-wc README.md
rv-echo hello world
```

`rv-grep` examines only lines that end in a newline. In `rv-ls` the type
column is 1 for a directory, 2 for a regular file and 3 for anything else.

## Library

### Memory layout and constants: `rvuser.layout`

Page arithmetic, Sv39 page-table helpers, the physical memory map of the
emulated board, system limits, file open flags and file types.

```python
from rvuser.layout import pg_round_up, pg_round_down, px, pa2pte, pte2pa
from rvuser.layout import OpenFlag, FileType, Stat

pg_round_up(4097)        # 8192
pg_round_down(4097)      # 4096
px(0, 0x1000)            # level-0 page-table index of a virtual address
pte2pa(pa2pte(0x80001000))
OpenFlag.CREATE | OpenFlag.RDWR
```

`pte_flags` takes the flag bits from a page-table entry. `kstack` gives the
kernel stack address of a process slot and `make_satp` the value of the
address-translation register. `clint_mtimecmp`, `plic_menable`,
`plic_senable`, `plic_mpriority`, `plic_spriority`, `plic_mclaim` and
`plic_sclaim` compute device register addresses.

### ELF headers: `rvuser.elf`

```python
from rvuser.elf import ElfHeader, ProgramHeader, program_headers, ElfError

header = ElfHeader.unpack(data)      # ElfError on a bad magic or short data
for ph in program_headers(data):
    print(ph.vaddr, ph.memsz)
```

`ElfHeader.pack()` and `ProgramHeader.pack()` give back the bytes. `ElfError`
is a `ValueError`.

### Virtio structures: `rvuser.virtio`

`VirtqDesc`, `VirtqAvail`, `VirtqUsedElem`, `VirtqUsed` and `BlkRequest`
each have `unpack(data)` and `pack()` for the little-endian layouts of a
virtio block device queue. Short input, and rings that do not hold exactly
eight entries, raise `ValueError`. The module also holds the MMIO register
offsets and the status and feature bits.

### C-style helpers: `rvuser.ulib` and `rvuser.printfmt`

```python
from rvuser.ulib import atoi, strcmp, memcmp, gets
from rvuser.printfmt import sprintf, printf, fprintf

atoi("42abc")                                       # 42
strcmp("abc", "abd")                                # negative
sprintf("%d %x %s %c %%", -7, 255, "hi", ord("!"))  # '-7 FF hi ! %'
```

`gets(stream, max)` reads one line of at most `max - 1` characters and keeps
its terminator. The formatter understands `%d`, `%l`, `%x`, `%p`, `%s`, `%c`
and `%%`, and prints any other sequence unchanged. It raises `TypeError` when
there are fewer arguments than the format needs.

### Tools as functions

- `rvuser.grep.match(re, text)` and `rvuser.grep.grep(pattern, stream, out)`
- `rvuser.wc.count(stream)` returns a `Counts(lines, words, chars)`;
  `rvuser.wc.wc(stream, name, out)` prints it as well
- `rvuser.cat.cat(stream, out)` copies binary streams
- `rvuser.echo.echo(args)` returns the line that would be printed
- `rvuser.ls.fmtname(path)` pads a name to the 14-character entry width, and
  `rvuser.ls.ls(path, out)` prints a listing
- `rvuser.rand.do_rand(ctx)` is the Park–Miller step function, and
  `rvuser.rand.Random` is a generator that keeps its own state

### Synchronisation: `rvuser.sync`

`Queue` is a 16-slot ring of integers. Its `front()` returns -1 when the ring
is empty. `ThreadMutex` and `ThreadSpinlock` raise `RuntimeError` if a thread
locks one twice or unlocks one it does not hold. Both work as context
managers. `CondVar` wakes its waiters in FIFO order. `Semaphore` is built from
a mutex and a condition variable.

```python
from rvuser.sync import Semaphore

slots = Semaphore(5)
slots.wait()
slots.post()
```

`rvuser.producer_consumer.run(items, capacity, out)` returns the items in
the order they were consumed. `rvuser.threads.run(balances, out)` takes a
list of `Balance(name, amount)` and returns the shared total.

### Allocator: `rvuser.umalloc`

`Allocator(limit=None, heap_start=0x1000)` is a first-fit allocator over a
simulated heap with a circular free list. Addresses are integers.
`malloc(nbytes)` returns an address, or `None` when `limit` would be
exceeded. `free(ap)` returns a block to the list and joins it with free
neighbours. Freeing an address that is not allocated raises `ValueError`.

### Shell: `rvuser.sh`

```python
from rvuser.sh import parsecmd, Shell, ShellSyntaxError

cmd = parsecmd("ls > out; (echo a | wc) &")
status = Shell().execute("echo hi > greeting\n")
```

`parsecmd` builds a tree of `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd` and
`BackCmd`. It raises `ShellSyntaxError` on bad input, or when a command has
ten or more arguments. `Shell.run(cmd)` runs a tree and returns its exit
status. `Shell.execute(line)` handles one input line, including `cd`. A
`Shell` takes binary `stdin` and `stdout`, a text `stderr` and a mapping of
command names to functions. By default the mapping holds the tools listed
above.

## What it does not do

- There is no kernel, file system image or process manager. The tools work
  on the host's files and processes through Python's standard library.
- The shell starts no external programs. It runs only the commands in its
  table, inside the same Python process. An unknown name prints
  `exec <name> failed`.
- Stages of a pipeline run one after another, with the output buffered in
  memory. Background jobs (`&`) run to completion before the shell carries
  on.
- There is no stress or system-call test driver. Only its random-number
  generator, `rvuser.rand`, is provided.