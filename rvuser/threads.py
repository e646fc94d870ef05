"""Several threads increment one shared balance under a mutex."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import IO, Iterable, Sequence

from rvuser.printfmt import sprintf
from rvuser.sync import ThreadMutex


@dataclass
class Balance:
    """A named worker and how many increments it performs."""

    name: str
    amount: int


def run(balances: Sequence[Balance], out: IO[str] | None = None) -> int:
    """Run one thread per balance and return the shared total."""
    out = sys.stdout if out is None else out
    mlock = ThreadMutex()
    print_lock = ThreadMutex()
    total = [0]

    def do_work(b: Balance) -> None:
        with print_lock:
            out.write(sprintf("Starting do_work: s:%s\n", b.name))
        for _ in range(b.amount):
            with mlock:
                old = total[0]
                total[0] = old + 1
        with print_lock:
            out.write(sprintf("Done s:%s\n", b.name))

    threads = [threading.Thread(target=do_work, args=(b,)) for b in balances]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    parts = "".join(sprintf("(%d):%d, ", t.native_id or 0, 0) for t in threads)
    with print_lock:
        out.write(sprintf("Threads finished: %sshared balance:%d\n", parts, total[0]))
    return total[0]


def main(argv: Iterable[str] | None = None) -> int:
    run([Balance("b1", 3200), Balance("b2", 2800)], sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())