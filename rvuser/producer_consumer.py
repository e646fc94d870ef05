"""A bounded-buffer producer and consumer running as two threads."""

from __future__ import annotations

import sys
import threading
from typing import IO, Iterable

from rvuser.printfmt import sprintf
from rvuser.sync import QUEUE_CAPACITY, Queue, Semaphore, ThreadMutex


def run(items: int = 10, capacity: int = 5, out: IO[str] | None = None) -> list[int]:
    """Produce ``1..items`` through a buffer of ``capacity`` slots; return what was consumed."""
    if not 1 <= capacity <= QUEUE_CAPACITY:
        raise ValueError(f"capacity must be between 1 and {QUEUE_CAPACITY}")
    out = sys.stdout if out is None else out

    q = Queue()
    mx = ThreadMutex()
    print_lock = ThreadMutex()
    empty = Semaphore(capacity)
    full = Semaphore(0)
    consumed: list[int] = []

    def say(text: str) -> None:
        with print_lock:
            out.write(text)

    def producer(message: str) -> None:
        say(message + "\n")
        for i in range(1, items + 1):
            empty.wait()
            with mx:
                q.push(i)
                say(sprintf("producer produced item %d\n", i))
            full.post()

    def consumer(message: str) -> None:
        say(message + "\n")
        out.write("OKAY\n")
        for _ in range(items):
            full.wait()
            with mx:
                item = q.front()
                q.pop()
                consumed.append(item)
                say(sprintf("consumer consumed item %d\n", item))
            empty.post()

    threads = [
        threading.Thread(target=producer, args=("i am producer",)),
        threading.Thread(target=consumer, args=("i am consumer",)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return consumed


def main(argv: Iterable[str] | None = None) -> int:
    run(10, 5, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())