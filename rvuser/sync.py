"""User-level synchronisation: a small ring queue, mutexes, condition variables and semaphores."""

from __future__ import annotations

import threading
import time

QUEUE_CAPACITY = 16


class Queue:
    """A fixed-size ring of integers.

    ``front`` of an empty queue is -1 and ``pop`` of an empty queue does
    nothing. Pushing onto a full ring overwrites the oldest slot.
    """

    def __init__(self) -> None:
        self._slots = [0] * QUEUE_CAPACITY
        self._front = 0
        self._rear = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def push(self, x: int) -> None:
        self._slots[self._rear] = x
        self._rear = (self._rear + 1) % QUEUE_CAPACITY
        self._size += 1

    def front(self) -> int:
        if self._size == 0:
            return -1
        return self._slots[self._front]

    def pop(self) -> None:
        if self._size:
            self._front = (self._front + 1) % QUEUE_CAPACITY
            self._size -= 1


class _OwnedFlag:
    """A test-and-set flag that remembers which thread holds it."""

    def __init__(self) -> None:
        self._flag = threading.Lock()
        self.owner: int | None = None

    @property
    def locked(self) -> bool:
        return self._flag.locked()

    def _is_held_by_caller(self) -> bool:
        return self._flag.locked() and self.owner == threading.get_ident()

    def _claim(self, name: str, blocking: bool) -> None:
        if self._is_held_by_caller():
            raise RuntimeError(f"panic: {name} acquire")
        if blocking:
            self._flag.acquire()
        else:
            while not self._flag.acquire(blocking=False):
                time.sleep(0)
        self.owner = threading.get_ident()

    def _give_up(self, name: str) -> None:
        if not self._is_held_by_caller():
            raise RuntimeError(f"panic: {name} release")
        self._release()

    def _release(self) -> None:
        self.owner = None
        self._flag.release()

    def __enter__(self):
        self.lock()
        return self

    def __exit__(self, *exc) -> None:
        self.unlock()


class ThreadMutex(_OwnedFlag):
    """A mutex whose waiters sleep until it is free."""

    def holding(self) -> bool:
        """Return whether the calling thread holds the mutex."""
        return self._is_held_by_caller()

    def lock(self) -> None:
        """Acquire the mutex; acquiring it twice from one thread is an error."""
        self._claim("mutex", blocking=True)

    def unlock(self) -> None:
        """Release the mutex; it must be held by the calling thread."""
        self._give_up("mutex")


class ThreadSpinlock(_OwnedFlag):
    """A lock whose waiters spin until it is free."""

    def holding(self) -> bool:
        """Return whether the calling thread holds the lock."""
        return self._is_held_by_caller()

    def lock(self) -> None:
        """Acquire the lock, spinning; acquiring it twice from one thread is an error."""
        self._claim("thread_spinlock", blocking=False)

    def unlock(self) -> None:
        """Release the lock; it must be held by the calling thread."""
        self._give_up("thread_spinlock")


class CondVar:
    """A condition variable keeping its sleepers in FIFO order."""

    def __init__(self) -> None:
        self._queue = Queue()
        self._mx = ThreadMutex()
        self._events: dict[int, threading.Event] = {}

    @property
    def waiters(self) -> int:
        """Number of threads queued on this condition."""
        with self._mx:
            return len(self._queue)

    def wait(self, mutex: ThreadMutex) -> None:
        """Release ``mutex``, sleep until signalled, then reacquire ``mutex``."""
        me = threading.get_ident()
        event = threading.Event()
        with self._mx:
            self._queue.push(me)
            self._events[me] = event
        mutex._release()
        event.wait()
        mutex.lock()

    def signal(self) -> None:
        """Wake the longest-waiting thread, if there is one."""
        with self._mx:
            thr_id = self._queue.front()
            self._queue.pop()
            event = self._events.pop(thr_id, None) if thr_id > 0 else None
        if event is not None:
            event.set()


class Semaphore:
    """A counting semaphore built from a mutex and a condition variable."""

    def __init__(self, value: int = 0) -> None:
        self.count = value
        self._m = ThreadMutex()
        self._cv = CondVar()

    def wait(self) -> None:
        """Decrement the count, sleeping while it is not positive."""
        with self._m:
            while self.count <= 0:
                self._cv.wait(self._m)
            self.count -= 1

    def post(self) -> None:
        """Increment the count, waking one sleeper when it becomes 1."""
        with self._m:
            self.count += 1
            if self.count == 1:
                self._cv.signal()