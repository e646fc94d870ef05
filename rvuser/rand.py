"""Park-Miller minimal standard pseudo-random numbers."""

from __future__ import annotations

from dataclasses import dataclass

_MASK64 = (1 << 64) - 1


def do_rand(ctx: int) -> int:
    """Advance the generator state ``ctx`` and return the new state.

    The new state is also the random value, in ``[0, 0x7ffffffd]``.
    """
    x = ((ctx & _MASK64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += 0x7FFFFFFF
    return x - 1


@dataclass
class Random:
    """A generator holding its own state."""

    state: int = 1

    def rand(self) -> int:
        """Return the next random value."""
        self.state = do_rand(self.state)
        return self.state