"""The Park-Miller random generator used by the stress tester."""

from __future__ import annotations

from typing import Iterator

_U64 = (1 << 64) - 1
RAND_MAX = 0x7FFFFFFD


def do_rand(ctx: int) -> int:
    """Advance the generator state ctx and return the new state.

    Computes (7**5 * x) mod (2**31 - 1) without overflow, with x taken in
    [1, 0x7ffffffe] and the result in [0, 0x7ffffffd].
    """
    x = ((ctx & _U64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += 0x7FFFFFFF
    return x - 1


class ParkMillerRandom:
    """A stateful Park-Miller generator."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed & _U64

    def rand(self) -> int:
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.rand()