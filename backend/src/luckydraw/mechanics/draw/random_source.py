"""Injectable randomness for winner selection.

Fairness in front of a live audience is the only requirement, so the default
source is the standard pseudo-random generator rather than a CSPRNG.
"""

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Anything that can pick an index uniformly from ``[0, upper)``."""

    def pick_index(self, upper: int) -> int:
        ...


class PseudoRandomSource:
    """RandomSource backed by :class:`random.Random`."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def pick_index(self, upper: int) -> int:
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        return self._rng.randrange(upper)
