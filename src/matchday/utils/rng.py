"""Deterministic pseudo-random streams for shuffles and simulation.

A tournament with a ``random_seed`` produces the same fixtures and the same
simulated results every time: the seed and a discriminator label are hashed
into a 32-bit state (xmur3) which seeds a small mulberry32 generator. Without
a seed the standard library generator is used and nothing is reproducible.
"""

# Matchday
# Copyright (C) 2025  Matchday developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from typing import Callable, List, Optional, Sequence, TypeVar

from matchday.type_hints import Rng

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    """32-bit multiplication keeping the low 32 bits."""
    return (a * b) & MASK_32


def xmur3(text: str) -> Callable[[], int]:
    """Order-sensitive string hash returning a stream of 32-bit seeds."""
    h = (1779033703 ^ len(text)) & MASK_32
    for char in text:
        h = _imul(h ^ ord(char), 3432918353)
        h = ((h << 13) | (h >> 19)) & MASK_32

    def next_hash() -> int:
        nonlocal h
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        return h

    return next_hash


def mulberry32(seed: int) -> Rng:
    """Fast 32-bit generator returning floats in [0, 1)."""
    state = seed & MASK_32

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & MASK_32
        x = _imul(state ^ (state >> 15), 1 | state)
        x ^= (x + _imul(x ^ (x >> 7), 61 | x)) & MASK_32
        return ((x ^ (x >> 14)) & MASK_32) / TWO_POW_32

    return next_float


def create_rng(seed: Optional[int], discriminator: str) -> Rng:
    """Create the random stream for one (seed, discriminator) pair.

    Args:
        seed: Tournament random seed, or None for true randomness
        discriminator: Label separating independent streams, e.g. a match id

    Returns:
        Callable returning floats in [0, 1)
    """
    if seed is None:
        return random.random
    return mulberry32(xmur3(f"{seed}:{discriminator}")())


def seeded_shuffle(items: Sequence[T], seed: Optional[int], label: str) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``items`` driven by ``create_rng``."""
    rng = create_rng(seed, label)
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
