# sim/rng.py
from __future__ import annotations

from zlib import crc32

import numpy as np

_MASK = 0xFFFFFFFF


def _word(part: object) -> int:
    """Fold a stream name or id into one 32-bit seed word."""
    if isinstance(part, (int, np.integer)) and not isinstance(part, bool):
        return int(part) & _MASK
    text = part if isinstance(part, str) else repr(part)
    return crc32(text.encode("utf-8")) & _MASK


class RNGRegistry:
    """
    Named numpy Generators for one run.

    A stream is seeded from (master_seed, scenario, worker, name, *parts), so
    the draws for e.g. ("rating", trip_id) are the same no matter how many
    other trips were drawn before it or in which order events fired.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0, worker: int = 0):
        self._root = (int(master_seed) & _MASK, _word(str(scenario)), int(worker) & _MASK)
        self._streams: dict[tuple[int, ...], np.random.Generator] = {}

    def seed_words(self, name: str, *parts: object) -> tuple[int, ...]:
        return (*self._root, _word(name), *(_word(p) for p in parts))

    def stream(self, name: str, *parts: object) -> np.random.Generator:
        words = self.seed_words(name, *parts)
        g = self._streams.get(words)
        if g is None:
            g = np.random.Generator(np.random.PCG64(np.random.SeedSequence(list(words))))
            self._streams[words] = g
        return g
