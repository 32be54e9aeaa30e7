"""
Strategies choosing which pending context the generator works on next.

Order matters for reproducibility: with a fixed random source, the same
strategy always visits contexts in the same order.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..generators.chunks import Context
    from ..generators.level import Level
    from ..generators.library import RandomSource


class ContextSelectionStrategy(ABC):

    @abstractmethod
    def select(self, pending: Sequence['Context'], level: 'Level',
               rng: 'RandomSource') -> 'Context':
        """Pick one context out of a non-empty pending list."""
        pass


class FirstOpenContextStrategy(ContextSelectionStrategy):
    """Insertion order: the first pending context of the earliest chunk."""

    def select(self, pending, level, rng):
        return pending[0]


class RandomOpenContextStrategy(ContextSelectionStrategy):
    """Uniformly random pending context, drawn from the injected random source."""

    def select(self, pending, level, rng):
        index = min(math.floor(rng.random() * len(pending)), len(pending) - 1)
        return pending[index]
