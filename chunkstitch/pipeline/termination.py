"""
Termination conditions for the generation loop.

A termination condition is a predicate over the level, evaluated before
every iteration of the generation loop. The loop stops as soon as it is met.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Tuple

from ..generators.errors import InvalidArgumentError

if TYPE_CHECKING:
    from ..generators.level import Level


class TerminationCondition(ABC):
    """Decides when level generation should stop."""

    @abstractmethod
    def is_met(self, level: 'Level') -> bool:
        """Return True if generation should stop."""
        pass

    def __or__(self, other: 'TerminationCondition') -> 'AnyTerminationCondition':
        return AnyTerminationCondition(self, other)

    def __and__(self, other: 'TerminationCondition') -> 'AllTerminationCondition':
        return AllTerminationCondition(self, other)


class MaximumChunkCountTerminationCondition(TerminationCondition):
    """Finishes generation once a certain number of chunks has been placed."""

    def __init__(self, maximum_chunk_count: int):
        if maximum_chunk_count <= 0:
            raise InvalidArgumentError(
                f"Maximum chunk count must be greater than zero, got {maximum_chunk_count}"
            )
        self.maximum_chunk_count = maximum_chunk_count

    def __repr__(self) -> str:
        return f"MaximumChunkCountTerminationCondition({self.maximum_chunk_count})"

    def is_met(self, level: 'Level') -> bool:
        return len(level) >= self.maximum_chunk_count


class MinimumCoverageTerminationCondition(TerminationCondition):
    """Finishes generation once chunks cover a fraction of the target area/volume."""

    def __init__(self, fraction: float):
        if not 0 < fraction <= 1:
            raise InvalidArgumentError(f"Coverage fraction must be in (0, 1], got {fraction}")
        self.fraction = fraction

    def __repr__(self) -> str:
        return f"MinimumCoverageTerminationCondition({self.fraction})"

    def is_met(self, level: 'Level') -> bool:
        return level.coverage >= self.fraction


class DeadlineTerminationCondition(TerminationCondition):
    """Finishes generation once a clock passes an absolute deadline.

    Args:
        deadline: Clock value at which generation stops
        clock: Zero-argument callable returning the current time
    """

    def __init__(self, deadline: float, clock: Callable[[], float] = time.monotonic):
        self.deadline = deadline
        self.clock = clock

    @classmethod
    def after(cls, seconds: float,
              clock: Callable[[], float] = time.monotonic) -> 'DeadlineTerminationCondition':
        """Create a condition that is met `seconds` from now."""
        if seconds < 0:
            raise InvalidArgumentError(f"Time limit must not be negative, got {seconds}")
        return cls(clock() + seconds, clock)

    def is_met(self, level: 'Level') -> bool:
        return self.clock() >= self.deadline


class PredicateTerminationCondition(TerminationCondition):
    """Wraps any callable taking the level and returning a bool."""

    def __init__(self, predicate: Callable[['Level'], bool]):
        if predicate is None:
            raise InvalidArgumentError("Predicate must not be None")
        self.predicate = predicate

    def is_met(self, level: 'Level') -> bool:
        return bool(self.predicate(level))


class AnyTerminationCondition(TerminationCondition):
    """Met when any of the wrapped conditions is met."""

    def __init__(self, *conditions: TerminationCondition):
        if not conditions:
            raise InvalidArgumentError("At least one termination condition is required")
        self.conditions: Tuple[TerminationCondition, ...] = conditions

    def is_met(self, level: 'Level') -> bool:
        return any(condition.is_met(level) for condition in self.conditions)


class AllTerminationCondition(TerminationCondition):
    """Met when every wrapped condition is met."""

    def __init__(self, *conditions: TerminationCondition):
        if not conditions:
            raise InvalidArgumentError("At least one termination condition is required")
        self.conditions: Tuple[TerminationCondition, ...] = conditions

    def is_met(self, level: 'Level') -> bool:
        return all(condition.is_met(level) for condition in self.conditions)
