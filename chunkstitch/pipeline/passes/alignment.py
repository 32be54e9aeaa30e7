"""
Context alignment policy.

Open contexts that ended up close to each other (for example two doors of
neighbouring chunks that were placed independently) are snapped together
and joined, so the level treats them as connected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...generators.errors import InvalidArgumentError
from .base import PostProcessingPolicy

if TYPE_CHECKING:
    from ...generators.chunks import Context
    from ...generators.level import Level
    from ..configuration import LevelGeneratorConfiguration


class AlignAdjacentContextsPolicy(PostProcessingPolicy):
    """
    Aligns open contexts that lie within an offset of each other.

    Pairs are visited in open-context order (i < j). A pair is aligned when:
    1. Both contexts are still open (each context aligns at most once per pass)
    2. Their Euclidean distance is at most `offset`
    3. Every alignment restriction of the configuration allows it

    The second context is moved onto the first by adjusting its relative
    position; both are then filled and cross-referenced.
    """

    def __init__(self, offset: float):
        super().__init__()
        if offset is None or offset < 0:
            raise InvalidArgumentError(f"Offset must not be negative, got {offset}")
        self.offset = offset

    @property
    def name(self) -> str:
        return "AlignAdjacentContexts"

    @property
    def description(self) -> str:
        return f"Snap open contexts within {self.offset} units of each other"

    def _allowed(self, configuration: 'LevelGeneratorConfiguration',
                 first: 'Context', second: 'Context', level: 'Level') -> bool:
        return all(
            restriction.can_align(first, second, level)
            for restriction in configuration.context_alignment_restrictions
        )

    def execute(self, configuration: 'LevelGeneratorConfiguration', level: 'Level') -> None:
        open_contexts = level.find_open_contexts()

        for i, first in enumerate(open_contexts[:-1]):
            if not first.is_open:
                continue

            for second in open_contexts[i + 1:]:
                if not second.is_open:
                    continue
                if not first.is_adjacent_to(second, self.offset):
                    continue
                if not self._allowed(configuration, first, second, level):
                    continue

                distance = first.distance_to(second)
                second.align_to(first)
                first.join(second)
                self.log_message(
                    f"+ Aligned adjacent contexts at {first} "
                    f"(moved {distance:.3f} with an offset of {self.offset})."
                )
                break
