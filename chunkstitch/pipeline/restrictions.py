"""
Context alignment restrictions.

Alignment-style post-processing policies consult every registered
restriction before joining two contexts. Any restriction can veto an
alignment that is otherwise geometrically valid.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from ..generators.errors import InvalidArgumentError
from ..generators.templates import tags_compatible

if TYPE_CHECKING:
    from ..generators.chunks import Context
    from ..generators.level import Level


class ContextAlignmentRestriction(ABC):
    """Veto predicate for aligning two contexts."""

    @abstractmethod
    def can_align(self, a: 'Context', b: 'Context', level: 'Level') -> bool:
        """Return True if a and b may be aligned."""
        pass


class DifferentChunkTagsRestriction(ContextAlignmentRestriction):
    """Forbids aligning contexts whose owning chunks share a tag.

    Chunks without a tag never share one.
    """

    def can_align(self, a: 'Context', b: 'Context', level: 'Level') -> bool:
        return not a.chunk.tag or a.chunk.tag != b.chunk.tag


class DifferentChunksRestriction(ContextAlignmentRestriction):
    """Forbids aligning two contexts of the same chunk."""

    def can_align(self, a: 'Context', b: 'Context', level: 'Level') -> bool:
        return a.chunk is not b.chunk


class CompatibleContextTagsRestriction(ContextAlignmentRestriction):
    """Forbids aligning contexts with incompatible tags."""

    def can_align(self, a: 'Context', b: 'Context', level: 'Level') -> bool:
        return tags_compatible(a.tag, b.tag)


class PredicateAlignmentRestriction(ContextAlignmentRestriction):
    """Wraps any callable taking (a, b, level) and returning a bool."""

    def __init__(self, predicate: Callable[['Context', 'Context', 'Level'], bool]):
        if predicate is None:
            raise InvalidArgumentError("Predicate must not be None")
        self.predicate = predicate

    def can_align(self, a: 'Context', b: 'Context', level: 'Level') -> bool:
        return bool(self.predicate(a, b, level))
