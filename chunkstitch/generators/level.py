"""
Level: the growing set of placed chunks.

The level owns its chunks in placement order and derives open contexts on
demand. It only grows: chunks are added, never removed. Two invariants are
checked when a chunk is added and never re-validated lazily:
- no two chunks' bounding boxes overlap (touching faces are fine)
- every chunk lies inside the level's target extents
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .chunks import Chunk, Context
from .errors import InvalidArgumentError
from .geometry import AABB, Geometry, Vector, geometry_for
from .spatial_index import SpatialHashIndex

logger = logging.getLogger(__name__)


class Level:
    """A 2D or 3D level with fixed target extents.

    Args:
        target_extents: Size of the level (2 or 3 components, all > 0)
        use_spatial_index: Route overlap queries through a SpatialHashIndex
    """

    def __init__(self, target_extents: Sequence[float], use_spatial_index: bool = True):
        self._geometry = geometry_for(target_extents)
        self._extents = self._geometry.positive_extents(target_extents, "target_extents")
        self._bounds = self._geometry.bounds(self._geometry.zero(), self._extents)
        self._chunks: List[Chunk] = []
        self._index: Optional[SpatialHashIndex] = SpatialHashIndex() if use_spatial_index else None
        self.seed: Optional[int] = None

    def __repr__(self) -> str:
        return f"Level({self._geometry.name}, extents={self._extents}, chunks={len(self._chunks)})"

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)

    # -- properties --

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @property
    def target_extents(self) -> Vector:
        return self._extents

    @property
    def bounds(self) -> AABB:
        return self._bounds

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        """Placed chunks in placement order."""
        return tuple(self._chunks)

    @property
    def covered_volume(self) -> float:
        """Sum of chunk areas (2D) or volumes (3D)."""
        return sum(chunk.bounds.volume for chunk in self._chunks)

    @property
    def coverage(self) -> float:
        """Fraction of the target area/volume covered by chunks."""
        return self.covered_volume / self._bounds.volume

    # -- spatial queries --

    def fits(self, bounds: AABB) -> bool:
        """Check if bounds lie inside the target extents."""
        return self._bounds.contains(bounds)

    def overlaps(self, bounds: AABB) -> bool:
        """Check if bounds overlap any placed chunk."""
        if self._index is not None:
            return bool(self._index.query(bounds))
        return any(chunk.bounds.intersects(bounds) for chunk in self._chunks)

    def can_place(self, bounds: AABB) -> bool:
        return self.fits(bounds) and not self.overlaps(bounds)

    def add_chunk(self, chunk: Chunk) -> None:
        """Add a chunk, checking the level invariants.

        Raises:
            InvalidArgumentError: If the chunk has another dimensionality, lies
                outside the target extents, or overlaps a placed chunk
        """
        if chunk is None:
            raise InvalidArgumentError("Chunk must not be None")
        self._geometry.require_same(chunk.geometry)
        if not self.fits(chunk.bounds):
            raise InvalidArgumentError(
                f"{chunk!r} exceeds the level extents {self._extents}"
            )
        if self.overlaps(chunk.bounds):
            raise InvalidArgumentError(f"{chunk!r} overlaps a placed chunk")

        chunk._set_index(len(self._chunks))
        self._chunks.append(chunk)
        if self._index is not None:
            self._index.add(chunk)
        logger.debug("Added %r", chunk)

    # -- context queries --

    def find_open_contexts(self) -> List[Context]:
        """Open contexts across all chunks, in placement order then context index."""
        return [
            context
            for chunk in self._chunks
            for context in chunk.contexts
            if context.is_open
        ]

    def find_pending_contexts(self) -> List[Context]:
        """Open contexts the generator has not given up on yet."""
        return [context for context in self.find_open_contexts() if not context.is_unfulfilled]

    def find_unfulfilled_contexts(self) -> List[Context]:
        return [context for context in self.find_open_contexts() if context.is_unfulfilled]

    def find_filled_contexts(self) -> List[Context]:
        return [
            context
            for chunk in self._chunks
            for context in chunk.contexts
            if context.is_filled
        ]
