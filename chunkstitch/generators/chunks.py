"""
Placed chunks and their contexts.

A Chunk is created exactly when the generator places a template instance.
It owns one Context per context definition of its template, with the same
indices and positions re-expressed relative to the (possibly rotated)
placement. Anchors are consumed during placement and not kept.

Context lifecycle:
- OPEN: not matched yet
- FILLED: joined through a placement or an alignment (never reverts)
- UNFULFILLED: the generator gave up on it; still open in the level,
  but never selected again
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from .errors import ContextAlreadyFilledError, DimensionMismatchError, InvalidArgumentError
from .geometry import AABB, Geometry, Vector

if TYPE_CHECKING:
    from .templates import ChunkTemplate, ContextDefinition


class ContextState(Enum):
    OPEN = "open"
    FILLED = "filled"
    UNFULFILLED = "unfulfilled"


class Context:
    """Attachment socket of a placed chunk."""

    def __init__(self, chunk: 'Chunk', definition: 'ContextDefinition',
                 relative_position: Vector):
        self._chunk = chunk
        self._index = definition.index
        self._tag = definition.tag
        self._relative_position = relative_position
        self._state = ContextState.OPEN
        self._target: Optional[Context] = None
        self._attached_chunk: Optional[Chunk] = None
        self._attached_anchor_index: Optional[int] = None

    def __repr__(self) -> str:
        return f"Context({self._chunk.index}.{self._index} at {self.absolute_position}, {self._state.value})"

    def __str__(self) -> str:
        return str(self.absolute_position)

    @property
    def chunk(self) -> 'Chunk':
        return self._chunk

    @property
    def index(self) -> int:
        return self._index

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def geometry(self) -> Geometry:
        return self._chunk.geometry

    @property
    def relative_position(self) -> Vector:
        """Position relative to the owning chunk's placed origin (rotation applied)."""
        return self._relative_position

    @property
    def absolute_position(self) -> Vector:
        return self.geometry.add(self._chunk.position, self._relative_position)

    @property
    def state(self) -> ContextState:
        return self._state

    @property
    def target(self) -> Optional['Context']:
        """Context this one was joined to, if any."""
        return self._target

    @property
    def attached_chunk(self) -> Optional['Chunk']:
        """Chunk attached through this context (placements only)."""
        return self._attached_chunk

    @property
    def attached_anchor_index(self) -> Optional[int]:
        return self._attached_anchor_index

    @property
    def is_open(self) -> bool:
        return self._state is not ContextState.FILLED

    @property
    def is_filled(self) -> bool:
        return self._state is ContextState.FILLED

    @property
    def is_unfulfilled(self) -> bool:
        return self._state is ContextState.UNFULFILLED

    def _check_comparable(self, other: 'Context') -> None:
        if other is None:
            raise InvalidArgumentError("Context to compare with must not be None")
        if other.geometry is not self.geometry:
            raise DimensionMismatchError(
                f"Cannot compare a {self.geometry.name} context with a {other.geometry.name} context"
            )

    def distance_to(self, other: 'Context') -> float:
        self._check_comparable(other)
        return self.geometry.distance(self.absolute_position, other.absolute_position)

    def is_adjacent_to(self, other: 'Context', offset: float) -> bool:
        """Check if other is within offset of this context (Euclidean norm)."""
        return self.distance_to(other) <= offset

    # -- state transitions --

    def _fill(self) -> None:
        if self._state is ContextState.FILLED:
            raise ContextAlreadyFilledError(f"Context {self!r} is already filled")
        self._state = ContextState.FILLED

    def join(self, other: 'Context') -> None:
        """Fill this context and other, cross-referencing each other."""
        self._check_comparable(other)
        if other is self:
            raise InvalidArgumentError("A context cannot be joined to itself")
        if not self.is_open or not other.is_open:
            raise ContextAlreadyFilledError(
                f"Cannot join {self!r} and {other!r}: both must be open"
            )
        self._fill()
        other._fill()
        self._target = other
        other._target = self

    def attach(self, chunk: 'Chunk', anchor_index: int,
               counterpart: Optional['Context'] = None) -> None:
        """Fill this context with a chunk placed through one of its anchors.

        Args:
            chunk: The newly placed chunk
            anchor_index: Index of the anchor that was matched
            counterpart: The new chunk's context sharing the anchor's role, if any
        """
        if counterpart is not None:
            self.join(counterpart)
        else:
            self._fill()
        self._attached_chunk = chunk
        self._attached_anchor_index = anchor_index

    def mark_unfulfilled(self) -> None:
        """Give up on this context. It stays open but is never selected again."""
        if self._state is ContextState.FILLED:
            raise ContextAlreadyFilledError(f"Context {self!r} is filled and cannot be given up")
        self._state = ContextState.UNFULFILLED

    def align_to(self, other: 'Context') -> None:
        """Move this context onto other's absolute position.

        Only the stored relative position changes; the owning chunk stays put.
        """
        self._check_comparable(other)
        self._relative_position = self.geometry.subtract(
            other.absolute_position, self._chunk.position
        )


class Chunk:
    """A template instance placed at an absolute position and rotation."""

    def __init__(self, template: 'ChunkTemplate', position: Vector, rotation: int = 0,
                 index: int = -1):
        geometry = template.geometry
        self._template = template
        self._position = geometry.vector(position, "position")
        self._rotation = geometry.check_rotation(rotation)
        self._extents = geometry.rotated_extents(template.extents, rotation)
        self._bounds = geometry.bounds(self._position, self._extents)
        self._index = index
        self._contexts: List[Context] = [
            Context(
                self,
                definition,
                geometry.rotate_point(definition.relative_position, template.extents, rotation),
            )
            for definition in template.contexts
        ]

    def __repr__(self) -> str:
        return (f"Chunk({self._index}, {self._template.name}, position={self._position}, "
                f"rotation={self._rotation})")

    @property
    def template(self) -> 'ChunkTemplate':
        return self._template

    @property
    def geometry(self) -> Geometry:
        return self._template.geometry

    @property
    def tag(self) -> str:
        return self._template.tag

    @property
    def index(self) -> int:
        """Placement order within the owning level (-1 until added)."""
        return self._index

    @property
    def position(self) -> Vector:
        return self._position

    @property
    def rotation(self) -> int:
        return self._rotation

    @property
    def extents(self) -> Vector:
        """Extents after rotation."""
        return self._extents

    @property
    def bounds(self) -> AABB:
        return self._bounds

    @property
    def contexts(self) -> Tuple[Context, ...]:
        return tuple(self._contexts)

    def get_context(self, index: int) -> Context:
        return self._contexts[index]

    def open_contexts(self) -> List[Context]:
        return [context for context in self._contexts if context.is_open]

    def _set_index(self, index: int) -> None:
        self._index = index
