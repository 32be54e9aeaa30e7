"""
Chunk templates: the immutable blueprints chunks are instantiated from.

Defines:
- Anchor: socket on a not-yet-placed chunk, matched against open contexts
- ContextDefinition: socket definition copied into every placed chunk
- ChunkTemplate: extents, weight, tag, rotation permission, anchors, contexts

The template is the only writer of anchor and context indices. Indices are
assigned on insertion (0-based, insertion order) and never change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidArgumentError, TemplateFrozenError
from .geometry import EPSILON, ROTATIONS, Geometry, Vector, geometry_for


# Relative weight of templates constructed without an explicit weight
DEFAULT_WEIGHT = 100


def tags_compatible(a: str, b: str) -> bool:
    """Check if two tags may interact. An empty tag matches any tag."""
    return not a or not b or a == b


def _check_tag(tag: str, name: str = "tag") -> str:
    if tag is None:
        raise InvalidArgumentError(f"{name} must not be None")
    if not isinstance(tag, str):
        raise InvalidArgumentError(f"{name} must be a string, got {type(tag).__name__}")
    return tag


@dataclass(frozen=True)
class Anchor:
    """Attachment socket of a chunk that has not been placed yet."""
    index: int                      # Template-wide unique index
    relative_position: Vector       # Offset from the unrotated chunk origin
    tag: str = ""                   # Category ("" matches any context)

    def is_compatible_with(self, tag: str) -> bool:
        return tags_compatible(self.tag, tag)


@dataclass(frozen=True)
class ContextDefinition:
    """Attachment socket definition; every placed chunk gets a Context per definition."""
    index: int                      # Template-wide unique index
    relative_position: Vector       # Offset from the unrotated chunk origin
    tag: str = ""


class ChunkTemplate:
    """Blueprint for similar chunks.

    Chunk templates define the chunk extents, the positions of all anchors
    and contexts, and the attributes used by the generator such as the
    relative probability of the template being picked next.

    Args:
        extents: Per-axis chunk size (2 or 3 components, all > 0)
        weight: Relative selection weight (integer > 0)
        tag: Category of the template
        allow_rotation: Whether the generator may rotate chunks by quarter turns
        name: Optional display name used in logs

    Raises:
        InvalidArgumentError: On non-positive extents or weight, or a None tag
    """

    def __init__(self, extents: Sequence[float], weight: int = DEFAULT_WEIGHT,
                 tag: str = "", allow_rotation: bool = False,
                 name: Optional[str] = None):
        self._geometry = geometry_for(extents)
        self._extents = self._geometry.positive_extents(extents)
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidArgumentError(f"Weight must be an integer, got {weight!r}")
        if weight <= 0:
            raise InvalidArgumentError(f"Weight must be greater than zero, got {weight}")
        self._weight = weight
        self._tag = _check_tag(tag)
        self._allow_rotation = bool(allow_rotation)
        self._name = name
        self._anchors: List[Anchor] = []
        self._contexts: List[ContextDefinition] = []
        self._frozen = False

    def __repr__(self) -> str:
        return (f"ChunkTemplate({self.name!r}, extents={self._extents}, "
                f"weight={self._weight}, tag={self._tag!r})")

    # -- properties --

    @property
    def name(self) -> str:
        if self._name:
            return self._name
        size = "x".join(f"{e:g}" for e in self._extents)
        return f"{self._tag or 'chunk'}[{size}]"

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @property
    def extents(self) -> Vector:
        return self._extents

    @property
    def weight(self) -> int:
        return self._weight

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def allow_rotation(self) -> bool:
        return self._allow_rotation

    @property
    def anchors(self) -> Tuple[Anchor, ...]:
        return tuple(self._anchors)

    @property
    def contexts(self) -> Tuple[ContextDefinition, ...]:
        return tuple(self._contexts)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # -- authoring --

    def freeze(self) -> None:
        """Mark the template immutable. Called when a generation run begins."""
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            raise TemplateFrozenError(
                f"Template {self.name} is in use by a generation run and cannot be modified"
            )

    def add_anchor(self, relative_position: Sequence[float], tag: str = "") -> Anchor:
        """Add an anchor at a position relative to the chunk origin.

        Returns:
            The new anchor with its template-wide index
        """
        self._check_not_frozen()
        anchor = Anchor(
            index=len(self._anchors),
            relative_position=self._geometry.vector(relative_position, "relative_position"),
            tag=_check_tag(tag),
        )
        self._anchors.append(anchor)
        return anchor

    def add_context(self, relative_position: Sequence[float], tag: str = "") -> ContextDefinition:
        """Add a context at a position relative to the chunk origin.

        Returns:
            The new context definition with its template-wide index
        """
        self._check_not_frozen()
        context = ContextDefinition(
            index=len(self._contexts),
            relative_position=self._geometry.vector(relative_position, "relative_position"),
            tag=_check_tag(tag),
        )
        self._contexts.append(context)
        return context

    # -- queries --

    def has_anchor_compatible_with(self, tag: str) -> bool:
        return any(anchor.is_compatible_with(tag) for anchor in self._anchors)

    def compatible_anchors(self, tag: str) -> List[Anchor]:
        """Get anchors whose tag is compatible with an open context's tag, in index order."""
        return [anchor for anchor in self._anchors if anchor.is_compatible_with(tag)]

    def context_for_anchor(self, anchor: Anchor, tag: str = "") -> Optional[ContextDefinition]:
        """Find the context that plays the same role as an anchor.

        That is the first context at the anchor's position whose tag is
        compatible with both the anchor's tag and `tag`, the tag of the open
        context the anchor is attached to. Returns None if the template has none.
        """
        for context in self._contexts:
            if not (tags_compatible(context.tag, anchor.tag) and tags_compatible(context.tag, tag)):
                continue
            if self._geometry.distance(context.relative_position, anchor.relative_position) <= EPSILON:
                return context
        return None

    def rotations(self) -> Tuple[int, ...]:
        """Rotations the generator may try for this template, in order."""
        return ROTATIONS if self._allow_rotation else (0,)
