"""
Chunk library: registry of the templates a level is assembled from.

Selection is weighted: a value r is drawn uniformly in [0, total_weight)
and the ordered template list is walked, accumulating weight, until the
cumulative weight exceeds r. Each template is therefore picked with a
probability proportional to its weight, ties broken by insertion order.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Protocol, Sequence

from .errors import DimensionMismatchError, InvalidArgumentError, NoMatchingTemplateError
from .geometry import Geometry
from .templates import ChunkTemplate

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Random number source injected into every generation call.

    random.Random satisfies this protocol.
    """

    def random(self) -> float:
        """Return a float drawn uniformly from [0, 1)."""
        ...


def weighted_choice(rng: RandomSource, templates: Sequence[ChunkTemplate]) -> ChunkTemplate:
    """Pick a template with probability proportional to its weight."""
    total = sum(template.weight for template in templates)
    if total <= 0:
        raise NoMatchingTemplateError("Total template weight must be greater than zero")

    r = rng.random() * total
    cumulative = 0
    for template in templates:
        cumulative += template.weight
        if cumulative > r:
            return template
    # Only reachable through float rounding at the top of the range
    return templates[-1]


class ChunkLibrary:
    """Ordered collection of chunk templates with weighted random selection."""

    def __init__(self, templates: Optional[Sequence[ChunkTemplate]] = None):
        self._templates: List[ChunkTemplate] = []
        for template in templates or ():
            self.add_template(template)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[ChunkTemplate]:
        return iter(self._templates)

    @property
    def templates(self) -> List[ChunkTemplate]:
        return list(self._templates)

    @property
    def total_weight(self) -> int:
        return sum(template.weight for template in self._templates)

    @property
    def geometry(self) -> Optional[Geometry]:
        """Dimensionality shared by all templates, or None if the library is empty."""
        return self._templates[0].geometry if self._templates else None

    def add_template(self, template: ChunkTemplate) -> None:
        """Append a template to the library.

        Raises:
            InvalidArgumentError: If the template is None, has a non-positive
                weight or extent, or differs in dimensionality from the
                templates already in the library
        """
        if template is None:
            raise InvalidArgumentError("Template must not be None")
        if template.weight <= 0:
            raise InvalidArgumentError(f"Template weight must be greater than zero, got {template.weight}")
        if any(extent <= 0 for extent in template.extents):
            raise InvalidArgumentError(f"Template extents must be greater than zero, got {template.extents}")
        if self._templates and template.geometry is not self.geometry:
            raise DimensionMismatchError(
                f"Cannot add a {template.geometry.name} template to a {self.geometry.name} library"
            )

        self._templates.append(template)
        logger.debug("Registered template %s (weight %d)", template.name, template.weight)

    def get_templates_by_tag(self, tag: str) -> List[ChunkTemplate]:
        return [template for template in self._templates if template.tag == tag]

    def freeze(self) -> None:
        """Freeze every template. Called when a generation run begins."""
        for template in self._templates:
            template.freeze()

    def select_random(self, rng: RandomSource, tag: Optional[str] = None) -> ChunkTemplate:
        """Draw a template, optionally restricted to templates with the given tag.

        Raises:
            NoMatchingTemplateError: If no template (with the tag) exists
        """
        if rng is None:
            raise InvalidArgumentError("Random source must not be None")
        if tag is None:
            candidates = self._templates
        else:
            candidates = self.get_templates_by_tag(tag)
        if not candidates:
            if tag is None:
                raise NoMatchingTemplateError("Chunk library is empty")
            raise NoMatchingTemplateError(f"No template with tag {tag!r}")
        return weighted_choice(rng, candidates)

    def select_random_where(self, rng: RandomSource,
                            predicate: Callable[[ChunkTemplate], bool]) -> ChunkTemplate:
        """Draw a template among those accepted by predicate.

        Raises:
            NoMatchingTemplateError: If predicate rejects every template
        """
        if rng is None:
            raise InvalidArgumentError("Random source must not be None")
        candidates = [template for template in self._templates if predicate(template)]
        if not candidates:
            raise NoMatchingTemplateError("No template satisfies the selection filter")
        return weighted_choice(rng, candidates)
