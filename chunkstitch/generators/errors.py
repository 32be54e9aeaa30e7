"""
Exceptions raised by the chunk stitching engine.

Validation failures are raised immediately by the call that triggered them.
Placement failures during generation are never raised: an open context that
cannot be satisfied is marked unfulfilled and generation carries on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .level import Level


class ChunkStitchError(Exception):
    pass


class InvalidArgumentError(ChunkStitchError, ValueError):
    """Raised for non-positive extents or weights, missing tags and similar."""
    pass


class DimensionMismatchError(InvalidArgumentError):
    """Raised when 2D and 3D values are mixed in one operation."""
    pass


class TemplateFrozenError(ChunkStitchError):
    """Raised when a template is modified after a generation run picked it up."""
    pass


class ContextAlreadyFilledError(ChunkStitchError):
    pass


class NoMatchingTemplateError(ChunkStitchError):
    """Raised when a weighted draw has no template to choose from."""
    pass


class GenerationCancelledException(ChunkStitchError):
    """Raised when a running generation is cancelled.

    Attributes:
        level: The partially generated level at the time of cancellation
    """

    def __init__(self, message: str, level: Optional['Level'] = None):
        super().__init__(message)
        self.level = level
