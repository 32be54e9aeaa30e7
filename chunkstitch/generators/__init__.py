"""
Chunk stitching data model and level generator.

This module provides the templates, library, placed chunks, level and the
generator that stitches chunks together at open contexts.
"""

from .errors import (
    ChunkStitchError,
    InvalidArgumentError,
    DimensionMismatchError,
    TemplateFrozenError,
    ContextAlreadyFilledError,
    NoMatchingTemplateError,
    GenerationCancelledException,
)
from .geometry import (
    AABB,
    EPSILON,
    ROTATIONS,
    Geometry,
    GEOMETRY_2D,
    GEOMETRY_3D,
    geometry_for,
)
from .templates import (
    Anchor,
    ContextDefinition,
    ChunkTemplate,
    DEFAULT_WEIGHT,
    tags_compatible,
)
from .chunks import Chunk, Context, ContextState
from .spatial_index import SpatialHashIndex
from .level import Level
from .library import ChunkLibrary, RandomSource, weighted_choice
from .level_generator import LevelGenerator, Placement

__all__ = [
    # Errors
    'ChunkStitchError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'TemplateFrozenError',
    'ContextAlreadyFilledError',
    'NoMatchingTemplateError',
    'GenerationCancelledException',
    # Geometry
    'AABB',
    'EPSILON',
    'ROTATIONS',
    'Geometry',
    'GEOMETRY_2D',
    'GEOMETRY_3D',
    'geometry_for',
    # Templates and library
    'Anchor',
    'ContextDefinition',
    'ChunkTemplate',
    'DEFAULT_WEIGHT',
    'tags_compatible',
    'ChunkLibrary',
    'RandomSource',
    'weighted_choice',
    # Placed level
    'Chunk',
    'Context',
    'ContextState',
    'SpatialHashIndex',
    'Level',
    # Generator
    'LevelGenerator',
    'Placement',
]
