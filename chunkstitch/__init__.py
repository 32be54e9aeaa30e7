"""
chunkstitch - procedural level generation by stitching chunks.

Chunks (rectangular 2D areas or box-shaped 3D volumes) are instantiated
from weighted templates and attached to each other at anchor/context
sockets until a termination condition is met.
"""

from .generators import (
    AABB,
    Anchor,
    Chunk,
    ChunkLibrary,
    ChunkStitchError,
    ChunkTemplate,
    Context,
    ContextAlreadyFilledError,
    ContextState,
    DimensionMismatchError,
    GenerationCancelledException,
    InvalidArgumentError,
    Level,
    LevelGenerator,
    NoMatchingTemplateError,
    TemplateFrozenError,
)
from .pipeline import (
    AlignAdjacentContextsPolicy,
    ContextAlignmentRestriction,
    LevelGeneratorConfiguration,
    MaximumChunkCountTerminationCondition,
    PostProcessingPolicy,
    TerminationCondition,
)
from .validation import ValidationError, ValidationResult, validate_level

__version__ = '1.0.0'

__all__ = [
    'AABB',
    'Anchor',
    'Chunk',
    'ChunkLibrary',
    'ChunkStitchError',
    'ChunkTemplate',
    'Context',
    'ContextAlreadyFilledError',
    'ContextState',
    'DimensionMismatchError',
    'GenerationCancelledException',
    'InvalidArgumentError',
    'Level',
    'LevelGenerator',
    'NoMatchingTemplateError',
    'TemplateFrozenError',
    'AlignAdjacentContextsPolicy',
    'ContextAlignmentRestriction',
    'LevelGeneratorConfiguration',
    'MaximumChunkCountTerminationCondition',
    'PostProcessingPolicy',
    'TerminationCondition',
    'ValidationError',
    'ValidationResult',
    'validate_level',
]
