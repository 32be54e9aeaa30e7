"""
Level generation pipeline.

Provides the generator configuration, termination conditions, context
selection strategies, alignment restrictions and post-processing policies.
"""

from .termination import (
    TerminationCondition,
    MaximumChunkCountTerminationCondition,
    MinimumCoverageTerminationCondition,
    DeadlineTerminationCondition,
    PredicateTerminationCondition,
    AnyTerminationCondition,
    AllTerminationCondition,
)
from .restrictions import (
    ContextAlignmentRestriction,
    DifferentChunkTagsRestriction,
    DifferentChunksRestriction,
    CompatibleContextTagsRestriction,
    PredicateAlignmentRestriction,
)
from .selection import (
    ContextSelectionStrategy,
    FirstOpenContextStrategy,
    RandomOpenContextStrategy,
)
from .configuration import (
    DEFAULT_MAX_CANDIDATE_ATTEMPTS,
    LevelGeneratorConfiguration,
    GenerationProgress,
    GenerationStatistics,
)
from .passes import (
    PostProcessingPolicy,
    AlignAdjacentContextsPolicy,
    LogStatisticsPolicy,
)

__all__ = [
    # Termination
    'TerminationCondition',
    'MaximumChunkCountTerminationCondition',
    'MinimumCoverageTerminationCondition',
    'DeadlineTerminationCondition',
    'PredicateTerminationCondition',
    'AnyTerminationCondition',
    'AllTerminationCondition',
    # Restrictions
    'ContextAlignmentRestriction',
    'DifferentChunkTagsRestriction',
    'DifferentChunksRestriction',
    'CompatibleContextTagsRestriction',
    'PredicateAlignmentRestriction',
    # Context selection
    'ContextSelectionStrategy',
    'FirstOpenContextStrategy',
    'RandomOpenContextStrategy',
    # Configuration
    'DEFAULT_MAX_CANDIDATE_ATTEMPTS',
    'LevelGeneratorConfiguration',
    'GenerationProgress',
    'GenerationStatistics',
    # Post-processing
    'PostProcessingPolicy',
    'AlignAdjacentContextsPolicy',
    'LogStatisticsPolicy',
]
