"""
Post-processing policies run over a finished level.
"""

from .base import PostProcessingPolicy
from .alignment import AlignAdjacentContextsPolicy
from .statistics import LogStatisticsPolicy

__all__ = [
    'PostProcessingPolicy',
    'AlignAdjacentContextsPolicy',
    'LogStatisticsPolicy',
]
