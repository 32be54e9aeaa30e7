"""
Level generator configuration and run reporting.

Defines:
- LevelGeneratorConfiguration: everything a generation run is driven by
- GenerationProgress: snapshot passed to progress callbacks
- GenerationStatistics: counters collected over one run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from ..generators.errors import InvalidArgumentError
from .restrictions import ContextAlignmentRestriction
from .selection import ContextSelectionStrategy, FirstOpenContextStrategy
from .termination import TerminationCondition

if TYPE_CHECKING:
    from .passes.base import PostProcessingPolicy


# Template draws per open context before it is given up on
DEFAULT_MAX_CANDIDATE_ATTEMPTS = 10


@dataclass
class LevelGeneratorConfiguration:
    """
    Configuration for a level generation run.

    Attributes:
        termination_condition: Stops the loop when met (None: run until no
            pending context remains)
        context_alignment_restrictions: Vetoes consulted by alignment policies
        post_processing_policies: Passes run in order over the finished level
        max_candidate_attempts: Template draws per open context
        filter_templates_by_anchor_tag: Only draw templates exposing an anchor
            compatible with the open context's tag
        context_selection: Picks the next pending context
        start_position: Position of the first chunk (None: random, in bounds)
        max_iterations: Hard cap on loop iterations (None: unbounded)
    """
    termination_condition: Optional[TerminationCondition] = None
    context_alignment_restrictions: List[ContextAlignmentRestriction] = field(default_factory=list)
    post_processing_policies: List['PostProcessingPolicy'] = field(default_factory=list)
    max_candidate_attempts: int = DEFAULT_MAX_CANDIDATE_ATTEMPTS
    filter_templates_by_anchor_tag: bool = True
    context_selection: ContextSelectionStrategy = field(default_factory=FirstOpenContextStrategy)
    start_position: Optional[Sequence[float]] = None
    max_iterations: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        errors = []
        if self.max_candidate_attempts <= 0:
            errors.append("max_candidate_attempts must be greater than zero")
        if self.max_iterations is not None and self.max_iterations <= 0:
            errors.append("max_iterations must be greater than zero")
        if self.context_selection is None:
            errors.append("context_selection must not be None")
        if any(r is None for r in self.context_alignment_restrictions):
            errors.append("context_alignment_restrictions must not contain None")
        if any(p is None for p in self.post_processing_policies):
            errors.append("post_processing_policies must not contain None")
        if errors:
            raise InvalidArgumentError(f"Invalid configuration: {'; '.join(errors)}")


@dataclass
class GenerationProgress:
    iteration: int
    chunk_count: int
    pending_context_count: int
    unfulfilled_context_count: int


@dataclass
class GenerationStatistics:
    """Counters collected over one generation run."""
    iterations: int = 0
    placed_chunks: int = 0
    unfulfilled_contexts: int = 0
    template_draws: int = 0
    rejected_candidates: Dict[str, int] = field(default_factory=lambda: {
        'out_of_bounds': 0,
        'overlap': 0,
    })
    stop_reason: str = ""

    def reject(self, reason: str) -> None:
        self.rejected_candidates[reason] = self.rejected_candidates.get(reason, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'iterations': self.iterations,
            'placed_chunks': self.placed_chunks,
            'unfulfilled_contexts': self.unfulfilled_contexts,
            'template_draws': self.template_draws,
            'rejected_candidates': dict(self.rejected_candidates),
            'stop_reason': self.stop_reason,
        }
