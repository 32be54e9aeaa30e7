"""
Level generator: assembles a level by stitching chunks at open contexts.

The generator drives one synchronous loop over a single level:
1. Stop if the termination condition is met or no pending context remains
2. Pick a pending context C (insertion order unless configured otherwise)
3. Draw up to max_candidate_attempts templates; for every compatible anchor
   and every permitted rotation, compute the chunk position that puts the
   anchor exactly on C and reject it if it leaves the level or overlaps a
   placed chunk
4. Place the first accepted candidate and fill C
5. If nothing fits, mark C unfulfilled (a soft failure, never an error)
6. After the loop, run the post-processing policies in order

Given the same library, extents, configuration and a seeded random source,
every draw and placement is reproducible.
"""

from __future__ import annotations

import dataclasses
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..pipeline.configuration import (
    GenerationProgress,
    GenerationStatistics,
    LevelGeneratorConfiguration,
)
from ..pipeline.termination import TerminationCondition
from .chunks import Chunk, Context
from .errors import GenerationCancelledException, InvalidArgumentError, NoMatchingTemplateError
from .geometry import AABB, EPSILON, Vector
from .level import Level
from .library import ChunkLibrary, RandomSource
from .templates import Anchor, ChunkTemplate

logger = logging.getLogger(__name__)


@dataclass
class Placement:
    """An accepted candidate: where and how a template instance goes."""
    template: ChunkTemplate
    anchor: Anchor
    rotation: int
    position: Vector
    bounds: AABB


class LevelGenerator:
    """Generates 2D and 3D levels from a chunk library.

    Args:
        configuration: Defaults for every run of this generator
    """

    def __init__(self, configuration: Optional[LevelGeneratorConfiguration] = None):
        self.configuration = configuration or LevelGeneratorConfiguration()
        self.is_running = False
        self.is_cancelled = False
        self.progress_callback: Optional[Callable[[GenerationProgress], None]] = None
        self.last_statistics: Optional[GenerationStatistics] = None

    # -- helpers --

    def set_progress_callback(self, callback: Callable[[GenerationProgress], None]):
        self.progress_callback = callback

    def cancel(self):
        """Request cancellation; the running loop stops at its next iteration."""
        self.is_cancelled = True

    def _check_cancellation(self, level: Level):
        if self.is_cancelled:
            raise GenerationCancelledException("Level generation cancelled", level)

    def _update_progress(self, level: Level, stats: GenerationStatistics):
        if self.progress_callback is None:
            return
        self.progress_callback(GenerationProgress(
            iteration=stats.iterations,
            chunk_count=len(level),
            pending_context_count=len(level.find_pending_contexts()),
            unfulfilled_context_count=len(level.find_unfulfilled_contexts()),
        ))

    @staticmethod
    def _create_random_source(seed: Optional[int]) -> RandomSource:
        return random.Random(seed)

    # -- public entry points --

    def generate(
        self,
        library: ChunkLibrary,
        target_extents: Sequence[float],
        rng: Optional[RandomSource] = None,
        termination_condition: Optional[TerminationCondition] = None,
        post_processing_policies: Optional[Sequence] = None,
        seed: Optional[int] = None,
    ) -> Level:
        """
        Generate a new level with the given target extents.

        Args:
            library: Templates to build the level from
            target_extents: Size of the level (2 or 3 components, all > 0)
            rng: Random source; if None a fresh random.Random(seed) is used
            termination_condition: Overrides the configured condition
            post_processing_policies: Overrides the configured policies
            seed: Seed for the random source created when rng is None

        Returns:
            The generated level, possibly with unfulfilled open contexts

        Raises:
            InvalidArgumentError: On invalid extents or a None library
            NoMatchingTemplateError: If the library is empty
        """
        overrides = {}
        if termination_condition is not None:
            overrides['termination_condition'] = termination_condition
        if post_processing_policies is not None:
            overrides['post_processing_policies'] = list(post_processing_policies)
        configuration = dataclasses.replace(self.configuration, **overrides)

        level = Level(target_extents)
        return self._run(library, level, rng, seed, configuration)

    def generate_into(
        self,
        library: ChunkLibrary,
        level: Level,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ) -> Level:
        """Fill a caller-supplied level, which may already contain chunks."""
        return self._run(library, level, rng, seed, self.configuration)

    # -- generation loop --

    def _run(self, library: ChunkLibrary, level: Level, rng: Optional[RandomSource],
             seed: Optional[int], configuration: LevelGeneratorConfiguration) -> Level:
        if library is None:
            raise InvalidArgumentError("library must not be None")
        if level is None:
            raise InvalidArgumentError("level must not be None")
        if not len(library):
            raise NoMatchingTemplateError("Chunk library is empty")
        level.geometry.require_same(library.geometry)

        if rng is None:
            if seed is None:
                seed = random.SystemRandom().randrange(2 ** 31)
            rng = self._create_random_source(seed)
            level.seed = seed
            logger.debug("Using seed %d", seed)

        library.freeze()
        stats = GenerationStatistics()
        self.is_running = True
        self.is_cancelled = False
        self.last_statistics = stats

        try:
            self._generate(library, level, rng, configuration, stats)
        finally:
            self.is_running = False

        logger.info(
            "Generated %s level: %d chunks, %d open contexts (%d unfulfilled) "
            "in %d iterations, stopped on %s",
            level.geometry.name, len(level), len(level.find_open_contexts()),
            len(level.find_unfulfilled_contexts()), stats.iterations, stats.stop_reason,
        )

        for policy in configuration.post_processing_policies:
            policy.process(configuration, level)

        return level

    def _generate(self, library: ChunkLibrary, level: Level, rng: RandomSource,
                  configuration: LevelGeneratorConfiguration,
                  stats: GenerationStatistics) -> None:
        termination = configuration.termination_condition

        while True:
            self._check_cancellation(level)

            if termination is not None and termination.is_met(level):
                stats.stop_reason = "termination_condition"
                return

            if not len(level):
                if not self._place_seed_chunk(library, level, rng, configuration, stats):
                    logger.warning(
                        "Could not place a first chunk in a level of extents %s "
                        "after %d attempts", level.target_extents,
                        configuration.max_candidate_attempts,
                    )
                    stats.stop_reason = "no_seed_chunk"
                    return
                self._update_progress(level, stats)
                continue

            pending = level.find_pending_contexts()
            if not pending:
                stats.stop_reason = "no_open_contexts"
                return

            if configuration.max_iterations is not None and stats.iterations >= configuration.max_iterations:
                logger.warning("Stopping after %d iterations", stats.iterations)
                stats.stop_reason = "max_iterations"
                return

            stats.iterations += 1
            context = configuration.context_selection.select(pending, level, rng)
            placement = self._find_placement(library, level, context, rng, configuration, stats)

            if placement is None:
                context.mark_unfulfilled()
                stats.unfulfilled_contexts += 1
                logger.debug("Gave up on context %r", context)
            else:
                self._place(level, context, placement)
                stats.placed_chunks += 1

            self._update_progress(level, stats)

    # -- seeding --

    def _seed_position(self, template: ChunkTemplate, level: Level, rng: RandomSource,
                       configuration: LevelGeneratorConfiguration) -> Optional[Vector]:
        """Position for the first chunk, or None if the template cannot fit."""
        geometry = level.geometry
        if configuration.start_position is not None:
            return geometry.vector(configuration.start_position, "start_position")

        position = []
        for level_extent, chunk_extent in zip(level.target_extents, template.extents):
            slack = level_extent - chunk_extent
            if slack < -EPSILON:
                return None
            position.append(rng.random() * max(slack, 0.0))
        return tuple(position)

    def _place_seed_chunk(self, library: ChunkLibrary, level: Level, rng: RandomSource,
                          configuration: LevelGeneratorConfiguration,
                          stats: GenerationStatistics) -> bool:
        for _ in range(configuration.max_candidate_attempts):
            template = library.select_random(rng)
            stats.template_draws += 1

            position = self._seed_position(template, level, rng, configuration)
            if position is None:
                stats.reject('out_of_bounds')
                continue
            bounds = level.geometry.bounds(position, template.extents)
            if not level.fits(bounds):
                stats.reject('out_of_bounds')
                continue

            chunk = Chunk(template, position, 0)
            level.add_chunk(chunk)
            stats.placed_chunks += 1
            logger.debug("Placed first chunk %r", chunk)
            return True
        return False

    # -- placement search --

    def _draw_template(self, library: ChunkLibrary, context: Context, rng: RandomSource,
                       configuration: LevelGeneratorConfiguration) -> ChunkTemplate:
        if configuration.filter_templates_by_anchor_tag:
            return library.select_random_where(
                rng, lambda template: template.has_anchor_compatible_with(context.tag)
            )
        return library.select_random(rng)

    def _find_placement(self, library: ChunkLibrary, level: Level, context: Context,
                        rng: RandomSource, configuration: LevelGeneratorConfiguration,
                        stats: GenerationStatistics) -> Optional[Placement]:
        """Search for a chunk that attaches to context within the attempt budget."""
        for attempt in range(configuration.max_candidate_attempts):
            try:
                template = self._draw_template(library, context, rng, configuration)
            except NoMatchingTemplateError:
                logger.debug("No template has an anchor compatible with tag %r", context.tag)
                return None
            stats.template_draws += 1

            placement = self._try_template(template, level, context, stats)
            if placement is not None:
                logger.debug(
                    "Attempt %d: placing %s at %s rotation=%d",
                    attempt + 1, template.name, placement.position, placement.rotation,
                )
                return placement
        return None

    def _try_template(self, template: ChunkTemplate, level: Level, context: Context,
                      stats: GenerationStatistics) -> Optional[Placement]:
        """Try every compatible anchor and permitted rotation of one template."""
        geometry = level.geometry
        target = context.absolute_position

        for anchor in template.compatible_anchors(context.tag):
            for rotation in template.rotations():
                anchor_offset = geometry.rotate_point(
                    anchor.relative_position, template.extents, rotation
                )
                # Chunk origin that puts the anchor exactly on the context
                position = geometry.subtract(target, anchor_offset)
                extents = geometry.rotated_extents(template.extents, rotation)
                bounds = geometry.bounds(position, extents)

                if not level.fits(bounds):
                    stats.reject('out_of_bounds')
                    continue
                if level.overlaps(bounds):
                    stats.reject('overlap')
                    continue

                return Placement(template, anchor, rotation, position, bounds)
        return None

    def _place(self, level: Level, context: Context, placement: Placement) -> Chunk:
        chunk = Chunk(placement.template, placement.position, placement.rotation)
        level.add_chunk(chunk)

        definition = placement.template.context_for_anchor(placement.anchor, context.tag)
        counterpart = chunk.get_context(definition.index) if definition is not None else None
        context.attach(chunk, placement.anchor.index, counterpart)
        logger.debug("Placed %r for context %r", chunk, context)
        return chunk
