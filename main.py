#!/usr/bin/env python3
"""
chunkstitch - command-line demo

Generates a level from one of the built-in dungeon libraries, prints a
summary of the placed chunks and the validation report.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from chunkstitch.generators import ChunkStitchError, Level, LevelGenerator
from chunkstitch.generators.builtin import create_builtin_library
from chunkstitch.pipeline import (
    AlignAdjacentContextsPolicy,
    DifferentChunksRestriction,
    LevelGeneratorConfiguration,
    LogStatisticsPolicy,
    MaximumChunkCountTerminationCondition,
)
from chunkstitch.validation import validate_level

logger = logging.getLogger("chunkstitch")

DEFAULT_SIZE = 64.0
# 3D levels are a few storeys tall
DEFAULT_HEIGHT_3D = 16.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunkstitch",
        description="Generate a level by stitching chunks from a built-in dungeon library.",
    )
    parser.add_argument("--dimensions", type=int, choices=(2, 3), default=2,
                        help="Generate a 2D or a 3D level (default: 2)")
    parser.add_argument("--width", type=float, default=DEFAULT_SIZE,
                        help="Level extent along X")
    parser.add_argument("--height", type=float, default=None,
                        help="Level extent along Y (default: 64 in 2D, 16 in 3D)")
    parser.add_argument("--depth", type=float, default=DEFAULT_SIZE,
                        help="Level extent along Z (3D only)")
    parser.add_argument("--max-chunks", type=int, default=None,
                        help="Stop after this many chunks (default: fill the level)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible level")
    parser.add_argument("--align-offset", type=float, default=None,
                        help="Snap open contexts closer than this distance after generation")
    parser.add_argument("--attempts", type=int, default=None,
                        help="Template draws per open context before giving up")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log output (-v: info, -vv: debug)")
    return parser


def target_extents(args: argparse.Namespace) -> List[float]:
    if args.dimensions == 2:
        height = DEFAULT_SIZE if args.height is None else args.height
        return [args.width, height]
    height = DEFAULT_HEIGHT_3D if args.height is None else args.height
    return [args.width, height, args.depth]


def build_configuration(args: argparse.Namespace) -> LevelGeneratorConfiguration:
    configuration = LevelGeneratorConfiguration(
        context_alignment_restrictions=[DifferentChunksRestriction()],
    )
    if args.max_chunks is not None:
        configuration.termination_condition = MaximumChunkCountTerminationCondition(args.max_chunks)
    if args.attempts is not None:
        configuration.max_candidate_attempts = args.attempts
    if args.align_offset is not None:
        configuration.post_processing_policies.append(AlignAdjacentContextsPolicy(args.align_offset))
    configuration.post_processing_policies.append(LogStatisticsPolicy())
    configuration.validate()
    return configuration


def format_summary(level: Level) -> str:
    lines = [
        f"Level {level.geometry.name} extents={level.target_extents} seed={level.seed}",
        f"  chunks:             {len(level)}",
        f"  coverage:           {level.coverage:.1%}",
        f"  filled contexts:    {len(level.find_filled_contexts())}",
        f"  open contexts:      {len(level.find_open_contexts())}",
        f"  unfulfilled:        {len(level.find_unfulfilled_contexts())}",
    ]
    for chunk in level.chunks:
        lines.append(
            f"  #{chunk.index:<3} {chunk.template.name:<10} at {chunk.position} "
            f"rotation={chunk.rotation}"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    log_level = logging.WARNING
    if args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        configuration = build_configuration(args)
        generator = LevelGenerator(configuration)
        level = generator.generate(
            create_builtin_library(args.dimensions),
            target_extents(args),
            seed=args.seed,
        )
    except ChunkStitchError as e:
        logger.error("Generation failed: %s", e)
        return 2

    print(format_summary(level))
    result = validate_level(level)
    print(result.report())
    return 0 if result.passed else 1


if __name__ == "__main__":
    sys.exit(main())
