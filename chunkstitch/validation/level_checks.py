"""
After-the-fact checks of a generated level.

Checks:
- LVL-001: No two chunks overlap
- LVL-002: Every chunk lies inside the target extents
- LVL-003: Every filled context's target points back to it
- LVL-004: Paired contexts sit at the same absolute position
- LVL-006: Contexts filled by a placement without a paired context
- LVL-005: Open contexts remaining (informational)

Overlaps are found with a plain pairwise scan so the result does not
depend on the level's spatial index.
"""

import logging
from itertools import combinations

from ..generators.chunks import Context
from ..generators.geometry import EPSILON
from ..generators.level import Level
from .core import ValidationError, ValidationIssue, ValidationResult
from .rules import LVL_001, LVL_002, LVL_003, LVL_004, LVL_005, LVL_006

logger = logging.getLogger(__name__)


def _context_ref(context: Context) -> str:
    return f"{context.chunk.index}.{context.index}"


def check_overlaps(level: Level) -> ValidationResult:
    result = ValidationResult()
    for first, second in combinations(level.chunks, 2):
        if first.bounds.intersects(second.bounds):
            result.add_issue(ValidationIssue(
                severity=LVL_001.severity,
                code=LVL_001.code,
                message=LVL_001.format_message(first=first.index, second=second.index),
                remediation=LVL_001.remediation_template,
                chunk=second.index,
            ))
    return result


def check_bounds(level: Level) -> ValidationResult:
    result = ValidationResult()
    for chunk in level.chunks:
        if not level.bounds.contains(chunk.bounds):
            result.add_issue(ValidationIssue(
                severity=LVL_002.severity,
                code=LVL_002.code,
                message=LVL_002.format_message(
                    chunk=chunk.index, bounds=chunk.bounds, extents=level.target_extents
                ),
                remediation=LVL_002.remediation_template,
                chunk=chunk.index,
            ))
    return result


def check_context_pairs(level: Level) -> ValidationResult:
    """Check LVL-003 and LVL-004 for every filled context with a target."""
    result = ValidationResult()
    for context in level.find_filled_contexts():
        target = context.target
        if target is None:
            continue

        if target.target is not context:
            result.add_issue(ValidationIssue(
                severity=LVL_003.severity,
                code=LVL_003.code,
                message=LVL_003.format_message(
                    context=_context_ref(context), target=_context_ref(target)
                ),
                remediation=LVL_003.remediation_template,
                chunk=context.chunk.index,
                context=_context_ref(context),
            ))
            continue

        distance = context.distance_to(target)
        # Each pair is visited from both ends; report it once
        if distance > EPSILON and (context.chunk.index, context.index) < (target.chunk.index, target.index):
            result.add_issue(ValidationIssue(
                severity=LVL_004.severity,
                code=LVL_004.code,
                message=LVL_004.format_message(
                    context=_context_ref(context), target=_context_ref(target), distance=distance
                ),
                remediation=LVL_004.remediation_template,
                chunk=context.chunk.index,
                context=_context_ref(context),
            ))
    return result


def check_unpaired_contexts(level: Level) -> ValidationResult:
    result = ValidationResult()
    for context in level.find_filled_contexts():
        if context.target is None and context.attached_chunk is not None:
            result.add_issue(ValidationIssue(
                severity=LVL_006.severity,
                code=LVL_006.code,
                message=LVL_006.format_message(
                    context=_context_ref(context), attached=context.attached_chunk.index
                ),
                remediation=LVL_006.remediation_template,
                chunk=context.chunk.index,
                context=_context_ref(context),
            ))
    return result


def check_open_contexts(level: Level) -> ValidationResult:
    result = ValidationResult()
    open_contexts = level.find_open_contexts()
    if open_contexts:
        result.add_issue(ValidationIssue(
            severity=LVL_005.severity,
            code=LVL_005.code,
            message=LVL_005.format_message(
                count=len(open_contexts),
                unfulfilled=len(level.find_unfulfilled_contexts()),
            ),
        ))
    return result


def validate_level(level: Level) -> ValidationResult:
    """Run every level check.

    Args:
        level: The level to validate

    Returns:
        ValidationResult with all issues found
    """
    result = ValidationResult()
    result.merge(check_overlaps(level))
    result.merge(check_bounds(level))
    result.merge(check_context_pairs(level))
    result.merge(check_unpaired_contexts(level))
    result.merge(check_open_contexts(level))

    if result.failed:
        logger.warning("Level validation failed with %d error(s)", len(result.errors))
    else:
        logger.debug("Level validation passed (%d issue(s))", len(result.issues))
    return result


def assert_valid_level(level: Level) -> ValidationResult:
    """Validate a level and raise if any check failed.

    Raises:
        ValidationError: If any FAIL issue was found
    """
    result = validate_level(level)
    if result.failed:
        raise ValidationError(result)
    return result
