"""
Statistics policy: reports on the finished level without touching it.
"""

from __future__ import annotations

from .base import PostProcessingPolicy


class LogStatisticsPolicy(PostProcessingPolicy):
    """Logs chunk and context counts and the covered fraction of the level."""

    @property
    def name(self) -> str:
        return "LogStatistics"

    def execute(self, configuration, level) -> None:
        self.log_message(
            f"{len(level)} chunks, "
            f"{len(level.find_open_contexts())} open contexts "
            f"({len(level.find_unfulfilled_contexts())} unfulfilled), "
            f"{len(level.find_filled_contexts())} filled contexts, "
            f"coverage {level.coverage:.1%}"
        )
