"""
Base class for post-processing policies.

A policy is a composable unit of level refinement that runs after the
generation loop has finished. Policies may move context positions (for
example to snap nearby contexts together) and log informational messages,
but never add or remove chunks.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from ...generators.errors import InvalidArgumentError

if TYPE_CHECKING:
    from ...generators.level import Level
    from ..configuration import LevelGeneratorConfiguration

logger = logging.getLogger(__name__)


class PostProcessingPolicy(ABC):
    """
    Base class for post-processing policies.

    Subclasses implement execute(); callers use process(), which checks
    its arguments and resets the message log first.
    """

    def __init__(self):
        self.messages: List[str] = []

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this policy."""
        pass

    @property
    def description(self) -> str:
        """Optional description of what this policy does."""
        return ""

    @abstractmethod
    def execute(self, configuration: 'LevelGeneratorConfiguration', level: 'Level') -> None:
        """
        Refine the finished level.

        Args:
            configuration: Configuration of the generator that built the level
            level: Level to process
        """
        pass

    def process(self, configuration: 'LevelGeneratorConfiguration', level: 'Level') -> None:
        """
        Run this policy over a level.

        Raises:
            InvalidArgumentError: If configuration or level is None
        """
        if configuration is None:
            raise InvalidArgumentError("configuration must not be None")
        if level is None:
            raise InvalidArgumentError("level must not be None")

        self.messages = []
        logger.debug("Running post-processing policy %s", self.name)
        self.execute(configuration, level)

    def log_message(self, message: str) -> None:
        """Record an informational message."""
        self.messages.append(message)
        logger.info("[%s] %s", self.name, message)
