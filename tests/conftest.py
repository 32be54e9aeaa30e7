from __future__ import annotations

import pytest

from chunkstitch.generators import ChunkLibrary, ChunkTemplate, Level
from chunkstitch.generators.builtin import create_dungeon_library_2d, create_dungeon_library_3d
from tests.helpers import make_door_template


@pytest.fixture
def strip_template() -> ChunkTemplate:
    """2x2 chunk with a door in the middle of its left and right faces."""
    return make_door_template((2, 2), [(0, 1), (2, 1)], name="Strip")


@pytest.fixture
def strip_library(strip_template: ChunkTemplate) -> ChunkLibrary:
    return ChunkLibrary([strip_template])


@pytest.fixture
def strip_level() -> Level:
    """A corridor-shaped level ten strip chunks long."""
    return Level((20, 2))


@pytest.fixture
def dungeon_library_2d() -> ChunkLibrary:
    return create_dungeon_library_2d()


@pytest.fixture
def dungeon_library_3d() -> ChunkLibrary:
    return create_dungeon_library_3d()
