"""
Built-in sample chunk libraries.
"""

from ..errors import InvalidArgumentError
from .dungeon import DOOR_TAG, UNIT, create_dungeon_library_2d, create_dungeon_library_3d


def create_builtin_library(dimensions: int):
    """Get the sample dungeon library for 2 or 3 dimensions."""
    if dimensions == 2:
        return create_dungeon_library_2d()
    if dimensions == 3:
        return create_dungeon_library_3d()
    raise InvalidArgumentError(f"No built-in library for {dimensions} dimensions")


__all__ = [
    'DOOR_TAG',
    'UNIT',
    'create_dungeon_library_2d',
    'create_dungeon_library_3d',
    'create_builtin_library',
]
