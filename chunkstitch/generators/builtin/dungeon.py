"""
Dungeon libraries: rooms, corridors and junctions joined at doors.

Every door is both an anchor and a context at the same point on a chunk
face, so a placed chunk fills the context it was attached to and exposes
its remaining doors as new open contexts.
"""

from typing import Sequence, Tuple

from ..library import ChunkLibrary
from ..templates import ChunkTemplate

DOOR_TAG = "door"

# Grid unit of the sample libraries (corridor width)
UNIT = 4


def _with_doors(template: ChunkTemplate, doors: Sequence[Tuple[float, ...]]) -> ChunkTemplate:
    for door in doors:
        template.add_anchor(door, DOOR_TAG)
        template.add_context(door, DOOR_TAG)
    return template


# =============================================================================
# 2D
# =============================================================================

def create_dungeon_library_2d() -> ChunkLibrary:
    """Top-down dungeon: square rooms, a long hall, corridors, corners and dead ends."""
    u = UNIT
    library = ChunkLibrary()

    library.add_template(_with_doors(
        ChunkTemplate((2 * u, 2 * u), weight=100, tag="room", name="Room"),
        [(u, 0), (2 * u, u), (u, 2 * u), (0, u)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((4 * u, 2 * u), weight=30, tag="room", allow_rotation=True, name="Hall"),
        [(0, u), (2 * u, 0), (4 * u, u), (2 * u, 2 * u)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((2 * u, u), weight=150, tag="corridor", allow_rotation=True, name="Corridor"),
        [(0, u / 2), (2 * u, u / 2)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((u, u), weight=60, tag="corridor", allow_rotation=True, name="Corner"),
        [(0, u / 2), (u / 2, u)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((u, u), weight=20, tag="dead_end", allow_rotation=True, name="DeadEnd"),
        [(0, u / 2)],
    ))
    return library


# =============================================================================
# 3D
# =============================================================================

def create_dungeon_library_3d() -> ChunkLibrary:
    """Multi-storey dungeon: doors sit on the floor of vertical faces; stairs climb one storey."""
    u = UNIT
    library = ChunkLibrary()

    library.add_template(_with_doors(
        ChunkTemplate((2 * u, u, 2 * u), weight=100, tag="room", name="Room"),
        [(u, 0, 0), (2 * u, 0, u), (u, 0, 2 * u), (0, 0, u)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((2 * u, u, u), weight=150, tag="corridor", allow_rotation=True, name="Corridor"),
        [(0, 0, u / 2), (2 * u, 0, u / 2)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((u, u, u), weight=60, tag="corridor", allow_rotation=True, name="Corner"),
        [(0, 0, u / 2), (u / 2, 0, u)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((2 * u, 2 * u, u), weight=40, tag="stairs", allow_rotation=True, name="Stairs"),
        [(0, 0, u / 2), (2 * u, u, u / 2)],
    ))
    library.add_template(_with_doors(
        ChunkTemplate((u, u, u), weight=20, tag="dead_end", allow_rotation=True, name="DeadEnd"),
        [(0, 0, u / 2)],
    ))
    return library
