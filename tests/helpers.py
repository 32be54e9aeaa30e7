from __future__ import annotations

from collections.abc import Sequence

from chunkstitch.generators import ChunkLibrary, ChunkTemplate, Level
from chunkstitch.generators.chunks import Chunk


class ScriptedRandom:
    """Random source replaying fixed values; the last value repeats."""

    def __init__(self, values: Sequence[float]) -> None:
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[index]


def make_template(
    extents: Sequence[float],
    anchors: Sequence[Sequence[float]] = (),
    contexts: Sequence[Sequence[float]] = (),
    *,
    tag: str = "",
    socket_tag: str = "",
    weight: int = 100,
    allow_rotation: bool = False,
    name: str | None = None,
) -> ChunkTemplate:
    template = ChunkTemplate(
        extents, weight=weight, tag=tag, allow_rotation=allow_rotation, name=name
    )
    for position in anchors:
        template.add_anchor(position, socket_tag)
    for position in contexts:
        template.add_context(position, socket_tag)
    return template


def make_door_template(extents: Sequence[float], doors: Sequence[Sequence[float]], **kwargs) -> ChunkTemplate:
    """Template whose doors are anchors and contexts at the same positions."""
    return make_template(extents, doors, doors, **kwargs)


def place(level: Level, template: ChunkTemplate, position: Sequence[float], rotation: int = 0) -> Chunk:
    chunk = Chunk(template, tuple(position), rotation)
    level.add_chunk(chunk)
    return chunk


def library_of(*templates: ChunkTemplate) -> ChunkLibrary:
    return ChunkLibrary(templates)
