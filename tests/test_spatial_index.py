from __future__ import annotations

import random

import pytest

from chunkstitch.generators.chunks import Chunk
from chunkstitch.generators.errors import InvalidArgumentError
from chunkstitch.generators.geometry import AABB
from chunkstitch.generators.spatial_index import SpatialHashIndex
from tests.helpers import make_template


def test_invalid_cell_size_raises() -> None:
    """A non-positive cell size is rejected."""
    with pytest.raises(InvalidArgumentError):
        SpatialHashIndex(cell_size=0)
    with pytest.raises(InvalidArgumentError):
        SpatialHashIndex(cell_size=-4)


def test_cell_size_derived_from_first_chunk() -> None:
    index = SpatialHashIndex()
    assert index.cell_size is None
    index.add(Chunk(make_template((3, 7)), (0, 0)))
    assert index.cell_size == 7


def test_empty_index_finds_nothing() -> None:
    assert SpatialHashIndex().query(AABB.from_position((0, 0), (1, 1))) == []


def test_query_excludes_touching_chunks() -> None:
    index = SpatialHashIndex(cell_size=2)
    template = make_template((2, 2))
    left = Chunk(template, (0, 0))
    right = Chunk(template, (4, 0))
    index.add(left)
    index.add(right)
    assert index.query(AABB.from_position((2, 0), (2, 2))) == []
    assert index.query(AABB.from_position((1, 0), (4, 2))) == [left, right]


def test_query_matches_linear_scan() -> None:
    rng = random.Random(7)
    index = SpatialHashIndex(cell_size=3)
    chunks = []
    for x in range(0, 40, 5):
        for y in range(-20, 20, 6):
            chunk = Chunk(make_template((rng.uniform(1, 4), rng.uniform(1, 5))), (x, y))
            chunks.append(chunk)
            index.add(chunk)

    for _ in range(200):
        box = AABB.from_position(
            (rng.uniform(-5, 45), rng.uniform(-25, 25)),
            (rng.uniform(0.5, 12), rng.uniform(0.5, 12)),
        )
        expected = [chunk for chunk in chunks if chunk.bounds.intersects(box)]
        assert index.query(box) == expected


def test_clear() -> None:
    index = SpatialHashIndex(cell_size=1)
    index.add(Chunk(make_template((1, 1, 1)), (0, 0, 0)))
    assert len(index) == 1
    index.clear()
    assert len(index) == 0
    assert index.query(AABB.from_position((0, 0, 0), (1, 1, 1))) == []
