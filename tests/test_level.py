from __future__ import annotations

import pytest

from chunkstitch.generators.chunks import Chunk
from chunkstitch.generators.errors import DimensionMismatchError, InvalidArgumentError
from chunkstitch.generators.geometry import AABB
from chunkstitch.generators.level import Level
from tests.helpers import make_template, place


class TestLevelConstruction:
    @pytest.mark.parametrize("extents", [(0, 5), (5, -1), (1,), (1, 2, 3, 4), None])
    def test_invalid_extents_raise(self, extents) -> None:
        with pytest.raises(InvalidArgumentError):
            Level(extents)

    def test_empty_level(self) -> None:
        level = Level((10, 10))
        assert len(level) == 0
        assert level.chunks == ()
        assert level.find_open_contexts() == []
        assert level.coverage == 0
        assert level.seed is None


class TestAddChunk:
    def test_chunks_keep_placement_order(self, strip_template) -> None:
        level = Level((10, 2))
        first = place(level, strip_template, (0, 0))
        second = place(level, strip_template, (2, 0))
        assert level.chunks == (first, second)
        assert (first.index, second.index) == (0, 1)

    def test_out_of_bounds_raises(self, strip_template) -> None:
        level = Level((10, 2))
        with pytest.raises(InvalidArgumentError):
            place(level, strip_template, (9, 0))
        with pytest.raises(InvalidArgumentError):
            place(level, strip_template, (-1, 0))
        assert len(level) == 0

    def test_overlap_raises(self, strip_template) -> None:
        level = Level((10, 2))
        place(level, strip_template, (0, 0))
        with pytest.raises(InvalidArgumentError):
            place(level, strip_template, (1, 0))
        assert len(level) == 1

    def test_touching_chunks_are_allowed(self, strip_template) -> None:
        level = Level((4, 2))
        place(level, strip_template, (0, 0))
        place(level, strip_template, (2, 0))
        assert level.coverage == pytest.approx(1.0)

    def test_dimension_mismatch_raises(self) -> None:
        level = Level((10, 10))
        with pytest.raises(DimensionMismatchError):
            level.add_chunk(Chunk(make_template((1, 1, 1)), (0, 0, 0)))

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Level((10, 10)).add_chunk(None)


class TestLevelQueries:
    def test_fits_overlaps_can_place(self, strip_template) -> None:
        level = Level((10, 2))
        place(level, strip_template, (0, 0))
        touching = AABB.from_position((2, 0), (2, 2))
        assert level.fits(touching) and not level.overlaps(touching)
        assert level.can_place(touching)
        assert level.overlaps(AABB.from_position((1.5, 0), (2, 2)))
        assert not level.fits(AABB.from_position((9, 0), (2, 2)))
        assert not level.can_place(AABB.from_position((9, 0), (2, 2)))

    def test_open_contexts_in_placement_order(self, strip_template) -> None:
        level = Level((10, 2))
        first = place(level, strip_template, (4, 0))
        second = place(level, strip_template, (0, 0))
        contexts = level.find_open_contexts()
        assert [(c.chunk, c.index) for c in contexts] == [
            (first, 0), (first, 1), (second, 0), (second, 1),
        ]

    def test_pending_excludes_unfulfilled(self, strip_template) -> None:
        level = Level((10, 2))
        chunk = place(level, strip_template, (0, 0))
        chunk.get_context(0).mark_unfulfilled()
        assert level.find_open_contexts() == list(chunk.contexts)
        assert level.find_pending_contexts() == [chunk.get_context(1)]
        assert level.find_unfulfilled_contexts() == [chunk.get_context(0)]

    def test_filled_contexts(self, strip_template) -> None:
        level = Level((10, 2))
        left = place(level, strip_template, (0, 0))
        right = place(level, strip_template, (2, 0))
        left.get_context(1).join(right.get_context(0))
        assert level.find_filled_contexts() == [left.get_context(1), right.get_context(0)]
        assert len(level.find_open_contexts()) == 2

    def test_coverage_3d(self) -> None:
        level = Level((10, 4, 10))
        place(level, make_template((5, 4, 5)), (0, 0, 0))
        assert level.covered_volume == pytest.approx(100)
        assert level.coverage == pytest.approx(0.25)

    def test_linear_scan_matches_spatial_index(self, strip_template) -> None:
        indexed, scanned = Level((20, 2)), Level((20, 2), use_spatial_index=False)
        for x in (0, 4, 10, 16):
            place(indexed, strip_template, (x, 0))
            place(scanned, strip_template, (x, 0))
        for x in [i * 0.5 for i in range(-4, 40)]:
            box = AABB.from_position((x, 0), (2, 2))
            assert indexed.overlaps(box) == scanned.overlaps(box)
