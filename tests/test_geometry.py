from __future__ import annotations

from itertools import product

import numpy as np
import pytest

from chunkstitch.generators.errors import DimensionMismatchError, InvalidArgumentError
from chunkstitch.generators.geometry import (
    AABB,
    GEOMETRY_2D,
    GEOMETRY_3D,
    ROTATIONS,
    geometry_for,
)


class TestAABB:
    def test_touching_boxes_do_not_intersect(self) -> None:
        """Boxes sharing a face are adjacent, not overlapping."""
        a = AABB.from_position((0, 0), (2, 2))
        b = AABB.from_position((2, 0), (2, 2))
        assert not a.intersects(b)
        assert not b.intersects(a)

    def test_overlapping_boxes_intersect(self) -> None:
        a = AABB.from_position((0, 0), (2, 2))
        b = AABB.from_position((1, 1), (2, 2))
        assert a.intersects(b)

    def test_contains_is_inclusive(self) -> None:
        outer = AABB.from_position((0, 0, 0), (4, 4, 4))
        assert outer.contains(AABB.from_position((0, 0, 0), (4, 4, 4)))
        assert outer.contains(AABB.from_position((1, 1, 1), (2, 2, 2)))
        assert not outer.contains(AABB.from_position((3, 0, 0), (2, 1, 1)))

    def test_volume_and_center(self) -> None:
        box = AABB.from_position((1, 2, 3), (2, 3, 4))
        assert box.volume == pytest.approx(24)
        assert box.center == pytest.approx((2, 3.5, 5))
        assert box.extents == pytest.approx((2, 3, 4))

    def test_mixed_dimensions_raise(self) -> None:
        with pytest.raises(DimensionMismatchError):
            AABB.from_position((0, 0), (1, 1)).intersects(AABB.from_position((0, 0, 0), (1, 1, 1)))
        with pytest.raises(DimensionMismatchError):
            AABB.from_position((0, 0), (1, 1, 1))


class TestVectors:
    def test_geometry_for_resolves_dimensionality(self) -> None:
        assert geometry_for((1, 2)) is GEOMETRY_2D
        assert geometry_for([1, 2, 3]) is GEOMETRY_3D

    @pytest.mark.parametrize("values", [(1,), (1, 2, 3, 4), ()])
    def test_geometry_for_rejects_other_sizes(self, values) -> None:
        with pytest.raises(InvalidArgumentError):
            geometry_for(values)

    def test_vector_rejects_wrong_length(self) -> None:
        with pytest.raises(DimensionMismatchError):
            GEOMETRY_2D.vector((1, 2, 3))

    def test_vector_rejects_non_finite(self) -> None:
        with pytest.raises(InvalidArgumentError):
            GEOMETRY_2D.vector((1, float("nan")))
        with pytest.raises(InvalidArgumentError):
            GEOMETRY_3D.vector((1, float("inf"), 0))

    def test_positive_extents(self) -> None:
        assert GEOMETRY_2D.positive_extents((1, 2)) == (1.0, 2.0)
        with pytest.raises(InvalidArgumentError):
            GEOMETRY_2D.positive_extents((1, 0))
        with pytest.raises(InvalidArgumentError):
            GEOMETRY_3D.positive_extents((1, -2, 3))

    def test_distance_is_euclidean(self) -> None:
        assert GEOMETRY_2D.distance((0, 0), (3, 4)) == pytest.approx(5)
        assert GEOMETRY_3D.distance((1, 1, 1), (1, 1, 1)) == 0

    def test_require_same(self) -> None:
        GEOMETRY_2D.require_same(GEOMETRY_2D)
        with pytest.raises(DimensionMismatchError):
            GEOMETRY_2D.require_same(GEOMETRY_3D)


class TestRotation:
    @pytest.mark.parametrize(
        "rotation, expected",
        [(0, (1, 0)), (90, (0, 3)), (180, (3, 2)), (270, (2, 1))],
    )
    def test_rotate_point_2d(self, rotation, expected) -> None:
        """Quarter turns map (x, y) of a (w, h) chunk clockwise into the rotated box."""
        assert GEOMETRY_2D.rotate_point((1, 0), (4, 2), rotation) == pytest.approx(expected)

    def test_rotate_point_3d_turns_about_height_axis(self) -> None:
        assert GEOMETRY_3D.rotate_point((1, 5, 0), (4, 3, 2), 90) == pytest.approx((0, 5, 3))
        assert GEOMETRY_3D.rotated_extents((4, 3, 2), 90) == (2, 3, 4)

    def test_rotated_extents_swap_on_quarter_turns(self) -> None:
        assert GEOMETRY_2D.rotated_extents((4, 2), 0) == (4, 2)
        assert GEOMETRY_2D.rotated_extents((4, 2), 90) == (2, 4)
        assert GEOMETRY_2D.rotated_extents((4, 2), 180) == (4, 2)
        assert GEOMETRY_2D.rotated_extents((4, 2), 270) == (2, 4)

    def test_two_quarter_turns_equal_a_half_turn(self) -> None:
        extents = (4, 2)
        once = GEOMETRY_2D.rotate_point((1, 0), extents, 90)
        twice = GEOMETRY_2D.rotate_point(once, GEOMETRY_2D.rotated_extents(extents, 90), 90)
        assert twice == pytest.approx(GEOMETRY_2D.rotate_point((1, 0), extents, 180))

    @pytest.mark.parametrize("rotation", ROTATIONS)
    def test_corners_stay_inside_rotated_box(self, rotation) -> None:
        extents = (5, 3, 2)
        rotated = GEOMETRY_3D.rotated_extents(extents, rotation)
        box = AABB.from_position((0, 0, 0), rotated)
        for corner in product(*[(0, e) for e in extents]):
            assert box.contains_point(GEOMETRY_3D.rotate_point(corner, extents, rotation))

    def test_rotation_matrices_are_exact_integers(self) -> None:
        matrix = GEOMETRY_3D.rotation_matrix(90)
        assert matrix.dtype.kind == "i"
        assert np.array_equal(matrix @ matrix, GEOMETRY_3D.rotation_matrix(180))

    @pytest.mark.parametrize("rotation", [45, -90, 360])
    def test_invalid_rotation_raises(self, rotation) -> None:
        with pytest.raises(InvalidArgumentError):
            GEOMETRY_2D.rotate_point((0, 0), (1, 1), rotation)
