"""
Geometry capability shared by 2D and 3D levels.

The placement algorithm never branches on dimensionality. Everything that
differs between a 2D and a 3D level is answered by a Geometry object:
- vector validation and arithmetic
- Euclidean distance
- quarter-turn rotation of points and extents
- axis-aligned bounding boxes

Rotation System:
- Chunks support 0, 90, 180 and 270 degree rotation (clockwise)
- 2D rotates in the XY plane, 3D rotates about the Y (height) axis
- A rotated chunk stays inside the box [0, rotated_extents], so a point
  (x, y) of a chunk with extents (w, h) becomes:
    90:  (y, w - x)
    180: (w - x, h - y)
    270: (h - y, x)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError, InvalidArgumentError


Vector = Tuple[float, ...]
Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]

# Tolerance for position matching and bounds tests
EPSILON = 1e-6

# Rotations in the order the generator tries them
ROTATIONS: Tuple[int, ...] = (0, 90, 180, 270)

# 2x2 clockwise quarter turns acting on the rotation plane
_QUARTER_TURNS: Dict[int, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    0: ((1, 0), (0, 1)),
    90: ((0, 1), (-1, 0)),
    180: ((-1, 0), (0, -1)),
    270: ((0, -1), (1, 0)),
}


@dataclass(frozen=True)
class AABB:
    """Axis-aligned bounding box of any dimensionality."""
    minimum: Vector
    maximum: Vector

    @classmethod
    def from_position(cls, position: Sequence[float], extents: Sequence[float]) -> 'AABB':
        """Create a box with its minimum corner at position."""
        if len(position) != len(extents):
            raise DimensionMismatchError(
                f"Position has {len(position)} components, extents have {len(extents)}"
            )
        minimum = tuple(float(p) for p in position)
        maximum = tuple(float(p) + float(e) for p, e in zip(position, extents))
        return cls(minimum, maximum)

    @property
    def dimensions(self) -> int:
        return len(self.minimum)

    @property
    def extents(self) -> Vector:
        return tuple(hi - lo for lo, hi in zip(self.minimum, self.maximum))

    @property
    def center(self) -> Vector:
        return tuple((lo + hi) / 2 for lo, hi in zip(self.minimum, self.maximum))

    @property
    def volume(self) -> float:
        """Area in 2D, volume in 3D."""
        return math.prod(self.extents)

    def _check_dimensions(self, other: 'AABB') -> None:
        if other.dimensions != self.dimensions:
            raise DimensionMismatchError(
                f"Cannot compare a {self.dimensions}D box with a {other.dimensions}D box"
            )

    def intersects(self, other: 'AABB') -> bool:
        """Check if this box overlaps another. Touching faces do not overlap."""
        self._check_dimensions(other)
        return all(
            a_min < b_max - EPSILON and a_max > b_min + EPSILON
            for a_min, a_max, b_min, b_max in zip(
                self.minimum, self.maximum, other.minimum, other.maximum
            )
        )

    def contains(self, other: 'AABB') -> bool:
        """Check if other lies completely inside this box (faces may touch)."""
        self._check_dimensions(other)
        return all(
            a_min <= b_min + EPSILON and a_max >= b_max - EPSILON
            for a_min, a_max, b_min, b_max in zip(
                self.minimum, self.maximum, other.minimum, other.maximum
            )
        )

    def contains_point(self, point: Sequence[float]) -> bool:
        if len(point) != self.dimensions:
            raise DimensionMismatchError(
                f"Cannot test a {len(point)}D point against a {self.dimensions}D box"
            )
        return all(
            lo - EPSILON <= p <= hi + EPSILON
            for lo, hi, p in zip(self.minimum, self.maximum, point)
        )


class Geometry:
    """Vector and rotation operations for one dimensionality.

    Use the GEOMETRY_2D and GEOMETRY_3D singletons rather than creating
    instances directly.
    """

    def __init__(self, name: str, dimensions: int, rotation_plane: Tuple[int, int]):
        self.name = name
        self.dimensions = dimensions
        self.rotation_plane = rotation_plane
        self._matrices = {
            rotation: self._build_matrix(rotation) for rotation in ROTATIONS
        }

    def __repr__(self) -> str:
        return f"Geometry({self.name})"

    def _build_matrix(self, rotation: int) -> np.ndarray:
        matrix = np.identity(self.dimensions, dtype=np.int64)
        i, j = self.rotation_plane
        turn = _QUARTER_TURNS[rotation]
        matrix[i, i], matrix[i, j] = turn[0]
        matrix[j, i], matrix[j, j] = turn[1]
        return matrix

    # -- validation --

    def zero(self) -> Vector:
        return (0.0,) * self.dimensions

    def vector(self, values: Iterable[float], name: str = "vector") -> Vector:
        """Validate and normalize a vector of this dimensionality.

        Raises:
            DimensionMismatchError: If the vector has the wrong number of components
            InvalidArgumentError: If a component is not a finite number
        """
        if values is None:
            raise InvalidArgumentError(f"{name} must not be None")
        try:
            components = tuple(float(v) for v in values)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"{name} must be a sequence of numbers: {e}") from e
        if len(components) != self.dimensions:
            raise DimensionMismatchError(
                f"{name} must have {self.dimensions} components, got {len(components)}"
            )
        if not all(math.isfinite(c) for c in components):
            raise InvalidArgumentError(f"{name} must be finite, got {components}")
        return components

    def positive_extents(self, values: Iterable[float], name: str = "extents") -> Vector:
        """Validate extents: every component must be greater than zero."""
        extents = self.vector(values, name)
        for axis, value in zip("xyz", extents):
            if value <= 0:
                raise InvalidArgumentError(
                    f"{name} must be greater than zero on every axis ({axis}={value})"
                )
        return extents

    def require_same(self, other: 'Geometry') -> None:
        if other is not self:
            raise DimensionMismatchError(f"Cannot combine {self.name} with {other.name}")

    # -- arithmetic --

    def add(self, a: Vector, b: Vector) -> Vector:
        return tuple(x + y for x, y in zip(a, b))

    def subtract(self, a: Vector, b: Vector) -> Vector:
        return tuple(x - y for x, y in zip(a, b))

    def distance(self, a: Vector, b: Vector) -> float:
        """Euclidean distance between two points."""
        return float(np.linalg.norm(np.subtract(a, b, dtype=float)))

    def bounds(self, position: Vector, extents: Vector) -> AABB:
        return AABB.from_position(position, extents)

    # -- rotation --

    @staticmethod
    def check_rotation(rotation: int) -> int:
        if rotation not in _QUARTER_TURNS:
            raise InvalidArgumentError(
                f"Rotation must be one of {ROTATIONS}, got {rotation}"
            )
        return rotation

    def rotation_matrix(self, rotation: int) -> np.ndarray:
        return self._matrices[self.check_rotation(rotation)]

    def rotated_extents(self, extents: Vector, rotation: int) -> Vector:
        """Get extents after rotation (quarter turns swap the rotation plane axes)."""
        self.check_rotation(rotation)
        if rotation in (90, 270):
            i, j = self.rotation_plane
            swapped = list(extents)
            swapped[i], swapped[j] = extents[j], extents[i]
            return tuple(swapped)
        return tuple(extents)

    def rotate_point(self, point: Vector, extents: Vector, rotation: int) -> Vector:
        """Rotate a chunk-local point so it stays inside the rotated chunk.

        Args:
            point: Position relative to the unrotated chunk origin
            extents: Unrotated chunk extents
            rotation: Rotation in degrees (0, 90, 180, 270)

        Returns:
            Position relative to the rotated chunk origin
        """
        matrix = self.rotation_matrix(rotation)
        if rotation == 0:
            return tuple(point)

        i, j = self.rotation_plane
        w, h = extents[i], extents[j]
        translation = [0.0] * self.dimensions
        if rotation == 90:
            translation[j] = w
        elif rotation == 180:
            translation[i], translation[j] = w, h
        else:
            translation[i] = h

        rotated = matrix @ np.asarray(point, dtype=float) + np.asarray(translation)
        return tuple(float(v) for v in rotated)


GEOMETRY_2D = Geometry("2D", 2, (0, 1))
GEOMETRY_3D = Geometry("3D", 3, (0, 2))


def geometry_for(values: Sequence[float]) -> Geometry:
    """Resolve the geometry matching a vector's number of components."""
    if values is None:
        raise InvalidArgumentError("Cannot derive dimensionality from None")
    try:
        count = len(values)
    except TypeError as e:
        raise InvalidArgumentError(f"Expected a sequence of numbers, got {values!r}") from e
    if count == 2:
        return GEOMETRY_2D
    if count == 3:
        return GEOMETRY_3D
    raise InvalidArgumentError(f"Only 2D and 3D vectors are supported, got {count} components")
