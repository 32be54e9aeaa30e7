"""
Spatial hash index for overlap queries against placed chunks.

The index divides space into uniform cells and maps every cell a chunk's
bounding box touches to that chunk. An overlap query only tests chunks
registered in the cells the candidate box touches, which replaces a scan
over every placed chunk. Results are identical to the linear scan.
"""

from __future__ import annotations

import math
from collections import defaultdict
from itertools import product
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set, Tuple

from .errors import InvalidArgumentError
from .geometry import AABB

if TYPE_CHECKING:
    from .chunks import Chunk

Cell = Tuple[int, ...]


class SpatialHashIndex:
    """Uniform grid of cells mapping to the chunks whose bounds touch them.

    Args:
        cell_size: Edge length of a cell. If None, it is derived from the
            largest extent of the first chunk added.
    """

    def __init__(self, cell_size: Optional[float] = None):
        if cell_size is not None and cell_size <= 0:
            raise InvalidArgumentError("Cell size must be greater than zero.")
        self.cell_size = cell_size
        self._cells: Dict[Cell, Set[int]] = defaultdict(set)
        self._chunks: List['Chunk'] = []

    def __len__(self) -> int:
        return len(self._chunks)

    def _cells_for(self, bounds: AABB) -> Iterator[Cell]:
        """Cells touched by a box (faces included)."""
        size = self.cell_size
        ranges = [
            range(math.floor(lo / size), math.floor(hi / size) + 1)
            for lo, hi in zip(bounds.minimum, bounds.maximum)
        ]
        return product(*ranges)

    def _cell_count(self, bounds: AABB) -> int:
        size = self.cell_size
        return math.prod(
            math.floor(hi / size) - math.floor(lo / size) + 1
            for lo, hi in zip(bounds.minimum, bounds.maximum)
        )

    def add(self, chunk: 'Chunk') -> None:
        if self.cell_size is None:
            self.cell_size = max(chunk.extents)
        slot = len(self._chunks)
        self._chunks.append(chunk)
        for cell in self._cells_for(chunk.bounds):
            self._cells[cell].add(slot)

    def candidates(self, bounds: AABB) -> List['Chunk']:
        """Chunks that might intersect bounds, in placement order."""
        if self.cell_size is None:
            return []
        # Scanning everything is cheaper than visiting more cells than chunks
        if self._cell_count(bounds) > len(self._chunks):
            return list(self._chunks)
        slots: Set[int] = set()
        for cell in self._cells_for(bounds):
            found = self._cells.get(cell)
            if found:
                slots.update(found)
        return [self._chunks[slot] for slot in sorted(slots)]

    def query(self, bounds: AABB) -> List['Chunk']:
        """Chunks whose bounds strictly intersect the given box."""
        return [chunk for chunk in self.candidates(bounds) if chunk.bounds.intersects(bounds)]

    def clear(self) -> None:
        self._cells.clear()
        self._chunks.clear()
