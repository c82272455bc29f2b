"""Cell-to-tile occupancy index for variable-size square tiles.

Every placed tile owns the ``size × size`` block of cells starting at its
origin. ``OccupancyIndex`` maps each of those cells back to the owning
``Tile`` so that clicks can be resolved to tiles and placements can be
checked in O(tile area). It does no validation of its own: callers check
``placement.can_place`` before ``add``.

Removal is identity-guarded. If two tiles were ever written over the same
cell (bulk load of a bad layout, or a caller skipping validation), removing
the older one leaves the newer owner's cells intact.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from .types import Cell, Tile


def cell_key(x: int, y: int) -> Cell:
    return (x, y)


def round_half_up(v: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return math.floor(v + 0.5)


def footprint(tile: Tile) -> Iterator[Cell]:
    """Yield every cell covered by ``tile``, column-major from its origin."""
    for dx in range(tile.size):
        for dy in range(tile.size):
            yield (tile.x + dx, tile.y + dy)


class OccupancyIndex:
    def __init__(self, tiles: Iterable[Tile] = ()) -> None:
        self._cells: dict[Cell, Tile] = {}
        for tile in tiles:
            self.add(tile)

    def add(self, tile: Tile) -> None:
        for cell in footprint(tile):
            self._cells[cell] = tile

    def remove(self, tile: Tile) -> None:
        for cell in footprint(tile):
            # Only clear cells this exact tile still owns.
            if self._cells.get(cell) is tile:
                del self._cells[cell]

    def get(self, x: int, y: int) -> Tile | None:
        return self._cells.get((x, y))

    def rebuild(self, tiles: Iterable[Tile]) -> None:
        self._cells.clear()
        for tile in tiles:
            self.add(tile)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)
