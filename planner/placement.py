"""Placement legality for candidate tiles.

A candidate is placeable when none of its footprint cells is occupied.
There is no table boundary here (the grid is unbounded), so the whole
check reduces to occupancy lookups.

Moving a tile means removing it from the index first: ``can_place`` has no
notion of "ignore myself", so a tile still registered at its old location
would collide with its own footprint.
"""

from __future__ import annotations

from .occupancy import OccupancyIndex, footprint
from .types import Tile


def can_place(index: OccupancyIndex, candidate: Tile | None) -> bool:
    """True if every cell of ``candidate`` is free. ``None`` is never valid."""
    if candidate is None:
        return False
    for cell in footprint(candidate):
        if cell in index:
            return False
    return True
