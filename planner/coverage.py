"""Tile ownership by territory zones.

A tile belongs to the zone that covers the most of its footprint, provided
that zone covers at least ``OWNERSHIP_THRESHOLD`` of it. Ties go to the
earlier zone in the list, so callers that colour by zone index must keep
the zone list order stable (``territory.compute_zones`` does).
"""

from __future__ import annotations

from collections.abc import Sequence

from .occupancy import footprint
from .territory import Zone
from .types import RGB, Coverage, Tile

OWNERSHIP_THRESHOLD = 0.75

ZONE_COLORS: list[RGB] = [
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (255, 0, 255),
    (0, 255, 255),
]

# Tile types that never get the "outside territory" marker
_UNMARKED_TYPES = frozenset({"bear_trap", "eraser"})


def coverage(tile: Tile, zones: Sequence[Zone]) -> Coverage:
    cells = list(footprint(tile))
    best_count = 0
    best_index: int | None = None
    for i, zone in enumerate(zones):
        count = sum(1 for c in cells if c in zone)
        if count > best_count:
            best_count = count
            best_index = i

    ratio = best_count / tile.area
    if best_index is not None and ratio >= OWNERSHIP_THRESHOLD:
        return Coverage(owned=True, zone_index=best_index, ratio=ratio)
    return Coverage(owned=False, zone_index=None, ratio=ratio)


def zone_color(index: int) -> RGB:
    return ZONE_COLORS[index % len(ZONE_COLORS)]


def shows_unowned_marker(
    tile: Tile, cov: Coverage, is_preview: bool = False
) -> bool:
    """True if a placed tile should be flagged as outside all territory."""
    return (
        not cov.owned and not is_preview and tile.type not in _UNMARKED_TYPES
    )
