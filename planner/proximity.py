"""Distance from city tiles to bear traps, and the colours derived from it.

Distances are Euclidean between tile centres, in grid cells. The trap used
is either the nearest one (``selection=None``) or a specific index into the
bear-trap list. Anything that makes the distance unavailable (no traps, an
out-of-range index) yields ``None`` rather than an infinite or NaN
distance, so colour math downstream never sees one.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

from .occupancy import round_half_up
from .types import RGB, Tile, TrapDistance

NEAR_COLOR: RGB = (0, 255, 0)
FAR_COLOR: RGB = (255, 0, 0)

TILE_COLORS: dict[str, RGB] = {
    "bear_trap": (248, 136, 136),
    "headquarter": (136, 255, 255),
    "city": (136, 248, 136),
    "banner": (136, 136, 248),
    "resource": (255, 255, 136),
    "block": (204, 204, 204),
}
_FALLBACK_COLOR: RGB = (204, 204, 204)


def bear_traps(tiles: Iterable[Tile]) -> list[Tile]:
    return [t for t in tiles if t.type == "bear_trap"]


def trap_distances(tile: Tile, traps: Sequence[Tile]) -> np.ndarray:
    """Distances from ``tile``'s centre to every trap centre, in trap order."""
    centers = np.array([t.center for t in traps], dtype=np.float64)
    cx, cy = tile.center
    return np.hypot(centers[:, 0] - cx, centers[:, 1] - cy)


def nearest_trap(
    tile: Tile,
    traps: Sequence[Tile],
    selection: int | None = None,
) -> TrapDistance | None:
    """Distance to the nearest trap, or to ``traps[selection]``.

    Ties in nearest mode go to the earliest trap. Returns None when there
    are no traps or the selected index is out of range.
    """
    if not traps:
        return None

    if selection is not None:
        if not 0 <= selection < len(traps):
            return None
        tx, ty = traps[selection].center
        cx, cy = tile.center
        return TrapDistance(
            distance=math.hypot(tx - cx, ty - cy), trap_index=selection
        )

    dists = trap_distances(tile, traps)
    # argmin returns the first occurrence of the minimum
    idx = int(np.argmin(dists))
    return TrapDistance(distance=float(dists[idx]), trap_index=idx)


def trap_label(trap: Tile, index: int) -> str:
    return trap.custom_name or f"#{index + 1}"


def interpolate_color(
    min_color: RGB,
    max_color: RGB,
    lo: float,
    hi: float,
    t: float,
) -> RGB:
    """Linear blend from ``min_color`` at ``lo`` to ``max_color`` at ``hi``.

    ``t`` outside [lo, hi] clamps to the end colours. A degenerate range
    (``hi <= lo``) acts as a step at ``lo``.
    """
    if hi > lo:
        ratio = min(1.0, max(0.0, (t - lo) / (hi - lo)))
    else:
        ratio = 0.0 if t < lo else 1.0
    r, g, b = (
        round_half_up(lo_c + ratio * (hi_c - lo_c))
        for lo_c, hi_c in zip(min_color, max_color)
    )
    return (r, g, b)


def rgb_to_int(color: RGB) -> int:
    r, g, b = color
    return (r << 16) + (g << 8) + b


def city_color(
    tile: Tile,
    traps: Sequence[Tile],
    selection: int | None,
    color_min: float,
    color_max: float,
) -> RGB | None:
    """Near-to-far colour for a city, or None if no distance is available."""
    result = nearest_trap(tile, traps, selection)
    if result is None:
        return None
    return interpolate_color(
        NEAR_COLOR, FAR_COLOR, color_min, color_max, result.distance
    )


def fill_color(
    tile: Tile,
    traps: Sequence[Tile],
    selection: int | None,
    color_min: float,
    color_max: float,
) -> RGB:
    if tile.type == "city":
        color = city_color(tile, traps, selection, color_min, color_max)
        if color is not None:
            return color
    return TILE_COLORS.get(tile.type, _FALLBACK_COLOR)
