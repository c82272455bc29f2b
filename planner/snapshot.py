"""Per-update view of a layout for a renderer to draw from.

``build_snapshot`` runs the whole pipeline once: zones from banners (with
the preview banner included), coverage per tile, trap distances and fill
colours for cities, and name assignments. A renderer pulls one snapshot per
visual update and draws it; nothing here knows about pixels or cameras.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .coverage import coverage, shows_unowned_marker, zone_color
from .naming import Assignments, CityNameAssigner, bear_trap_position
from .proximity import bear_traps, fill_color, nearest_trap, trap_label
from .territory import Zone, compute_zones
from .types import (
    DEFAULT_COLOR_SCALE_MAX,
    DEFAULT_COLOR_SCALE_MIN,
    RGB,
    Coverage,
    Tile,
    TrapDistance,
)


@dataclass
class TileView:
    tile: Tile
    coverage: Coverage
    fill: RGB
    label: str
    is_preview: bool = False
    zone_color: RGB | None = None
    trap_distance: TrapDistance | None = None
    trap_label: str | None = None
    unowned_marker: bool = False


@dataclass
class LayoutSnapshot:
    zones: list[Zone] = field(default_factory=list)
    tiles: list[TileView] = field(default_factory=list)
    preview: TileView | None = None
    assignments: Assignments = field(default_factory=dict)


def _view(
    tile: Tile,
    is_preview: bool,
    zones: list[Zone],
    traps: list[Tile],
    selection: int | None,
    color_min: float,
    color_max: float,
) -> TileView:
    cov = coverage(tile, zones)
    view = TileView(
        tile=tile,
        coverage=cov,
        fill=fill_color(tile, traps, selection, color_min, color_max),
        label=tile.custom_name or tile.type,
        is_preview=is_preview,
        zone_color=(
            zone_color(cov.zone_index) if cov.zone_index is not None else None
        ),
        unowned_marker=shows_unowned_marker(tile, cov, is_preview),
    )
    if tile.type == "city":
        dist = nearest_trap(tile, traps, selection)
        if dist is not None:
            view.trap_distance = dist
            view.trap_label = trap_label(
                traps[dist.trap_index], dist.trap_index
            )
    return view


def build_snapshot(
    tiles: Sequence[Tile],
    *,
    preview: Tile | None = None,
    city_names: Sequence[str] = (),
    selection: int | None = None,
    color_min: float = DEFAULT_COLOR_SCALE_MIN,
    color_max: float = DEFAULT_COLOR_SCALE_MAX,
    assigner: CityNameAssigner | None = None,
    use_union_find: bool = False,
) -> LayoutSnapshot:
    """Compute everything a renderer needs for one frame.

    Pass a long-lived ``assigner`` to reuse its name cache across frames;
    without one, names are recomputed every call.
    """
    zones = compute_zones(tiles, preview, use_union_find=use_union_find)
    traps = bear_traps(tiles)

    if assigner is None:
        assigner = CityNameAssigner()
    assignments = assigner.assign_names(
        tiles, city_names, bear_trap_position(tiles)
    )

    return LayoutSnapshot(
        zones=zones,
        tiles=[
            _view(t, False, zones, traps, selection, color_min, color_max)
            for t in tiles
        ],
        preview=(
            _view(preview, True, zones, traps, selection, color_min, color_max)
            if preview is not None
            else None
        ),
        assignments=assignments,
    )
