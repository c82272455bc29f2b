"""Interactive placement state: placed tiles, occupancy, and the preview.

``PlacementSession`` is what a UI drives. It owns the list of placed tiles
and the matching ``OccupancyIndex`` and keeps them in step. The flow is:

  * **Select a tool** — enter placement mode with a preview tile of the
    chosen type and size. Selecting the eraser leaves placement mode.
  * **Move** — the preview follows a centre point (the camera centre, in
    grid units). Its origin is the centre minus half the size, rounded.
  * **Confirm** — if the preview fits, a copy of it is placed.
  * **Pick up** — clicking a placed tile outside placement mode removes it
    and turns it back into the preview, ready to be moved and re-confirmed.
  * **Cancel** — drop the preview and leave placement mode.

Every mutation of the tile list updates the index immediately, before any
following ``can_confirm`` query can observe it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .occupancy import OccupancyIndex, round_half_up
from .placement import can_place
from .types import Tile

logger = logging.getLogger(__name__)


class PlacementSession:
    def __init__(self, tiles: Iterable[Tile] = ()) -> None:
        self._tiles: list[Tile] = list(tiles)
        self._index = OccupancyIndex(self._tiles)
        self._preview: Tile | None = None
        self._center: tuple[float, float] = (0.0, 0.0)

    @property
    def tiles(self) -> list[Tile]:
        return list(self._tiles)

    @property
    def preview(self) -> Tile | None:
        return self._preview

    @property
    def in_placement_mode(self) -> bool:
        return self._preview is not None

    @property
    def index(self) -> OccupancyIndex:
        return self._index

    @property
    def can_confirm(self) -> bool:
        return can_place(self._index, self._preview)

    def tile_at(self, x: int, y: int) -> Tile | None:
        return self._index.get(x, y)

    def load(self, tiles: Iterable[Tile]) -> None:
        """Replace all placed tiles (e.g. after loading a configuration)."""
        self._tiles = list(tiles)
        self._index.rebuild(self._tiles)
        self._preview = None
        logger.debug("Loaded %d tiles", len(self._tiles))

    def select_tool(
        self,
        tile_type: str,
        size: int,
        center: tuple[float, float] | None = None,
    ) -> Tile | None:
        """Enter placement mode with a fresh preview; eraser cancels."""
        if center is not None:
            self._center = center
        if tile_type == "eraser":
            self.cancel()
            return None
        name = self._preview.custom_name if self._preview else None
        gx, gy = self._origin_for(size)
        self._preview = Tile(
            x=gx, y=gy, size=size, type=tile_type, custom_name=name
        )
        return self._preview

    def move_preview(self, center_x: float, center_y: float) -> None:
        self._center = (center_x, center_y)
        if self._preview is None:
            return
        self._preview.x, self._preview.y = self._origin_for(
            self._preview.size
        )

    def rename_preview(self, name: str) -> None:
        if self._preview is not None:
            self._preview.custom_name = name

    def confirm(self) -> Tile | None:
        """Place a copy of the preview if it fits; None otherwise."""
        if not self.can_confirm:
            return None
        assert self._preview is not None
        placed = self._preview.copy()
        self._tiles.append(placed)
        self._index.add(placed)
        logger.debug("Placed %r", placed)
        self.cancel()
        return placed

    def cancel(self) -> None:
        self._preview = None

    def pick_up(self, x: int, y: int) -> Tile | None:
        """Lift the tile covering cell (x, y) back into the preview.

        Ignored while already in placement mode. Returns the removed tile.
        """
        if self.in_placement_mode:
            return None
        tile = self._index.get(x, y)
        if tile is None or tile.type == "eraser":
            return None

        self._index.remove(tile)
        for i, t in enumerate(self._tiles):
            if t is tile:
                del self._tiles[i]
                break

        self._center = tile.center
        self._preview = tile.copy()
        logger.debug("Picked up %r", tile)
        return tile

    def _origin_for(self, size: int) -> tuple[int, int]:
        cx, cy = self._center
        half = size / 2
        return (round_half_up(cx - half), round_half_up(cy - half))
