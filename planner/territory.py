"""Banner territory zones.

Each banner claims the square of cells within Chebyshev distance
``BANNER_RADIUS`` of its origin cell. Banner size does not matter: a 1x1
and a 3x3 banner at the same origin claim the same square. Raw squares that
overlap or touch (including diagonally) belong to the same territory, so
they are merged transitively into zones.

Two merge strategies produce the same zones in the same order:

  * ``merge_zones`` — repeated pairwise passes, restarting after every
    merge until a full pass merges nothing. Quadratic in zone count, which
    is fine for interactive layouts (tens of banners).
  * ``merge_zones_union_find`` — disjoint-set over zone indices, unioned
    through a cell-to-zone map and each cell's 8-neighbourhood. Linear in
    total cell count.

Output order: a merged zone sits where the lowest-indexed input zone it
absorbed sat, so zone colours stay stable while banners are added after
existing ones.
"""

from __future__ import annotations

from collections.abc import Iterable

from .types import Cell, Tile

BANNER_RADIUS = 3

Zone = set[Cell]

_NEIGHBOURHOOD = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)]


def banner_zone(bx: int, by: int, radius: int = BANNER_RADIUS) -> Zone:
    """Square of cells within Chebyshev distance ``radius`` of (bx, by)."""
    return {
        (bx + dx, by + dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
    }


def _bounds(zone: Zone) -> tuple[int, int, int, int]:
    xs = [c[0] for c in zone]
    ys = [c[1] for c in zone]
    return min(xs), min(ys), max(xs), max(ys)


def zones_touch_or_overlap(a: Zone, b: Zone) -> bool:
    """True if ``a`` and ``b`` share a cell or have 8-adjacent cells."""
    if not a or not b:
        return False

    # Bounding-box early exit: boxes more than one cell apart can't touch
    a_x0, a_y0, a_x1, a_y1 = _bounds(a)
    b_x0, b_y0, b_x1, b_y1 = _bounds(b)
    if (
        a_x1 + 1 < b_x0
        or b_x1 + 1 < a_x0
        or a_y1 + 1 < b_y0
        or b_y1 + 1 < a_y0
    ):
        return False

    if not a.isdisjoint(b):
        return True

    small, large = (a, b) if len(a) <= len(b) else (b, a)
    for x, y in small:
        for dx, dy in _NEIGHBOURHOOD:
            if (x + dx, y + dy) in large:
                return True
    return False


def merge_zones(zones: Iterable[Zone]) -> list[Zone]:
    """Merge touching/overlapping zones by repeated pairwise passes.

    Input sets are copied, never mutated. Feeding the result back in
    returns an equal list.
    """
    merged = [set(z) for z in zones]
    changed = True
    while changed:
        changed = False
        for i in range(len(merged)):
            for j in range(i + 1, len(merged)):
                if zones_touch_or_overlap(merged[i], merged[j]):
                    merged[i] |= merged.pop(j)
                    changed = True
                    break
            if changed:
                break
    return merged


def merge_zones_union_find(zones: Iterable[Zone]) -> list[Zone]:
    """Same result as ``merge_zones``, via a cell-keyed disjoint-set."""
    zone_list = [set(z) for z in zones]
    parent = list(range(len(zone_list)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    def union(i: int, j: int) -> None:
        ri, rj = find(i), find(j)
        if ri == rj:
            return
        # Lower index stays root so groups sort by their first zone
        if ri < rj:
            parent[rj] = ri
        else:
            parent[ri] = rj

    owner: dict[Cell, int] = {}
    for i, zone in enumerate(zone_list):
        for cell in zone:
            j = owner.setdefault(cell, i)
            if j != i:
                union(i, j)

    for (x, y), i in owner.items():
        for dx, dy in _NEIGHBOURHOOD:
            j = owner.get((x + dx, y + dy))
            if j is not None and j != i:
                union(i, j)

    groups: dict[int, Zone] = {}
    for i, zone in enumerate(zone_list):
        groups.setdefault(find(i), set()).update(zone)
    return [groups[root] for root in sorted(groups)]


def compute_zones(
    tiles: Iterable[Tile],
    preview: Tile | None = None,
    radius: int = BANNER_RADIUS,
    use_union_find: bool = False,
) -> list[Zone]:
    """Compute merged banner zones for placed tiles plus an optional preview.

    The preview only contributes when it is a banner. Returns ``[]`` when
    there are no banners.
    """
    banners = [t for t in tiles if t.type == "banner"]
    if preview is not None and preview.type == "banner":
        banners.append(preview)
    if not banners:
        return []

    raw = [banner_zone(t.x, t.y, radius) for t in banners]
    if use_union_find:
        return merge_zones_union_find(raw)
    return merge_zones(raw)
