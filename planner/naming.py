"""City name assignment by distance to the bear trap, plus name search.

Names from the user's list are handed out to city tiles nearest-first:
the closest city to the bear trap gets the first name, and so on. Cities
beyond the end of the list stay unnamed; surplus names go unused.

``CityNameAssigner`` memoises its last result keyed only on the bear-trap
position. Adding, moving or removing cities, or editing the name list,
does not invalidate it; only a different trap position (or an explicit
``invalidate()``) does.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .types import Cell, NameAssignment, Position, Tile

Assignments = dict[Cell, NameAssignment]


class CityNameAssigner:
    def __init__(self) -> None:
        self._cached_position: Position | None = None
        self._cached: Assignments | None = None

    def assign_names(
        self,
        tiles: Iterable[Tile],
        names: Sequence[str],
        bear_trap_position: Position | None,
    ) -> Assignments:
        if bear_trap_position is None:
            return {}
        if self._cached is not None and (
            self._cached_position == bear_trap_position
        ):
            return dict(self._cached)

        px, py = bear_trap_position.x, bear_trap_position.y

        def dist(city: Tile) -> float:
            cx, cy = city.center
            return math.hypot(cx - px, cy - py)

        cities = sorted((t for t in tiles if t.type == "city"), key=dist)
        assignments: Assignments = {}
        for city, name in zip(cities, names):
            assignments[(city.x, city.y)] = NameAssignment(
                name=name, position=Position(city.x, city.y)
            )

        self._cached_position = bear_trap_position
        self._cached = assignments
        return dict(assignments)

    def invalidate(self) -> None:
        self._cached_position = None
        self._cached = None


def bear_trap_position(tiles: Iterable[Tile]) -> Position | None:
    """Centre of the first bear trap in ``tiles``, or None."""
    for t in tiles:
        if t.type == "bear_trap":
            cx, cy = t.center
            return Position(cx, cy)
    return None


def parse_city_names(text: str) -> list[str]:
    """One name per line; surrounding whitespace and blank lines dropped."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def search_assignments(
    assignments: Assignments, query: str
) -> list[NameAssignment]:
    """Case-insensitive substring search over assigned names."""
    q = query.lower()
    return [a for a in assignments.values() if q in a.name.lower()]
