"""Data types matching the saved bear-planner configuration JSON schema."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

TILE_TYPES = frozenset(
    {
        "bear_trap",
        "headquarter",
        "city",
        "banner",
        "resource",
        "eraser",
        "block",
    }
)

DEFAULT_COLOR_SCALE_MIN = 2
DEFAULT_COLOR_SCALE_MAX = 6

Cell = tuple[int, int]
RGB = tuple[int, int, int]


def _is_number(v: object) -> bool:
    # bool is an int subclass but never a valid coordinate or bound
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _whole_number(d: dict, key: str) -> int:
    v = d[key]
    if not _is_number(v) or (isinstance(v, float) and not v.is_integer()):
        raise ValueError(f"{key} must be a whole number, got {v!r}")
    return int(v)


def _color_bound(d: dict, key: str, default: float) -> float:
    v = d.get(key)
    if v is None:
        return default
    if not _is_number(v):
        raise ValueError(f"{key} must be a number, got {v!r}")
    return v


@dataclass(eq=False)
class Tile:
    """A square tile anchored at grid cell (x, y).

    Equality is identity: two tiles with the same fields are still two
    different tiles, which is what occupancy bookkeeping relies on.
    """

    x: int
    y: int
    size: int
    type: str
    custom_name: str | None = None

    def __post_init__(self) -> None:
        if self.type not in TILE_TYPES:
            raise ValueError(f"Unknown tile type: {self.type!r}")
        if self.size < 1:
            raise ValueError(f"Tile size must be >= 1, got {self.size}")

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.size / 2, self.y + self.size / 2)

    @property
    def area(self) -> int:
        return self.size * self.size

    def copy(self) -> Tile:
        return Tile(
            x=self.x,
            y=self.y,
            size=self.size,
            type=self.type,
            custom_name=self.custom_name,
        )

    @staticmethod
    def from_dict(d: dict) -> Tile:
        """Build a tile from its saved dict form.

        Raises KeyError for a missing field and ValueError for a field of
        the wrong kind; coordinates and size must be whole numbers.
        """
        if not isinstance(d, dict):
            raise ValueError(f"Tile must be an object, got {d!r}")
        name = d.get("customName")
        if name is not None and not isinstance(name, str):
            raise ValueError(f"customName must be a string, got {name!r}")
        return Tile(
            x=_whole_number(d, "x"),
            y=_whole_number(d, "y"),
            size=_whole_number(d, "size"),
            type=d["type"],
            custom_name=name,
        )

    def to_dict(self) -> dict:
        d: dict = {
            "x": self.x,
            "y": self.y,
            "type": self.type,
            "size": self.size,
        }
        if self.custom_name is not None:
            d["customName"] = self.custom_name
        return d

    def __repr__(self) -> str:
        return f"Tile({self.type} @ {self.x},{self.y} size={self.size})"


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    @staticmethod
    def from_dict(d: dict) -> Position:
        return Position(x=d["x"], y=d["y"])

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Coverage:
    owned: bool
    zone_index: int | None = None
    ratio: float = 0.0


@dataclass(frozen=True)
class TrapDistance:
    distance: float
    trap_index: int


@dataclass(frozen=True)
class NameAssignment:
    name: str
    position: Position


@dataclass
class Configuration:
    placed_tiles: list[Tile] = field(default_factory=list)
    city_names: list[str] = field(default_factory=list)
    color_min: float = DEFAULT_COLOR_SCALE_MIN
    color_max: float = DEFAULT_COLOR_SCALE_MAX

    @staticmethod
    def from_dict(d: dict) -> Configuration:
        """Build a configuration from its saved dict form.

        Older saves stored ``placedTiles`` as a JSON-encoded string; that
        form is decoded here. Missing colour bounds fall back to defaults.
        Raises ValueError if the tile list is not a list, if city names
        are not a list of strings, or if a colour bound is not a number;
        tile errors propagate from ``Tile.from_dict``.
        """
        raw_tiles = d.get("placedTiles", [])
        if isinstance(raw_tiles, str):
            raw_tiles = json.loads(raw_tiles)
        if not isinstance(raw_tiles, list):
            raise ValueError(
                f"placedTiles must be a list, got {type(raw_tiles).__name__}"
            )
        names = d.get("cityNames") or []
        if not isinstance(names, list) or not all(
            isinstance(n, str) for n in names
        ):
            raise ValueError(
                f"cityNames must be a list of strings, got {names!r}"
            )
        return Configuration(
            placed_tiles=[Tile.from_dict(t) for t in raw_tiles],
            city_names=list(names),
            color_min=_color_bound(d, "colorMin", DEFAULT_COLOR_SCALE_MIN),
            color_max=_color_bound(d, "colorMax", DEFAULT_COLOR_SCALE_MAX),
        )

    def to_dict(self) -> dict:
        return {
            "placedTiles": [t.to_dict() for t in self.placed_tiles],
            "cityNames": list(self.city_names),
            "colorMin": self.color_min,
            "colorMax": self.color_max,
        }
