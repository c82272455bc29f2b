#!/usr/bin/env python3
"""Print a territory and distance report for a saved configuration.

Reads an exported configuration JSON file (the format produced by
``ConfigurationStore.export``) and summarises it without any UI: banner
zones, tiles left outside territory, each city's distance to its bear trap,
and which name each city receives.

Usage (from the repository root):
    python scripts/layout_report.py layout.json
    python scripts/layout_report.py layout.json --trap 1  # trap #2
    python scripts/layout_report.py layout.json --union-find
"""

import argparse
import json
import sys
from pathlib import Path

# Add repo root to path so we can import planner
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from planner.snapshot import build_snapshot  # noqa: E402
from planner.types import Configuration  # noqa: E402


def _zone_extent(zone) -> str:
    xs = [c[0] for c in zone]
    ys = [c[1] for c in zone]
    return f"x {min(xs)}..{max(xs)}, y {min(ys)}..{max(ys)}"


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", help="Exported configuration JSON file")
    parser.add_argument(
        "--trap",
        type=int,
        default=None,
        help="Bear trap index to measure from (default: nearest)",
    )
    parser.add_argument(
        "--union-find",
        action="store_true",
        help="Merge zones with the disjoint-set strategy",
    )
    args = parser.parse_args()

    try:
        with open(args.path) as f:
            config = Configuration.from_dict(json.load(f))
    except (OSError, ValueError, KeyError) as e:
        print(f"Error: cannot read {args.path}: {e}", file=sys.stderr)
        sys.exit(1)

    snap = build_snapshot(
        config.placed_tiles,
        city_names=config.city_names,
        selection=args.trap,
        color_min=config.color_min,
        color_max=config.color_max,
        use_union_find=args.union_find,
    )

    print(f"Tiles: {len(config.placed_tiles)}")
    print(f"Zones: {len(snap.zones)}")
    for i, zone in enumerate(snap.zones):
        print(f"  zone {i}: {len(zone)} cells ({_zone_extent(zone)})")

    outside = [v for v in snap.tiles if v.unowned_marker]
    print(f"Outside territory: {len(outside)}")
    for v in outside:
        t = v.tile
        print(f"  {v.label} at ({t.x}, {t.y}) ratio {v.coverage.ratio:.2f}")

    cities = [v for v in snap.tiles if v.tile.type == "city"]
    if cities:
        print("Cities:")
    for v in cities:
        t = v.tile
        assigned = snap.assignments.get((t.x, t.y))
        name = assigned.name if assigned else "-"
        if v.trap_distance is None:
            dist = "no trap"
        else:
            dist = f"{v.trap_distance.distance:.2f} ({v.trap_label})"
        print(f"  ({t.x}, {t.y}) {name}: {dist}")


if __name__ == "__main__":
    main()
