"""Tests for the occupancy index and placement validation."""

from planner.occupancy import (
    OccupancyIndex,
    cell_key,
    footprint,
    round_half_up,
)
from planner.placement import can_place
from planner.types import Tile


def _tile(x, y, size=1, tile_type="city"):
    return Tile(x=x, y=y, size=size, type=tile_type)


class TestFootprint:
    def test_single_cell(self):
        assert list(footprint(_tile(3, -2))) == [(3, -2)]

    def test_two_by_two(self):
        cells = set(footprint(_tile(0, 0, size=2)))
        assert cells == {(0, 0), (0, 1), (1, 0), (1, 1)}

    def test_cell_count_is_area(self):
        assert len(list(footprint(_tile(-5, 7, size=3)))) == 9

    def test_cell_key_is_pair(self):
        assert cell_key(4, -1) == (4, -1)


class TestOccupancyIndex:
    def test_add_maps_every_cell_to_tile(self):
        idx = OccupancyIndex()
        a = _tile(0, 0, size=2)
        idx.add(a)
        for x, y in footprint(a):
            assert idx.get(x, y) is a
        assert len(idx) == 4

    def test_get_empty_cell(self):
        idx = OccupancyIndex()
        idx.add(_tile(0, 0, size=2))
        assert idx.get(2, 0) is None
        assert idx.get(-1, -1) is None

    def test_remove_clears_footprint(self):
        idx = OccupancyIndex()
        a = _tile(0, 0, size=3)
        idx.add(a)
        idx.remove(a)
        assert len(idx) == 0
        assert idx.get(1, 1) is None

    def test_remove_leaves_other_tiles(self):
        idx = OccupancyIndex()
        a = _tile(0, 0, size=2)
        b = _tile(2, 0, size=2)
        idx.add(a)
        idx.add(b)
        idx.remove(a)
        assert idx.get(0, 0) is None
        assert idx.get(2, 0) is b
        assert idx.get(3, 1) is b

    def test_remove_does_not_clear_later_overlapping_tile(self):
        """Cells overwritten by a later tile survive removal of the old one."""
        idx = OccupancyIndex()
        old = _tile(0, 0, size=2)
        new = _tile(1, 1, size=2)
        idx.add(old)
        idx.add(new)  # overwrites (1, 1)
        idx.remove(old)
        assert idx.get(0, 0) is None
        assert idx.get(1, 0) is None
        assert idx.get(1, 1) is new
        assert idx.get(2, 2) is new

    def test_remove_equal_but_distinct_tile_is_noop(self):
        idx = OccupancyIndex()
        a = _tile(0, 0, size=2)
        twin = _tile(0, 0, size=2)
        idx.add(a)
        idx.remove(twin)
        assert idx.get(0, 0) is a
        assert len(idx) == 4

    def test_rebuild_replaces_contents(self):
        idx = OccupancyIndex([_tile(10, 10)])
        a = _tile(0, 0, size=2)
        b = _tile(5, 5)
        idx.rebuild([a, b])
        assert idx.get(10, 10) is None
        assert idx.get(1, 1) is a
        assert idx.get(5, 5) is b
        assert len(idx) == 5

    def test_contains(self):
        idx = OccupancyIndex([_tile(0, 0, size=2)])
        assert (1, 0) in idx
        assert (2, 0) not in idx

    def test_invariant_over_operation_sequence(self):
        """After a mix of adds/removes, every placed cell maps to its tile."""
        idx = OccupancyIndex()
        placed = []
        for i in range(6):
            t = _tile(i * 3, (i % 2) * 3, size=1 + i % 3)
            idx.add(t)
            placed.append(t)
        for t in placed[::2]:
            idx.remove(t)
        remaining = placed[1::2]
        for t in remaining:
            for x, y in footprint(t):
                assert idx.get(x, y) is t
        assert len(idx) == sum(t.area for t in remaining)


class TestCanPlace:
    def test_example_overlap_and_disjoint(self):
        idx = OccupancyIndex()
        idx.add(_tile(0, 0, size=2))
        assert can_place(idx, _tile(1, 1)) is False
        assert can_place(idx, _tile(2, 0)) is True

    def test_none_candidate_is_invalid(self):
        assert can_place(OccupancyIndex(), None) is False

    def test_empty_index_accepts_anything(self):
        assert can_place(OccupancyIndex(), _tile(-100, 100, size=5))

    def test_partial_overlap_of_large_candidate(self):
        idx = OccupancyIndex([_tile(4, 4)])
        assert not can_place(idx, _tile(0, 0, size=5))
        assert can_place(idx, _tile(0, 0, size=4))

    def test_does_not_mutate_index(self):
        idx = OccupancyIndex([_tile(0, 0)])
        can_place(idx, _tile(1, 0))
        assert len(idx) == 1

    def test_replacing_at_same_spot_requires_remove_first(self):
        idx = OccupancyIndex()
        a = _tile(0, 0, size=2)
        idx.add(a)
        assert not can_place(idx, a)
        idx.remove(a)
        assert can_place(idx, a)


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_non_halves(self):
        assert round_half_up(1.4) == 1
        assert round_half_up(-1.6) == -2
