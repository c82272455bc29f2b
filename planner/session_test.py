"""Tests for the interactive placement session."""

from planner.occupancy import footprint
from planner.session import PlacementSession
from planner.types import Tile


def _tile(x, y, size=1, tile_type="city", name=None):
    return Tile(x=x, y=y, size=size, type=tile_type, custom_name=name)


class TestSelectTool:
    def test_enters_placement_mode_centred(self):
        session = PlacementSession()
        preview = session.select_tool("city", 2, center=(10.0, 10.0))
        assert session.in_placement_mode
        assert preview is session.preview
        assert (preview.x, preview.y) == (9, 9)
        assert preview.size == 2
        assert preview.type == "city"

    def test_eraser_cancels(self):
        session = PlacementSession()
        session.select_tool("banner", 1)
        assert session.select_tool("eraser", 1) is None
        assert not session.in_placement_mode

    def test_fresh_preview_has_no_name(self):
        session = PlacementSession()
        assert session.select_tool("city", 2).custom_name is None
        placed = session.confirm()
        assert "customName" not in placed.to_dict()

    def test_switching_tool_keeps_preview_name(self):
        session = PlacementSession()
        session.select_tool("city", 2)
        session.rename_preview("Home")
        session.select_tool("headquarter", 3)
        assert session.preview.custom_name == "Home"
        assert session.preview.type == "headquarter"

    def test_odd_size_rounds_half_up(self):
        session = PlacementSession()
        preview = session.select_tool("bear_trap", 3, center=(0.0, 0.0))
        # 0 - 1.5 = -1.5 rounds to -1
        assert (preview.x, preview.y) == (-1, -1)


class TestMovePreview:
    def test_follows_centre(self):
        session = PlacementSession()
        session.select_tool("city", 2)
        session.move_preview(5.2, -3.9)
        assert (session.preview.x, session.preview.y) == (4, -5)

    def test_without_preview_only_records_centre(self):
        session = PlacementSession()
        session.move_preview(20.0, 20.0)
        assert session.preview is None
        preview = session.select_tool("city", 2)
        assert (preview.x, preview.y) == (19, 19)


class TestConfirm:
    def test_places_copy_and_leaves_placement_mode(self):
        session = PlacementSession()
        preview = session.select_tool("city", 2, center=(1.0, 1.0))
        placed = session.confirm()
        assert placed is not None
        assert placed is not preview
        assert (placed.x, placed.y, placed.size) == (0, 0, 2)
        assert session.tiles == [placed]
        assert not session.in_placement_mode
        for x, y in footprint(placed):
            assert session.tile_at(x, y) is placed

    def test_blocked_placement_rejected(self):
        existing = _tile(0, 0, size=2)
        session = PlacementSession([existing])
        session.select_tool("city", 1, center=(1.5, 1.5))
        assert not session.can_confirm
        assert session.confirm() is None
        assert session.in_placement_mode
        assert session.tiles == [existing]

    def test_confirm_without_preview(self):
        session = PlacementSession()
        assert not session.can_confirm
        assert session.confirm() is None

    def test_occupancy_updated_before_next_check(self):
        session = PlacementSession()
        session.select_tool("city", 1, center=(0.5, 0.5))
        session.confirm()
        session.select_tool("city", 1, center=(0.5, 0.5))
        assert not session.can_confirm


class TestPickUp:
    def test_pick_up_returns_tile_to_preview(self):
        a = _tile(0, 0, size=2, name="Keep")
        b = _tile(5, 5)
        session = PlacementSession([a, b])
        lifted = session.pick_up(1, 1)
        assert lifted is a
        assert session.tiles == [b]
        assert session.tile_at(0, 0) is None
        assert session.in_placement_mode
        assert session.preview is not a
        assert (session.preview.x, session.preview.y) == (0, 0)
        assert session.preview.custom_name == "Keep"

    def test_put_back_in_same_place(self):
        a = _tile(3, 3, size=2)
        session = PlacementSession([a])
        session.pick_up(3, 3)
        assert session.can_confirm
        placed = session.confirm()
        assert (placed.x, placed.y) == (3, 3)
        assert session.tile_at(4, 4) is placed

    def test_pick_up_then_move(self):
        session = PlacementSession([_tile(0, 0, size=2)])
        session.pick_up(0, 0)
        session.move_preview(11.0, 1.0)
        placed = session.confirm()
        assert (placed.x, placed.y) == (10, 0)
        assert session.tile_at(0, 0) is None

    def test_empty_cell(self):
        session = PlacementSession([_tile(0, 0)])
        assert session.pick_up(4, 4) is None
        assert not session.in_placement_mode

    def test_ignored_in_placement_mode(self):
        a = _tile(0, 0)
        session = PlacementSession([a])
        session.select_tool("banner", 1, center=(10.0, 10.0))
        assert session.pick_up(0, 0) is None
        assert session.tiles == [a]

    def test_removes_exact_instance(self):
        a = _tile(0, 0)
        twin = _tile(0, 0)
        session = PlacementSession([twin, a])
        # Index holds the later tile for the shared cell
        assert session.pick_up(0, 0) is a
        assert session.tiles == [twin]


def test_cancel_drops_preview():
    session = PlacementSession()
    session.select_tool("city", 2)
    session.cancel()
    assert session.preview is None
    assert session.tiles == []


def test_load_rebuilds_occupancy():
    session = PlacementSession([_tile(0, 0)])
    session.select_tool("city", 1)
    b = _tile(7, 7, size=3)
    session.load([b])
    assert session.tiles == [b]
    assert session.tile_at(0, 0) is None
    assert session.tile_at(9, 9) is b
    assert not session.in_placement_mode


def test_tiles_property_is_a_copy():
    session = PlacementSession([_tile(0, 0)])
    session.tiles.clear()
    assert len(session.tiles) == 1
