"""Unit tests for the draw-to-create gesture.

The designer fixture uses a 400 x 300 mm drawer (19 x 14 cells) drawn
at 20 pixels per cell, so pixel (5, 5) lies in cell (0, 0) and every
further 20 pixels is one cell.
"""

from drawerzen.application import LayoutDesigner
from drawerzen.domain import Drawer, GestureOutcome, LayoutConfig, PlacementErrorKind


class TestDrawStart:
    """Tests for starting a drawing gesture."""

    def test_pointer_down_inside_grid(self, designer: LayoutDesigner) -> None:
        assert designer.draw.pointer_down(5.0, 5.0)
        assert designer.draw.is_drawing

    def test_pointer_down_outside_grid(self, designer: LayoutDesigner) -> None:
        assert not designer.draw.pointer_down(385.0, 5.0)
        assert not designer.draw.pointer_down(-5.0, 5.0)
        assert designer.tracker.is_idle

    def test_pointer_down_without_scale(self, designer: LayoutDesigner) -> None:
        designer.cell_pixel_size = 0.0
        assert not designer.draw.pointer_down(5.0, 5.0)

    def test_idle_move_and_up_are_ignored(self, designer: LayoutDesigner) -> None:
        assert designer.draw.pointer_move(25.0, 25.0) is None
        assert designer.draw.pointer_up() is None


class TestDrawPreview:
    """Tests for the live preview."""

    def test_preview_rectangle(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        preview = designer.draw.pointer_move(25.0, 5.0)

        assert preview is not None
        assert (preview.left, preview.top) == (0.0, 0.0)
        assert (preview.width, preview.height) == (40.0, 20.0)
        assert not preview.has_error

    def test_single_cell_preview_is_size_invalid(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        preview = designer.draw.pointer_move(5.0, 5.0)
        assert preview.error_kind == PlacementErrorKind.SIZE_INVALID

    def test_collision_preview(self, designer: LayoutDesigner, make_bin) -> None:
        designer.add_bin(make_bin(0, 0, 4, 4))
        designer.draw.pointer_down(45.0, 45.0)
        preview = designer.draw.pointer_move(105.0, 105.0)
        assert preview.error_kind == PlacementErrorKind.COLLISION

    def test_size_reported_before_collision(
        self, designer: LayoutDesigner, make_bin
    ) -> None:
        designer.add_bin(make_bin(0, 0, 4, 4))
        designer.draw.pointer_down(25.0, 25.0)
        preview = designer.draw.pointer_move(25.0, 25.0)
        assert preview.error_kind == PlacementErrorKind.SIZE_INVALID

    def test_preview_is_clamped_to_grid(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        preview = designer.draw.pointer_move(1000.0, 1000.0)

        assert (preview.width, preview.height) == (380.0, 280.0)
        assert not preview.has_error

    def test_preview_does_not_mutate(self, designer: LayoutDesigner, undo_hook) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        designer.draw.pointer_move(65.0, 65.0)

        assert designer.bins == ()
        assert undo_hook.snapshots == []


class TestDrawCommit:
    """Tests for finishing a drawing gesture."""

    def test_single_cell_is_cancelled(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        result = designer.draw.pointer_up()

        assert result.outcome == GestureOutcome.CANCELLED
        assert result.error_kind == PlacementErrorKind.SIZE_INVALID
        assert designer.bins == ()
        assert designer.tracker.is_idle

    def test_two_cell_bin_is_committed(
        self, designer: LayoutDesigner, undo_hook
    ) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        designer.draw.pointer_move(25.0, 5.0)
        result = designer.draw.pointer_up()

        assert result.outcome == GestureOutcome.COMMITTED
        assert result.mutated
        created = result.bin
        assert created.id == "new-1"
        assert (created.x, created.y) == (0.0, 0.0)
        assert (created.width, created.length) == (42.0, 21.0)
        assert created.name == "Custom 42x21mm"
        assert created.color == "#F5E6C8"
        assert created.colorway == "cream"
        assert created.height == 21.0
        assert designer.bins == (created,)
        assert undo_hook.snapshots == [()]

    def test_reverse_drag_is_normalized(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(65.0, 65.0)
        designer.draw.pointer_move(5.0, 5.0)
        created = designer.draw.pointer_up().bin

        assert (created.x, created.y) == (0.0, 0.0)
        assert (created.width, created.length) == (84.0, 84.0)
        assert created.name == "Custom 84x84mm"

    def test_full_grid_bin(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        designer.draw.pointer_move(1000.0, 1000.0)
        created = designer.draw.pointer_up().bin

        assert (created.width, created.length) == (399.0, 294.0)

    def test_collision_is_cancelled(self, designer: LayoutDesigner, make_bin) -> None:
        existing = make_bin(0, 0, 4, 4)
        designer.add_bin(existing)
        designer.draw.pointer_down(45.0, 45.0)
        designer.draw.pointer_move(105.0, 105.0)
        result = designer.draw.pointer_up()

        assert result.outcome == GestureOutcome.CANCELLED
        assert result.error_kind == PlacementErrorKind.COLLISION
        assert designer.bins == (existing,)

    def test_cancel(self, designer: LayoutDesigner) -> None:
        designer.draw.pointer_down(5.0, 5.0)
        designer.draw.pointer_move(65.0, 65.0)
        designer.draw.cancel()

        assert designer.tracker.is_idle
        assert designer.draw.preview is None
        assert designer.bins == ()


    def test_drawn_bin_uses_configured_colorway(self, drawer: Drawer, id_factory) -> None:
        designer = LayoutDesigner(
            drawer, config=LayoutConfig(default_colorway="blue"), id_factory=id_factory
        )
        designer.draw.pointer_down(5.0, 5.0)
        designer.draw.pointer_move(25.0, 5.0)
        created = designer.draw.pointer_up().bin

        assert created.colorway == "blue"
        assert created.color == "#1A237E"

class TestDrawExclusion:
    """Drawing and dragging share one gesture slot."""

    def test_cannot_draw_while_dragging(
        self, designer: LayoutDesigner, make_bin
    ) -> None:
        b = make_bin(0, 0, 2, 2)
        designer.add_bin(b)
        assert designer.drag.start_bin_drag(b.id)

        assert not designer.draw.pointer_down(105.0, 105.0)
        assert designer.drag.is_dragging
