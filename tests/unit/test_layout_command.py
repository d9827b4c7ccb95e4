"""Unit tests for layout issue detection and the layout use cases."""

from drawerzen.application import LayoutCommand, LayoutDesigner, find_layout_issues
from drawerzen.domain import (
    Bin,
    BinConstraints,
    CatalogEntry,
    CatalogSize,
    Drawer,
    GestureOutcome,
    GridSpec,
    LayoutConfig,
    PlacementErrorKind,
)


class TestFindLayoutIssues:
    """Tests for find_layout_issues."""

    def test_consistent_layout(self, make_bin, grid: GridSpec) -> None:
        bins = [make_bin(0, 0, 4, 4), make_bin(4, 0, 2, 2)]
        assert find_layout_issues(bins, grid) == []

    def test_collision_reported_once(self, grid: GridSpec) -> None:
        a = Bin(id="a", x=0.0, y=0.0, width=84.0, length=84.0)
        b = Bin(id="b", x=42.0, y=42.0, width=84.0, length=84.0)
        issues = find_layout_issues([a, b], grid)

        assert len(issues) == 1
        assert issues[0].bin_id == "b"
        assert issues[0].other_id == "a"
        assert issues[0].error_kind == PlacementErrorKind.COLLISION
        assert "overlaps" in issues[0].message

    def test_out_of_bounds(self, grid: GridSpec) -> None:
        wide = Bin(id="wide", x=0.0, y=0.0, width=420.0, length=42.0)
        issues = find_layout_issues([wide], grid)
        assert [i.error_kind for i in issues] == [PlacementErrorKind.OUT_OF_BOUNDS]

    def test_size_invalid(self, grid: GridSpec) -> None:
        tiny = Bin(id="tiny", x=0.0, y=0.0, width=21.0, length=21.0)
        issues = find_layout_issues([tiny], grid)
        assert [i.error_kind for i in issues] == [PlacementErrorKind.SIZE_INVALID]

    def test_catalog_bin_keeps_entry_size(self, grid: GridSpec) -> None:
        eraser = Bin(
            id="eraser", x=0.0, y=0.0, width=21.0, length=21.0, original_id="cat-tiny"
        )
        assert find_layout_issues([eraser], grid) == []

    def test_duplicate_id(self, grid: GridSpec) -> None:
        first = Bin(id="same", x=0.0, y=0.0, width=42.0, length=42.0)
        second = Bin(id="same", x=105.0, y=0.0, width=42.0, length=42.0)
        issues = find_layout_issues([first, second], grid)

        assert len(issues) == 1
        assert "more than once" in issues[0].message


class TestLayoutCommand:
    """Tests for LayoutCommand."""

    def test_validate_reports_issues(self, drawer: Drawer) -> None:
        a = Bin(id="a", x=0.0, y=0.0, width=84.0, length=84.0)
        b = Bin(id="b", x=42.0, y=42.0, width=84.0, length=84.0)
        output = LayoutCommand().validate(drawer, [a, b])

        assert not output.is_valid
        assert output.bins == (a, b)
        assert output.summary.bin_count == 2

    def test_validate_valid_layout(self, drawer: Drawer, catalog) -> None:
        placed = Bin(
            id="a", x=0.0, y=0.0, width=84.0, length=42.0, original_id="cat-a"
        )
        output = LayoutCommand().validate(drawer, [placed], catalog)

        assert output.is_valid
        assert [e.id for e in output.available_entries] == ["cat-b"]

    def test_sort_resolves_collisions(self, drawer: Drawer) -> None:
        a = Bin(id="a", x=0.0, y=0.0, width=84.0, length=84.0)
        b = Bin(id="b", x=42.0, y=42.0, width=84.0, length=84.0)
        output = LayoutCommand().sort(drawer, [a, b])

        assert output.is_valid
        assert [(x.id, x.x, x.y) for x in output.bins] == [
            ("a", 0.0, 0.0),
            ("b", 84.0, 0.0),
        ]
        assert output.unplaced_bins == ()

    def test_sort_reports_unplaced(self) -> None:
        drawer = Drawer(width=126.0, length=84.0)
        a = Bin(id="a", x=0.0, y=0.0, width=84.0, length=84.0)
        b = Bin(id="b", x=0.0, y=0.0, width=84.0, length=84.0, name="Extra")
        output = LayoutCommand().sort(drawer, [a, b])

        assert [x.id for x in output.unplaced_bins] == ["b"]
        assert [e.id for e in output.available_entries] == ["b"]

    def test_fill_refuses_invalid_layout(self, drawer: Drawer, id_factory) -> None:
        a = Bin(id="a", x=0.0, y=0.0, width=84.0, length=84.0)
        b = Bin(id="b", x=42.0, y=42.0, width=84.0, length=84.0)
        output = LayoutCommand(id_factory=id_factory).fill(drawer, [a, b])

        assert not output.is_valid
        assert output.created_bins == ()
        assert output.bins == (a, b)

    def test_fill_creates_bins(self, id_factory) -> None:
        drawer = Drawer(width=126.0, length=84.0)
        sizes = [CatalogSize(84.0, 84.0), CatalogSize(63.0, 63.0), CatalogSize(42.0, 42.0)]
        output = LayoutCommand(id_factory=id_factory).fill(drawer, [], catalog_sizes=sizes)

        assert output.is_valid
        assert [b.id for b in output.created_bins] == ["new-1", "new-2", "new-3"]
        assert output.bins == output.created_bins
        assert output.summary.fill_percentage == 100.0

    def test_fill_uses_configured_sizes(self, id_factory) -> None:
        drawer = Drawer(width=126.0, length=84.0)
        config = LayoutConfig(catalog_sizes=(CatalogSize(42.0, 42.0),))
        output = LayoutCommand(config, id_factory).fill(drawer, [])

        assert len(output.created_bins) == 6
        assert {(b.width, b.length) for b in output.created_bins} == {(42.0, 42.0)}

    def test_fill_respects_custom_constraints(self, id_factory) -> None:
        config = LayoutConfig(constraints=BinConstraints(min_length=42.0))
        drawer = Drawer(width=126.0, length=105.0)
        output = LayoutCommand(config, id_factory).fill(drawer, [])

        assert output.is_valid
        assert len(output.created_bins) == 3
        assert all(b.length >= 42.0 for b in output.created_bins)

    def test_fill_accepts_dropped_catalog_bin(self, drawer: Drawer, id_factory) -> None:
        eraser = CatalogEntry(
            id="cat-tiny", label="Eraser", width=21.0, length=21.0, color="#EF9A9A"
        )
        designer = LayoutDesigner(drawer, [eraser], id_factory=id_factory)
        designer.drag.start_catalog_drag("cat-tiny")
        assert designer.drag.drop_on_grid(105.0, 105.0).outcome == GestureOutcome.DROPPED

        output = LayoutCommand().fill(drawer, designer.bins)

        assert output.is_valid
        assert output.created_bins
        assert designer.bins[0] in output.bins
