"""Unit tests for auto-sort, gap detection and gap fill.

These tests verify:
- Auto-sort conserves every bin, preserves ids and is idempotent
- Gaps are maximal, ordered by area then position, and filtered by size
- Gap fill is deterministic, never overlaps and always terminates
"""

import itertools
import logging

import pytest

from drawerzen.domain import (
    AutoPackingEngine,
    Bin,
    BinConstraints,
    CatalogSize,
    Gap,
    GridSpec,
    LayoutConfig,
)
from drawerzen.domain.services import (
    auto_sort,
    find_gaps,
    generate_bins,
    is_valid_placement,
    rectangles_overlap,
)

SIZES = [
    CatalogSize(width=84.0, length=84.0),
    CatalogSize(width=63.0, length=63.0),
    CatalogSize(width=42.0, length=42.0),
]


@pytest.fixture
def engine(id_factory) -> AutoPackingEngine:
    return AutoPackingEngine(id_factory=id_factory)


def _positions(bins) -> list[tuple[float, float, float, float]]:
    return [(b.x, b.y, b.width, b.length) for b in bins]


class TestAutoSort:
    """Tests for AutoPackingEngine.auto_sort."""

    def test_first_fit_decreasing(self, engine: AutoPackingEngine, make_bin) -> None:
        small = make_bin(5, 0, 2, 2)
        large = make_bin(0, 2, 4, 4)
        result = engine.auto_sort([small, large], 6, 4)

        assert [b.id for b in result.placed_bins] == [large.id, small.id]
        assert _positions(result.placed_bins) == [
            (0.0, 0.0, 84.0, 84.0),
            (84.0, 0.0, 42.0, 42.0),
        ]
        assert result.unplaced_bins == ()

    def test_bins_that_do_not_fit_are_reported(
        self, engine: AutoPackingEngine, make_bin
    ) -> None:
        a = make_bin(0, 0, 2, 2)
        b = make_bin(0, 0, 4, 4)
        c = make_bin(2, 0, 4, 4)
        result = engine.auto_sort([a, b, c], 6, 4)

        assert [x.id for x in result.placed_bins] == [b.id, a.id]
        assert [x.id for x in result.unplaced_bins] == [c.id]
        assert result.total == 3

    def test_equal_area_wider_first(self, engine: AutoPackingEngine, make_bin) -> None:
        tall = make_bin(0, 0, 2, 4)
        wide = make_bin(2, 0, 4, 2)
        result = engine.auto_sort([tall, wide], 6, 4)
        assert [b.id for b in result.placed_bins] == [wide.id, tall.id]

    def test_ties_keep_input_order(self, engine: AutoPackingEngine, make_bin) -> None:
        first = make_bin(4, 0, 2, 2)
        second = make_bin(0, 0, 2, 2)
        result = engine.auto_sort([first, second], 6, 4)

        assert result.placed_bins[0].id == first.id
        assert (result.placed_bins[0].x, result.placed_bins[0].y) == (0.0, 0.0)

    def test_conservation_and_identity(self, engine: AutoPackingEngine, make_bin) -> None:
        bins = [make_bin(0, 0, w, l) for w, l in [(4, 4), (3, 2), (2, 2), (5, 1), (4, 4)]]
        result = engine.auto_sort(bins, 8, 6)

        assert result.total == len(bins)
        assert sorted(b.id for b in result.placed_bins + result.unplaced_bins) == sorted(
            b.id for b in bins
        )
        originals = {b.id: b for b in bins}
        for placed in result.placed_bins:
            assert (placed.width, placed.length) == (
                originals[placed.id].width,
                originals[placed.id].length,
            )

    def test_result_is_valid_layout(self, engine: AutoPackingEngine, make_bin) -> None:
        bins = [make_bin(0, 0, w, l) for w, l in [(4, 4), (3, 2), (2, 2), (5, 1)]]
        result = engine.auto_sort(bins, 8, 6)
        grid = GridSpec(cols=8, rows=6)

        placed = list(result.placed_bins)
        for index, b in enumerate(placed):
            assert is_valid_placement(b, placed[:index], grid)

    def test_idempotent(self, engine: AutoPackingEngine, make_bin) -> None:
        bins = [make_bin(0, 0, w, l) for w, l in [(2, 2), (4, 4), (3, 1), (4, 2)]]
        once = engine.auto_sort(bins, 8, 6)
        twice = engine.auto_sort(list(once.placed_bins), 8, 6)

        assert twice.placed_bins == once.placed_bins
        assert twice.unplaced_bins == ()

    def test_input_is_not_mutated(self, engine: AutoPackingEngine, make_bin) -> None:
        bins = [make_bin(3, 1, 2, 2)]
        engine.auto_sort(bins, 6, 4)
        assert (bins[0].x, bins[0].y) == (63.0, 21.0)

    def test_empty_input(self, engine: AutoPackingEngine) -> None:
        result = engine.auto_sort([], 6, 4)
        assert result.placed_bins == ()
        assert result.unplaced_bins == ()


class TestFindGaps:
    """Tests for AutoPackingEngine.find_gaps."""

    def test_empty_grid_is_one_gap(self, engine: AutoPackingEngine) -> None:
        assert engine.find_gaps(6, 4, []) == [Gap(x=0, y=0, width=6, length=4)]

    def test_maximal_rectangles_around_a_bin(
        self, engine: AutoPackingEngine, make_bin
    ) -> None:
        """A single occupied cell leaves four maximal rectangles."""
        gaps = engine.find_gaps(4, 3, [make_bin(1, 1, 1, 1)])

        assert gaps == [
            Gap(x=2, y=0, width=2, length=3),
            Gap(x=0, y=0, width=4, length=1),
            Gap(x=0, y=2, width=4, length=1),
            Gap(x=0, y=0, width=1, length=3),
        ]

    def test_min_area_filter(self, engine: AutoPackingEngine, make_bin) -> None:
        gaps = engine.find_gaps(4, 3, [make_bin(1, 1, 1, 1)], min_area=5)
        assert gaps == [Gap(x=2, y=0, width=2, length=3)]

    def test_default_threshold_drops_single_cells(
        self, engine: AutoPackingEngine, make_bin
    ) -> None:
        gaps = engine.find_gaps(3, 1, [make_bin(0, 0, 2, 1)])
        assert gaps == []
        assert engine.find_gaps(3, 1, [make_bin(0, 0, 2, 1)], min_area=1) == [
            Gap(x=2, y=0, width=1, length=1)
        ]

    def test_partially_covered_cell_is_occupied(
        self, engine: AutoPackingEngine
    ) -> None:
        offset = Bin(id="off", x=10.0, y=0.0, width=21.0, length=21.0)
        assert engine.find_gaps(3, 1, [offset], min_area=1) == [
            Gap(x=2, y=0, width=1, length=1)
        ]

    def test_full_grid_has_no_gaps(self, engine: AutoPackingEngine, make_bin) -> None:
        assert engine.find_gaps(4, 4, [make_bin(0, 0, 4, 4)]) == []

    def test_gaps_are_free_and_maximal(
        self, engine: AutoPackingEngine, make_bin
    ) -> None:
        bins = [make_bin(1, 0, 2, 2), make_bin(4, 3, 3, 2), make_bin(0, 4, 1, 1)]
        cols, rows = 8, 6
        occupied = {
            (c, r)
            for b in bins
            for c in range(int(b.x // 21), int(b.right // 21))
            for r in range(int(b.y // 21), int(b.bottom // 21))
        }

        def free(x: int, y: int, w: int, l: int) -> bool:
            if x < 0 or y < 0 or x + w > cols or y + l > rows:
                return False
            return all(
                (c, r) not in occupied
                for c in range(x, x + w)
                for r in range(y, y + l)
            )

        gaps = engine.find_gaps(cols, rows, bins, min_area=1)
        assert gaps
        assert len(set(gaps)) == len(gaps)
        for g in gaps:
            assert free(g.x, g.y, g.width, g.length)
            assert not free(g.x - 1, g.y, g.width + 1, g.length)
            assert not free(g.x, g.y - 1, g.width, g.length + 1)
            assert not free(g.x, g.y, g.width + 1, g.length)
            assert not free(g.x, g.y, g.width, g.length + 1)

    def test_module_function(self, make_bin) -> None:
        assert find_gaps(6, 4, []) == [Gap(x=0, y=0, width=6, length=4)]


class TestGenerateBins:
    """Tests for AutoPackingEngine.generate_bins."""

    def test_deterministic_fill(self, engine: AutoPackingEngine) -> None:
        """A 126 x 84mm drawer takes one 84mm bin and two 42mm bins."""
        created = engine.generate_bins([], 6, 4, SIZES)

        assert _positions(created) == [
            (0.0, 0.0, 84.0, 84.0),
            (84.0, 0.0, 42.0, 42.0),
            (84.0, 42.0, 42.0, 42.0),
        ]
        assert [b.name for b in created] == ["Auto 1", "Auto 2", "Auto 3"]
        assert [b.id for b in created] == ["new-1", "new-2", "new-3"]
        assert engine.find_gaps(6, 4, created) == []

    def test_repeatable(self) -> None:
        first = generate_bins([], 6, 4, SIZES)
        second = generate_bins([], 6, 4, SIZES)
        assert _positions(first) == _positions(second)

    def test_size_order_does_not_matter(self, engine: AutoPackingEngine) -> None:
        forward = engine.generate_bins([], 6, 4, SIZES)
        backward = engine.generate_bins([], 6, 4, list(reversed(SIZES)))
        assert _positions(forward) == _positions(backward)

    def test_palette_cycles(self, id_factory) -> None:
        config = LayoutConfig(palette=("#111111", "#222222"))
        engine = AutoPackingEngine(config, id_factory=id_factory)
        created = engine.generate_bins([], 6, 4, SIZES)
        assert [b.color for b in created] == ["#111111", "#222222", "#111111"]

    def test_respects_existing_bins(self, engine: AutoPackingEngine, make_bin) -> None:
        existing = [make_bin(0, 0, 4, 4)]
        created = engine.generate_bins(existing, 6, 4, SIZES)

        assert _positions(created) == [
            (84.0, 0.0, 42.0, 42.0),
            (84.0, 42.0, 42.0, 42.0),
        ]
        assert existing == [make_bin(0, 0, 4, 4, id="bin-1")]

    def test_no_bin_fits(self, engine: AutoPackingEngine) -> None:
        assert engine.generate_bins([], 1, 1, SIZES) == []

    @pytest.mark.slow
    def test_large_grid_terminates_without_overlap(self) -> None:
        engine = AutoPackingEngine()
        created = engine.generate_bins([], 50, 50)
        grid = GridSpec(cols=50, rows=50)

        assert 0 < len(created) <= engine.config.max_fill_iterations
        for a, b in itertools.combinations(created, 2):
            assert not rectangles_overlap(a, b)
        for b in created:
            assert is_valid_placement(b, [], grid)

    def test_iteration_ceiling(self, id_factory, caplog) -> None:
        engine = AutoPackingEngine(
            LayoutConfig(max_fill_iterations=3), id_factory=id_factory
        )
        with caplog.at_level(logging.WARNING):
            created = engine.generate_bins([], 50, 50)

        assert len(created) == 3
        assert engine.ceiling_hits == 1
        assert "iteration ceiling" in caplog.text

    def test_min_gap_threshold(self, id_factory) -> None:
        """Gaps below the threshold are left empty."""
        engine = AutoPackingEngine(LayoutConfig(min_gap_cells=9), id_factory=id_factory)
        created = engine.generate_bins([], 6, 4, SIZES)
        assert _positions(created) == [(0.0, 0.0, 84.0, 84.0)]

    def test_sizes_outside_constraints_are_skipped(self, id_factory) -> None:
        """A one-row strip stays empty when bins must be two cells long."""
        config = LayoutConfig(constraints=BinConstraints(min_length=42.0))
        engine = AutoPackingEngine(config, id_factory=id_factory)
        created = engine.generate_bins([], 6, 5)

        assert _positions(created) == [
            (0.0, 0.0, 84.0, 84.0),
            (84.0, 0.0, 42.0, 42.0),
            (84.0, 42.0, 42.0, 42.0),
        ]
        assert all(
            engine.validator.validate_bin_dimensions(b.width, b.length)
            for b in created
        )

    def test_no_allowed_size_creates_nothing(self, id_factory) -> None:
        config = LayoutConfig(constraints=BinConstraints(min_length=42.0))
        engine = AutoPackingEngine(config, id_factory=id_factory)
        assert engine.generate_bins([], 6, 5, [CatalogSize(84.0, 21.0)]) == []

    def test_module_functions_accept_config(self, make_bin) -> None:
        config = LayoutConfig(palette=("#000000",))
        created = generate_bins([], 6, 4, SIZES, config=config)
        assert {b.color for b in created} == {"#000000"}

        result = auto_sort([make_bin(2, 2, 2, 2)], 6, 4, config=config)
        assert (result.placed_bins[0].x, result.placed_bins[0].y) == (0.0, 0.0)
