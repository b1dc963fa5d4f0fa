"""Tests for mask to spawn point conversion."""

import math

import numpy as np
import pytest

from py_garden.core.mulberry_prng import Mulberry32PRNG
from py_garden.core.spawn_points import MaskBounds, generate_flower_positions_from_mask
from py_garden.core.text_mask import TextMaskOptions, TextMaskResult, build_text_mask


@pytest.fixture
def love_mask():
    return build_text_mask(["LOVE", "U"], TextMaskOptions(char_spacing=2, line_spacing=2))


class TestGenerateFlowerPositions:
    """Test spawn point generation."""

    def test_one_point_per_cell_at_center(self):
        """Test density 1 with no jitter lands on cell centers."""
        mask = build_text_mask(["A"])
        bounds = MaskBounds(width=60, height=70, offset_x=20, offset_y=15, jitter=0.0)
        points = generate_flower_positions_from_mask(mask, bounds, 1)

        assert len(points) == int(mask.mask.sum())
        for point in points:
            assert point.x == pytest.approx(20 + (point.col + 0.5) * 10)
            assert point.y == pytest.approx(15 + (point.row + 0.5) * 10)
            assert mask.mask[point.row, point.col]

    def test_row_major_order(self, love_mask):
        """Test points are emitted row by row, left to right."""
        points = generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80), 1)
        cells = [(p.row, p.col) for p in points]

        assert cells == sorted(cells)
        assert [p.pixel_index for p in points] == list(range(len(points)))

    def test_whole_density_copies(self, love_mask):
        """Test whole densities produce exactly that many copies per cell."""
        points = generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80), 3)
        assert len(points) == 3 * int(love_mask.mask.sum())

    def test_zero_and_negative_density(self, love_mask):
        """Test that no copies are made without density."""
        assert generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80), 0) == []
        assert generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80), -1) == []

    def test_fractional_density_range(self, love_mask):
        """Test density 2.5 yields two or three points per cell."""
        lit = int(love_mask.mask.sum())
        points = generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80, seed=9), 2.5)

        assert 2 * lit < len(points) < 3 * lit
        per_cell = {}
        for point in points:
            per_cell[(point.row, point.col)] = per_cell.get((point.row, point.col), 0) + 1
        assert set(per_cell.values()) == {2, 3}

    def test_fractional_density_follows_cell_draw(self):
        """Test the first draw of each cell decides its extra copy."""
        mask = build_text_mask(["L"])
        bounds = MaskBounds(50, 50, seed=31, jitter=0.2)
        points = generate_flower_positions_from_mask(mask, bounds, 0.5)

        prng = Mulberry32PRNG(31)
        expected_cells = []
        for row, col in zip(*mask.mask.nonzero()):
            if prng.random() < 0.5:
                expected_cells.append((int(row), int(col)))
                prng.random()
                prng.random()

        assert [(p.row, p.col) for p in points] == expected_cells

    def test_whole_density_still_draws(self):
        """Test the extra-copy draw is taken even when density is whole."""
        mask = build_text_mask(["L"])
        bounds = MaskBounds(50, 50, seed=5, jitter=1.0)
        first = generate_flower_positions_from_mask(mask, bounds, 1)[0]

        prng = Mulberry32PRNG(5)
        prng.random()  # extra-copy draw
        jx = (prng.random() - 0.5) * 1.0
        cell_w = 50 / mask.cols

        assert first.x == pytest.approx(25 + (first.col + 0.5 + jx) * cell_w)

    def test_jitter_bounds(self, love_mask):
        """Test points stay within half a jitter of their cell center."""
        bounds = MaskBounds(width=80, height=60, offset_x=10, offset_y=20, jitter=0.4)
        points = generate_flower_positions_from_mask(love_mask, bounds, 2)
        cell_w = 80 / love_mask.cols
        cell_h = 60 / love_mask.rows

        for point in points:
            center_x = 10 + (point.col + 0.5) * cell_w
            center_y = 20 + (point.row + 0.5) * cell_h
            assert abs(point.x - center_x) <= 0.2 * cell_w + 1e-9
            assert abs(point.y - center_y) <= 0.2 * cell_h + 1e-9

    def test_default_offsets_center_the_box(self):
        """Test missing offsets center the box on the canvas."""
        bounds = MaskBounds(width=40, height=30)
        assert bounds.resolved_offsets() == (30, 35)

    def test_reproducible(self, love_mask):
        """Test the same seed gives the same points."""
        bounds = MaskBounds(80, 80, seed=1337, jitter=0.1)
        assert (
            generate_flower_positions_from_mask(love_mask, bounds, 0.7)
            == generate_flower_positions_from_mask(love_mask, bounds, 0.7)
        )

    def test_letter_back_references(self, love_mask):
        """Test points carry their letter, line and character."""
        points = generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80), 1)

        for point in points:
            assert point.letter_index == love_mask.letter_map[point.row, point.col]
            meta = love_mask.letter_meta[point.letter_index]
            assert point.line_index == meta.line_index
            assert point.letter_char == meta.char
            assert point.species is None

        assert {p.letter_char for p in points} == {"L", "O", "V", "E", "U"}

    def test_unowned_cells_skipped(self):
        """Test lit cells without a letter produce no points."""
        mask = TextMaskResult(
            mask=np.array([[True, True]]),
            letter_map=np.array([[-1, 0]], dtype=np.int32),
            letters=["A"],
        )
        points = generate_flower_positions_from_mask(mask, MaskBounds(10, 10), 1)

        assert [(p.row, p.col) for p in points] == [(0, 1)]
        assert points[0].line_index == 0

    def test_empty_mask(self):
        """Test an empty mask yields no points."""
        assert generate_flower_positions_from_mask(build_text_mask([]), MaskBounds(80, 80), 2) == []
        assert generate_flower_positions_from_mask(build_text_mask(["  "]), MaskBounds(80, 80), 2) == []

    def test_density_expectation(self, love_mask):
        """Test fractional density roughly matches its expectation."""
        lit = int(love_mask.mask.sum())
        points = generate_flower_positions_from_mask(love_mask, MaskBounds(80, 80, seed=4), 0.5)
        assert math.isclose(len(points), lit * 0.5, rel_tol=0.35)
