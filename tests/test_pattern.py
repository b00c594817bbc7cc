"""Tests for half-width bitmap generation."""

import pytest
from py_totem.core.pattern import (
    IconConfig,
    generate_pattern,
    row_bits,
    section_bounds,
)
from py_totem.core.seeded_prng import SeededPRNG, create_random_source


class ConstantSource:
    """Random source returning a fixed value."""

    def __init__(self, value):
        self.value = value
        self.call_count = 0

    def random(self):
        self.call_count += 1
        return self.value


class TestIconConfig:
    """Test grid configuration."""

    def test_standard_tier(self):
        config = IconConfig.for_tier()
        assert (config.columns, config.rows, config.sections) == (12, 30, 5)
        assert config.half_columns == 6

    def test_high_res_doubles_grid(self):
        standard = IconConfig.for_tier(high_res=False, cell_size=4)
        high = IconConfig.for_tier(high_res=True, cell_size=4)
        assert high.columns == 2 * standard.columns
        assert high.rows == 2 * standard.rows
        assert high.sections == standard.sections
        assert high.pixel_width == 2 * standard.pixel_width
        assert high.pixel_height == 2 * standard.pixel_height

    def test_odd_columns_round_half_up(self):
        assert IconConfig(columns=13).half_columns == 7

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"columns": 0},
            {"rows": 0},
            {"rows": 4},
            {"sections": 4},
            {"cell_size": 0},
        ],
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            IconConfig(**kwargs)


class TestSectionBounds:
    """Test section band boundaries."""

    def test_even_split(self):
        assert section_bounds(30, 5) == [(0, 6), (6, 12), (12, 18), (18, 24), (24, 30)]

    @pytest.mark.parametrize("rows", [30, 32, 60, 64, 7])
    def test_every_row_covered_once(self, rows):
        bounds = section_bounds(rows, 5)
        covered = [y for start, end in bounds for y in range(start, end)]
        assert covered == list(range(rows))
        assert all(end > start for start, end in bounds)


class TestRowBits:
    """Test fractional binary expansion."""

    def test_known_expansions(self):
        assert row_bits(0.0, 6) == [0, 0, 0, 0, 0, 0]
        assert row_bits(0.5, 3) == [1, 0, 0]
        assert row_bits(0.75, 2) == [1, 1]
        assert row_bits(0.625, 4) == [1, 0, 1, 0]

    def test_length(self):
        assert len(row_bits(0.123, 12)) == 12


class TestGeneratePattern:
    """Test on-cell generation."""

    def test_one_draw_per_row(self):
        config = IconConfig.for_tier()
        rng = SeededPRNG(42)
        generate_pattern(rng, config)
        assert rng.call_count == config.rows

    def test_constant_source(self):
        """0.5 sets only the first bit, giving one cell per row at x=0."""
        config = IconConfig.for_tier()
        cells = generate_pattern(ConstantSource(0.5), config)
        assert len(cells) == config.rows
        assert all(c.dx == 0 and c.x == 0 for c in cells)
        assert [c.dy for c in cells] == list(range(config.rows))

    def test_cells_within_half_and_section(self):
        config = IconConfig.for_tier(high_res=True)
        cells = generate_pattern(create_random_source("bounds"), config)
        bounds = section_bounds(config.rows, config.sections)
        for cell in cells:
            assert 0 <= cell.dx < config.half_columns
            start, end = bounds[cell.section]
            assert start <= cell.dy < end
            assert (cell.x, cell.y) == (cell.dx, cell.dy)
            assert not cell.visited

    def test_generation_order_is_row_major(self):
        cells = generate_pattern(create_random_source("order"), IconConfig.for_tier())
        keys = [(c.dy, c.dx) for c in cells]
        assert keys == sorted(keys)

    def test_deterministic(self):
        config = IconConfig.for_tier()
        a = generate_pattern(create_random_source("john@example.com"), config)
        b = generate_pattern(create_random_source("john@example.com"), config)
        assert [(c.dx, c.dy, c.section) for c in a] == [(c.dx, c.dy, c.section) for c in b]
