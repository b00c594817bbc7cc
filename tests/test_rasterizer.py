"""Tests for rasterisation into pixel buffers."""

import numpy as np
import pytest
from py_totem.core.palettes import DEFAULT_PALETTES, MUTED_PALETTES
from py_totem.core.pattern import Cell, IconConfig
from py_totem.core.rasterizer import (
    IconRasterizer,
    fill_rect,
    new_buffer,
    parse_color,
)

GRAY = (100, 100, 100)


def rgb(hex_color):
    return parse_color(hex_color)


class TestHelpers:
    """Test colour parsing and clipped rectangle fills."""

    def test_parse_color(self):
        assert parse_color("#FF6B35") == (255, 107, 53)
        assert parse_color("#646464") == GRAY

    def test_parse_color_fallback(self):
        assert parse_color("not-a-colour") == (0, 0, 0)
        assert parse_color(None) == (0, 0, 0)

    def test_fill_rect_clips(self):
        buffer = np.zeros((10, 10, 3), dtype=np.uint8)
        fill_rect(buffer, -5, -5, 8, 8, (1, 2, 3))
        assert (buffer[:3, :3] == (1, 2, 3)).all()
        assert (buffer[3:, :] == 0).all()

    def test_fill_rect_outside_is_noop(self):
        buffer = np.zeros((10, 10, 3), dtype=np.uint8)
        fill_rect(buffer, 10, 0, 5, 5, (9, 9, 9))
        fill_rect(buffer, 0, 0, 0, 5, (9, 9, 9))
        assert not buffer.any()


class TestIconRasterizer:
    """Test the drawing pipeline."""

    @pytest.fixture
    def config(self):
        return IconConfig.for_tier(cell_size=5)

    @pytest.fixture
    def rasterizer(self, config):
        return IconRasterizer(config, DEFAULT_PALETTES)

    def test_buffer_dimensions(self, rasterizer):
        pixels = rasterizer.render([])
        assert pixels.shape == (150, 60, 3)
        assert pixels.dtype == np.uint8

    def test_high_res_doubles_buffer(self):
        standard = IconRasterizer(IconConfig.for_tier(False, 4)).render([])
        high = IconRasterizer(IconConfig.for_tier(True, 4)).render([])
        assert high.shape[0] == 2 * standard.shape[0]
        assert high.shape[1] == 2 * standard.shape[1]

    def test_section_backgrounds(self, rasterizer):
        pixels = rasterizer.render([])
        # Interior pixel of each 30px band, away from the 5px borders.
        for i, section in enumerate(DEFAULT_PALETTES.sections):
            assert tuple(pixels[i * 30 + 12, 20]) == rgb(section.background)

    def test_section_borders(self, rasterizer):
        pixels = rasterizer.render([])
        first = rgb(DEFAULT_PALETTES.section0.border)
        last = rgb(DEFAULT_PALETTES.section4.border)
        middle = rgb(DEFAULT_PALETTES.section2.border)

        assert tuple(pixels[0, 30]) == first
        assert tuple(pixels[10, 0]) == first
        assert tuple(pixels[10, 59]) == first
        assert tuple(pixels[27, 30]) == first
        # Top corners of the first band are left to the background.
        assert tuple(pixels[0, 0]) == rgb(DEFAULT_PALETTES.section0.background)

        assert tuple(pixels[60, 0]) == middle
        assert tuple(pixels[89, 59]) == middle

        assert tuple(pixels[120, 0]) == last
        assert tuple(pixels[149, 30]) == last
        assert tuple(pixels[149, 0]) == rgb(DEFAULT_PALETTES.section4.background)

    def test_cells_are_mirrored(self, rasterizer):
        cells = [Cell(dx=1, dy=10, x=1, y=10, section=1, color="#123456")]
        pixels = rasterizer.render(cells)
        target = (0x12, 0x34, 0x56)
        assert (pixels[50:55, 5:10] == target).all()
        assert (pixels[50:55, 50:55] == target).all()
        assert tuple(pixels[50, 30]) != target

    def test_centre_column_of_odd_grid(self):
        config = IconConfig(columns=13, cell_size=2)
        cells = [Cell(dx=6, dy=3, x=6, y=3, section=0, color="#00ff00")]
        pixels = IconRasterizer(config).render(cells)
        assert (pixels[6:8, 12:14] == (0, 255, 0)).all()

    def test_whole_buffer_is_mirror_symmetric(self, rasterizer):
        cells = [
            Cell(dx=x, dy=y, x=x, y=y, section=y // 6, color=f"#{x * 40:02x}{y * 8:02x}80")
            for x in range(6)
            for y in range(0, 30, 3)
        ]
        pixels = rasterizer.render(cells)
        np.testing.assert_array_equal(pixels, pixels[:, ::-1])

    def test_palette_changes_colour_only(self, config):
        a = IconRasterizer(config, DEFAULT_PALETTES).render([])
        b = IconRasterizer(config, MUTED_PALETTES).render([])
        assert a.shape == b.shape
        assert not np.array_equal(a, b)

    def test_framed_buffer_shows_outer_border(self, config, rasterizer):
        framed = rasterizer.render([], framed=True)
        assert framed.shape == (160, 70, 3)
        for y, x in [(0, 0), (0, 69), (159, 0), (159, 69), (80, 2), (80, 67)]:
            assert tuple(framed[y, x]) == GRAY
        np.testing.assert_array_equal(framed[5:155, 5:65], rasterizer.render([]))

    def test_unframed_buffer_clips_outer_border(self, rasterizer):
        pixels = rasterizer.render([])
        assert not (pixels == GRAY).all(axis=2).any()

    def test_missing_target_is_noop(self, rasterizer):
        assert rasterizer.draw([], None) is None

    def test_wrong_target_is_noop(self, rasterizer):
        target = np.zeros((10, 10, 3), dtype=np.uint8)
        assert rasterizer.draw([], target) is None
        assert not target.any()
        assert rasterizer.draw([], "canvas") is None

    def test_draw_into_existing_target(self, config, rasterizer):
        target = new_buffer(config)
        assert rasterizer.draw([], target) is target
        assert target.any()

    def test_bad_cell_colour_falls_back(self, rasterizer):
        cells = [Cell(dx=2, dy=8, x=2, y=8, section=1, color="#zzzzzz")]
        pixels = rasterizer.render(cells)
        assert (pixels[40:45, 10:15] == 0).all()
