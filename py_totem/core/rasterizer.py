"""
Rasterisation of coloured cells into an RGB pixel buffer.

Buffers are ``numpy`` arrays of shape ``(height, width, 3)`` and dtype
``uint8``. Drawing order:

1. section backgrounds
2. section border frames (skipped when ``borders`` is off)
3. the neutral outer border, one cell outside the icon
4. every on-cell and its mirror image at ``columns - 1 - x``

The icon itself is always ``columns * cell_size`` by ``rows * cell_size``.
A framed buffer adds ``cell_size`` on every side so the outer border is
visible; an unframed buffer clips it away.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np
import structlog
from PIL import ImageColor

from .palettes import FALLBACK_COLOR, Palettes, resolve_palettes
from .pattern import Cell, IconConfig, section_bounds

logger = structlog.get_logger()

OUTER_BORDER_COLOR = "#646464"

RGB = Tuple[int, int, int]


def parse_color(color: str, cache: Optional[Dict[str, RGB]] = None) -> RGB:
    """Parse a CSS colour string, falling back to black if it is malformed."""
    if cache is not None and color in cache:
        return cache[color]
    try:
        rgb = ImageColor.getrgb(color)[:3]
    except (ValueError, AttributeError, TypeError):
        logger.warning("Unparseable colour, using fallback", color=color, fallback=FALLBACK_COLOR)
        rgb = ImageColor.getrgb(FALLBACK_COLOR)[:3]
    if cache is not None:
        cache[color] = rgb
    return rgb


def buffer_shape(config: IconConfig, framed: bool = False) -> Tuple[int, int, int]:
    margin = 2 * config.cell_size if framed else 0
    return (config.pixel_height + margin, config.pixel_width + margin, 3)


def new_buffer(config: IconConfig, framed: bool = False) -> np.ndarray:
    """Allocate a black buffer sized for ``config``."""
    return np.zeros(buffer_shape(config, framed), dtype=np.uint8)


def fill_rect(
    buffer: np.ndarray, x: int, y: int, width: int, height: int, rgb: RGB, origin: int = 0
) -> None:
    """Fill a rectangle given in icon coordinates, clipped to the buffer."""
    if width <= 0 or height <= 0:
        return
    x0 = max(x + origin, 0)
    y0 = max(y + origin, 0)
    x1 = min(x + origin + width, buffer.shape[1])
    y1 = min(y + origin + height, buffer.shape[0])
    if x0 >= x1 or y0 >= y1:
        return
    buffer[y0:y1, x0:x1] = rgb


class IconRasterizer:
    """Draws one icon configuration with one palette."""

    def __init__(
        self, config: IconConfig, palettes: Optional[Palettes] = None, borders: bool = True
    ):
        self.config = config
        self.palettes = resolve_palettes(palettes)
        self.borders = borders
        self._colors: Dict[str, RGB] = {}

    def _rgb(self, color: str) -> RGB:
        return parse_color(color, self._colors)

    def _draw_sections(self, buffer: np.ndarray, origin: int) -> None:
        p = self.config.cell_size
        width = self.config.pixel_width
        last = self.config.sections - 1

        for i, (start_row, end_row) in enumerate(
            section_bounds(self.config.rows, self.config.sections)
        ):
            section = self.palettes.sections[i]
            sy = start_row * p
            sh = (end_row - start_row) * p

            fill_rect(buffer, 0, sy, width, sh, self._rgb(section.background), origin)
            if not self.borders:
                continue

            border = self._rgb(section.border)
            if i == 0:
                rects = [
                    (p, sy, width - 2 * p, p),
                    (0, sy + p, p, sh - p),
                    (width - p, sy + p, p, sh - p),
                    (0, sy + sh - p, width, p),
                ]
            elif i == last:
                rects = [
                    (0, sy, width, p),
                    (0, sy + p, p, sh - 2 * p),
                    (width - p, sy + p, p, sh - 2 * p),
                    (p, sy + sh - p, width - 2 * p, p),
                ]
            else:
                # Interior bands draw both edges; they double as neighbours' borders.
                rects = [
                    (0, sy, width, p),
                    (0, sy + p, p, sh - 2 * p),
                    (width - p, sy + p, p, sh - 2 * p),
                    (0, sy + sh - p, width, p),
                ]
            for x, y, w, h in rects:
                fill_rect(buffer, x, y, w, h, border, origin)

    def _draw_outer_border(self, buffer: np.ndarray, origin: int) -> None:
        b = self.config.cell_size
        width = self.config.pixel_width
        height = self.config.pixel_height
        rgb = self._rgb(OUTER_BORDER_COLOR)

        fill_rect(buffer, -b, -b, width + 2 * b, b, rgb, origin)
        fill_rect(buffer, -b, height, width + 2 * b, b, rgb, origin)
        fill_rect(buffer, -b, -b, b, height + 2 * b, rgb, origin)
        fill_rect(buffer, width, -b, b, height + 2 * b, rgb, origin)

    def _draw_cells(self, buffer: np.ndarray, cells: List[Cell], origin: int) -> None:
        p = self.config.cell_size
        for cell in cells:
            rgb = self._rgb(cell.color)
            x = cell.dx * p
            y = cell.dy * p
            fill_rect(buffer, x, y, p, p, rgb, origin)
            mirror_x = self.config.pixel_width - x - p
            if mirror_x != x:
                fill_rect(buffer, mirror_x, y, p, p, rgb, origin)

    def draw(
        self, cells: List[Cell], target: Optional[np.ndarray], framed: bool = False
    ) -> Optional[np.ndarray]:
        """
        Paint the icon into ``target``.

        Returns ``target`` on success. A missing or mis-shaped target is
        logged and skipped so that callers never fail on a visual.
        """
        if target is None:
            logger.warning("No drawing target, skipping render")
            return None

        expected = buffer_shape(self.config, framed)
        if not isinstance(target, np.ndarray) or target.shape != expected:
            logger.warning(
                "Drawing target has wrong shape, skipping render",
                expected=expected,
                actual=getattr(target, "shape", None),
            )
            return None

        origin = self.config.cell_size if framed else 0
        self._draw_sections(target, origin)
        self._draw_outer_border(target, origin)
        self._draw_cells(target, cells, origin)
        return target

    def render(self, cells: List[Cell], framed: bool = False) -> np.ndarray:
        """Draw into a freshly allocated buffer."""
        return self.draw(cells, new_buffer(self.config, framed), framed=framed)
