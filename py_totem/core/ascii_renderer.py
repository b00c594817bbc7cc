"""
Terminal rendering of totem icons with ANSI 256-colour escapes.

Every grid cell becomes one glyph coloured by the nearest entry of the
6x6x6 colour cube. The colour grid is the icon rasterised at one pixel
per cell, so section backgrounds, band borders and mirrored cells are
exactly those of the PNG output.
"""

import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import structlog
from PIL import ImageColor

from .generator import TotemIcon, TotemIconGenerator
from .palettes import Palettes, palettes_from_json
from .pattern import IconConfig, STANDARD_COLUMNS, STANDARD_ROWS
from .rasterizer import IconRasterizer
from .status_palettes import palette_for_status

logger = structlog.get_logger()

DEFAULT_GLYPH = "██"
HEADER_COLOR = "#888888"
INVALID_COLOR_CODE = 15
ANSI_RESET = "\x1b[0m"
ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
SECTION_LABELS = ("Sunset", "Ocean", "Dreams", "Forest", "Coral")


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Index of the nearest colour in the 6x6x6 cube (codes 16-231)."""
    levels = [int(round(v / 255 * 5)) for v in (r, g, b)]
    return 16 + 36 * levels[0] + 6 * levels[1] + levels[2]


def ansi256(color: str) -> int:
    """ANSI 256 code for a colour string; white (15) if it cannot be parsed."""
    try:
        r, g, b = ImageColor.getrgb(color)[:3]
    except (ValueError, AttributeError, TypeError):
        return INVALID_COLOR_CODE
    return rgb_to_ansi256(r, g, b)


def grid_codes(pixels: np.ndarray) -> np.ndarray:
    """Vectorised ``rgb_to_ansi256`` over an ``(H, W, 3)`` buffer."""
    levels = np.rint(pixels.astype(np.float64) / 255 * 5).astype(np.int64)
    return 16 + 36 * levels[..., 0] + 6 * levels[..., 1] + levels[..., 2]


def colorize(text: str, color: str, background: Optional[str] = None) -> str:
    code = f"\x1b[38;5;{ansi256(color)}m"
    if background is not None:
        code += f"\x1b[48;5;{ansi256(background)}m"
    return f"{code}{text}{ANSI_RESET}"


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


class AsciiRenderer:
    """
    Renders icons as rows of coloured glyphs.

    Args:
        config: Grid configuration; ``cell_size`` is ignored
        palettes: Palette override; ``None`` uses the default table
        glyph: Text printed for one cell
        borders: Draw the section border frames
        header: Prefix the grid with a boxed title
    """

    def __init__(
        self,
        config: Optional[IconConfig] = None,
        palettes: Optional[Palettes] = None,
        glyph: str = DEFAULT_GLYPH,
        borders: bool = True,
        header: bool = True,
    ):
        config = config or IconConfig.for_tier()
        self.config = IconConfig(
            columns=config.columns,
            rows=config.rows,
            sections=config.sections,
            cell_size=1,
            high_res=config.high_res,
        )
        self.palettes = palettes
        self.glyph = glyph
        self.borders = borders
        self.header = header

    def generate(self, seed: Optional[str] = None) -> TotemIcon:
        return TotemIconGenerator(self.config).generate(seed=seed, palettes=self.palettes)

    def codes(self, icon: TotemIcon) -> np.ndarray:
        """ANSI code per grid cell, shape ``(rows, columns)``."""
        pixels = icon.pixels
        if not self.borders:
            pixels = IconRasterizer(self.config, icon.palettes, borders=False).render(icon.cells)
        return grid_codes(pixels)

    def grid_lines(self, icon: TotemIcon) -> List[str]:
        return [
            "".join(f"\x1b[38;5;{code}m{self.glyph}{ANSI_RESET}" for code in row)
            for row in self.codes(icon).tolist()
        ]

    def header_lines(self, icon: TotemIcon) -> List[str]:
        lines = [
            f"Hashicon: {icon.seed}" if icon.seed is not None else "Random Hashicon",
            f"Cells: {len(icon.cells)}, Grid: {self.config.columns}x{self.config.rows}",
            "Sections: " + " ".join(SECTION_LABELS[: self.config.sections]),
        ]
        inner = max(len(line) for line in lines)
        boxed = [f"┌{'─' * (inner + 2)}┐"]
        boxed += [f"│ {line.ljust(inner)} │" for line in lines]
        boxed.append(f"└{'─' * (inner + 2)}┘")
        return [colorize(line, HEADER_COLOR) for line in boxed]

    def render(self, seed: Optional[str] = None) -> str:
        """Generate the icon for ``seed`` and return it as ANSI text."""
        icon = self.generate(seed)
        lines = []
        if self.header:
            lines += self.header_lines(icon) + [""]
        lines += self.grid_lines(icon)
        return "\n".join(lines) + "\n"


def main(argv: Optional[Sequence[str]] = None):
    """Print an icon to the terminal."""
    import argparse

    from ..config import settings
    from ..logging_setup import configure_logging

    parser = argparse.ArgumentParser(description="Render a totem icon in the terminal")
    parser.add_argument("seed", nargs="?", help="Seed string (random pattern if omitted)")
    parser.add_argument("--width", type=int, help=f"Grid columns (default {STANDARD_COLUMNS})")
    parser.add_argument("--height", type=int, help=f"Grid rows (default {STANDARD_ROWS})")
    parser.add_argument("--high-res", action="store_true", help="Use the 24x60 tier")
    parser.add_argument("--char", default=DEFAULT_GLYPH, help="Glyph printed for each cell")
    parser.add_argument("--no-borders", action="store_true", help="Skip section borders")
    parser.add_argument("--no-header", action="store_true", help="Skip the title box")
    parser.add_argument("--status", help="Status label used to pick a palette")
    parser.add_argument("--palettes", help="JSON file exported by the palette editor")
    parser.add_argument("--save", help="Also write the icon, without colour codes, to this file")
    parser.add_argument("--log-level", default="WARNING", help="Log level")

    args = parser.parse_args(argv)

    configure_logging(args.log_level, settings.log_format)

    tier = IconConfig.for_tier(high_res=args.high_res)
    try:
        config = IconConfig(
            columns=args.width or tier.columns,
            rows=args.height or tier.rows,
            high_res=args.high_res,
        )
    except ValueError as e:
        parser.error(str(e))

    palettes = None
    if args.palettes:
        palettes = palettes_from_json(Path(args.palettes).read_text(encoding="utf-8"))
        logger.info("Custom palettes loaded", path=args.palettes)
    elif args.status is not None:
        palettes = palette_for_status(args.status)

    renderer = AsciiRenderer(
        config,
        palettes=palettes,
        glyph=args.char,
        borders=not args.no_borders,
        header=not args.no_header,
    )
    output = renderer.render(args.seed)
    sys.stdout.write(output)

    if args.save:
        Path(args.save).write_text(strip_ansi(output), encoding="utf-8")
        print(f"Saved to {args.save}")


if __name__ == "__main__":
    main()
