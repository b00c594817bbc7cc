"""
Half-width bitmap generation for totem icons.

Each row draws one value from the random source and reads it as a binary
fraction; every ``1`` bit becomes an on-cell in the left half of the grid.
The rasterizer mirrors the left half, so only ``ceil(columns / 2)`` bits
are drawn per row.
"""

from dataclasses import dataclass
from typing import List, Tuple

import structlog

from .seeded_prng import RandomSource

logger = structlog.get_logger()

SECTIONS = 5
STANDARD_COLUMNS = 12
STANDARD_ROWS = 30
DEFAULT_CELL_SIZE = 5
UNASSIGNED_COLOR = "#000000"


@dataclass(frozen=True)
class IconConfig:
    """Grid dimensions and display scale for one icon."""

    columns: int = STANDARD_COLUMNS
    rows: int = STANDARD_ROWS
    sections: int = SECTIONS
    cell_size: int = DEFAULT_CELL_SIZE
    high_res: bool = False

    def __post_init__(self):
        if self.columns < 1 or self.rows < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.columns}x{self.rows}")
        if self.sections != SECTIONS:
            raise ValueError(f"Palettes cover exactly {SECTIONS} sections, got {self.sections}")
        if self.rows < self.sections:
            raise ValueError(f"Need at least one row per section, got rows={self.rows}")
        if self.cell_size < 1:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")

    @classmethod
    def for_tier(cls, high_res: bool = False, cell_size: int = DEFAULT_CELL_SIZE) -> "IconConfig":
        """Standard tier is 12x30; high-res doubles both, keeping 5 sections."""
        scale = 2 if high_res else 1
        return cls(
            columns=STANDARD_COLUMNS * scale,
            rows=STANDARD_ROWS * scale,
            sections=SECTIONS,
            cell_size=cell_size,
            high_res=high_res,
        )

    @property
    def half_columns(self) -> int:
        return (self.columns + 1) // 2

    @property
    def pixel_width(self) -> int:
        return self.columns * self.cell_size

    @property
    def pixel_height(self) -> int:
        return self.rows * self.cell_size


@dataclass
class Cell:
    """
    One on-cell of the generated bitmap.

    ``dx``/``dy`` are logical grid coordinates and ``x``/``y`` the copies
    used for neighbour lookup. ``visited`` is flood-fill bookkeeping and
    ``color`` is set by colour assignment.
    """

    dx: int
    dy: int
    x: int
    y: int
    section: int
    color: str = UNASSIGNED_COLOR
    visited: bool = False


def section_bounds(rows: int, sections: int) -> List[Tuple[int, int]]:
    """
    Row ranges ``[start, end)`` for each section band.

    Boundaries are ``floor(i * rows / sections)`` so every row belongs to
    exactly one band even when ``rows`` is not a multiple of ``sections``.
    """
    edges = [(i * rows) // sections for i in range(sections + 1)]
    return [(edges[i], edges[i + 1]) for i in range(sections)]


def row_bits(value: float, count: int) -> List[int]:
    """Expand ``value`` in [0, 1) into its first ``count`` binary digits."""
    bits = []
    for _ in range(count):
        value *= 2
        if value >= 1:
            bits.append(1)
            value -= 1
        else:
            bits.append(0)
    return bits


def generate_pattern(rng: RandomSource, config: IconConfig) -> List[Cell]:
    """
    Generate the half-width on-cells, in generation order.

    Exactly one value is drawn per row, top to bottom, so the pattern
    depends only on the random source and the grid dimensions.
    """
    cells: List[Cell] = []
    for section, (start_y, end_y) in enumerate(section_bounds(config.rows, config.sections)):
        for y in range(start_y, end_y):
            for i, bit in enumerate(row_bits(rng.random(), config.half_columns)):
                if bit:
                    cells.append(Cell(dx=i, dy=y, x=i, y=y, section=section))

    logger.debug(
        "Pattern generated",
        columns=config.columns,
        rows=config.rows,
        cells=len(cells),
    )
    return cells
