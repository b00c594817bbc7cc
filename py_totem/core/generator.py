"""
Totem icon generation pipeline.

seed -> hash -> random source -> on-cells -> groups -> colours -> pixels

Geometry (cells and group labels) depends only on the seed and the grid
configuration; the palette only changes colours. Every run recomputes
everything, and nothing is shared between runs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import structlog

from .coloring import assign_colors
from .grouping import GroupMeta, find_groups
from .palettes import Palettes, resolve_palettes
from .pattern import DEFAULT_CELL_SIZE, Cell, IconConfig, generate_pattern
from .rasterizer import IconRasterizer
from .seeded_prng import create_random_source, new_session_seed
from .status_palettes import palette_for_status

logger = structlog.get_logger()


@dataclass
class TotemIcon:
    """Result of one generation run."""

    seed: Optional[str]
    session_seed: str
    config: IconConfig
    palettes: Palettes
    cells: List[Cell]
    groups: List[List[Cell]]
    group_meta: List[GroupMeta]
    pixels: np.ndarray
    framed: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def reproducible(self) -> bool:
        return self.seed is not None

    def cell_positions(self):
        return [(c.dx, c.dy, c.section) for c in self.cells]

    def cell_colors(self):
        return [c.color for c in self.cells]


class TotemIconGenerator:
    """
    Generates totem icons for one grid configuration.

    Holds no state between runs; ``regenerate`` is an explicit request
    for a fresh pattern under a newly drawn session seed.
    """

    def __init__(self, config: Optional[IconConfig] = None):
        self.config = config or IconConfig.for_tier()

    def generate(
        self,
        seed: Optional[str] = None,
        palettes: Optional[Palettes] = None,
        framed: bool = False,
    ) -> TotemIcon:
        """
        Run the full pipeline.

        Args:
            seed: Seed string; ``None`` draws a non-reproducible pattern
            palettes: Palette override; ``None`` uses the default table
            framed: Pad the buffer so the outer border is visible

        Returns:
            TotemIcon with cells, groups and the rendered pixel buffer
        """
        session_seed = seed if seed is not None else new_session_seed()
        active = resolve_palettes(palettes)

        rng = create_random_source(seed)
        cells = generate_pattern(rng, self.config)
        groups, group_meta = find_groups(cells)
        assign_colors(groups, group_meta, active)
        pixels = IconRasterizer(self.config, active).render(cells, framed=framed)

        logger.info(
            "Totem icon generated",
            seed=seed,
            session_seed=session_seed,
            high_res=self.config.high_res,
            cells=len(cells),
            groups=len(groups),
        )

        return TotemIcon(
            seed=seed,
            session_seed=session_seed,
            config=self.config,
            palettes=active,
            cells=cells,
            groups=groups,
            group_meta=group_meta,
            pixels=pixels,
            framed=framed,
            metadata={"random_draws": getattr(rng, "call_count", None)},
        )

    def regenerate(
        self, palettes: Optional[Palettes] = None, framed: bool = False
    ) -> TotemIcon:
        """Generate a new pattern under a freshly drawn, pinnable seed."""
        return self.generate(seed=new_session_seed(), palettes=palettes, framed=framed)


def render_icon(
    seed: Optional[str],
    status: Optional[str] = None,
    high_res: bool = False,
    cell_size: int = DEFAULT_CELL_SIZE,
    palettes: Optional[Palettes] = None,
    framed: bool = False,
) -> TotemIcon:
    """
    Render one icon for a seed and optional status label.

    An explicit ``palettes`` wins over the status-derived palette.
    """
    if palettes is None and status is not None:
        palettes = palette_for_status(status)
    generator = TotemIconGenerator(IconConfig.for_tier(high_res=high_res, cell_size=cell_size))
    return generator.generate(seed=seed, palettes=palettes, framed=framed)
