"""
Core icon generation functionality.
"""

from .seeded_prng import SeededPRNG, string_hash, create_random_source, new_session_seed
from .palettes import (
    Palettes,
    PaletteSection,
    DEFAULT_PALETTES,
    MUTED_PALETTES,
    BLOCKED_PALETTES,
    resolve_palettes,
)
from .status_palettes import palette_for_status
from .pattern import Cell, IconConfig, generate_pattern
from .grouping import GroupMeta, find_groups
from .coloring import assign_colors
from .rasterizer import IconRasterizer
from .export import export_png, to_png_bytes, to_data_url
from .generator import TotemIcon, TotemIconGenerator, render_icon
from .ascii_renderer import AsciiRenderer, ansi256, strip_ansi

__all__ = ['SeededPRNG', 'string_hash', 'create_random_source', 'new_session_seed',
           'Palettes', 'PaletteSection', 'DEFAULT_PALETTES', 'MUTED_PALETTES',
           'BLOCKED_PALETTES', 'resolve_palettes', 'palette_for_status',
           'Cell', 'IconConfig', 'generate_pattern', 'GroupMeta', 'find_groups',
           'assign_colors', 'IconRasterizer', 'export_png', 'to_png_bytes',
           'to_data_url', 'TotemIcon', 'TotemIconGenerator', 'render_icon',
           'AsciiRenderer', 'ansi256', 'strip_ansi']
