"""Group colour assignment."""

from typing import List

from .grouping import GroupMeta
from .palettes import Palettes, resolve_palettes
from .pattern import Cell


def color_for_group(meta: GroupMeta, palettes: Palettes) -> str:
    """``colors[group_index % len(colors)]`` of the group's section."""
    colors = palettes.sections[meta.section].colors
    return colors[meta.group_index % len(colors)]


def assign_colors(
    groups: List[List[Cell]], meta: List[GroupMeta], palettes: Palettes
) -> None:
    """
    Colour every cell of every group in place.

    Uses no randomness: the result is a function of group identity and
    palette only.
    """
    palettes = resolve_palettes(palettes)
    for group, group_meta in zip(groups, meta):
        color = color_for_group(group_meta, palettes)
        for cell in group:
            cell.color = color
