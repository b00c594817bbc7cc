"""
Connected-component grouping of on-cells.

Cells are grouped by 4-connected flood fill restricted to their own
section. Groups are numbered per section in discovery order, which follows
cell generation order, so labels depend only on seed and grid dimensions.
"""

from collections import defaultdict
from typing import Dict, List, NamedTuple, Tuple

import structlog

from .pattern import Cell

logger = structlog.get_logger()

# Row-major order, matching the order cells are generated in.
NEIGHBOR_OFFSETS = ((0, -1), (-1, 0), (1, 0), (0, 1))


class GroupMeta(NamedTuple):
    """Identity of one group: its section and per-section index."""

    section: int
    group_index: int


def index_cells(cells: List[Cell]) -> Dict[Tuple[int, int], Cell]:
    """Index cells by ``(x, y)``."""
    return {(cell.x, cell.y): cell for cell in cells}


def get_neighbors(cell: Cell, index: Dict[Tuple[int, int], Cell]) -> List[Cell]:
    """4-neighbours of ``cell`` that are on and in the same section."""
    neighbors = []
    for ox, oy in NEIGHBOR_OFFSETS:
        other = index.get((cell.x + ox, cell.y + oy))
        if other is not None and other.section == cell.section:
            neighbors.append(other)
    return neighbors


def flood_fill(start: Cell, index: Dict[Tuple[int, int], Cell]) -> List[Cell]:
    """Collect every unvisited cell reachable from ``start``, marking them."""
    if start.visited:
        return []

    start.visited = True
    stack = [start]
    group = []

    while stack:
        current = stack.pop()
        group.append(current)
        for neighbor in get_neighbors(current, index):
            if not neighbor.visited:
                neighbor.visited = True
                stack.append(neighbor)

    return group


def find_groups(cells: List[Cell]) -> Tuple[List[List[Cell]], List[GroupMeta]]:
    """
    Partition ``cells`` into groups.

    Returns the groups in discovery order and a parallel list of
    ``GroupMeta``. Resets ``visited`` on every cell first, so calling it
    again on the same cells gives the same result.
    """
    for cell in cells:
        cell.visited = False

    index = index_cells(cells)
    groups: List[List[Cell]] = []
    meta: List[GroupMeta] = []
    counters: Dict[int, int] = defaultdict(int)

    for cell in cells:
        if cell.visited:
            continue
        group = flood_fill(cell, index)
        if group:
            section = group[0].section
            groups.append(group)
            meta.append(GroupMeta(section=section, group_index=counters[section]))
            counters[section] += 1

    logger.debug("Cells grouped", cells=len(cells), groups=len(groups))
    return groups, meta
