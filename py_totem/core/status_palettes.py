"""
Status-aware palette selection.

Later lifecycle stages light up more sections with the vivid default
palette, top band last; ``blocked`` swaps in the all-red palette.
"""

from typing import Dict, Optional

import structlog

from .palettes import (
    BLOCKED_PALETTES,
    DEFAULT_PALETTES,
    MUTED_PALETTES,
    SECTION_NAMES,
    Palettes,
)

logger = structlog.get_logger()

BLOCKED = "blocked"

# Number of leading sections drawn from the muted table, per status.
MUTED_SECTIONS: Dict[str, int] = {
    "planned": 4,
    "open": 3,
    "in-progress": 2,
    "review": 1,
}


def mix_palettes(muted_count: int) -> Palettes:
    """Muted sections ``0..muted_count-1``, default for the rest."""
    return Palettes(
        **{
            name: getattr(MUTED_PALETTES if i < muted_count else DEFAULT_PALETTES, name)
            for i, name in enumerate(SECTION_NAMES)
        }
    )


def palette_for_status(status: Optional[str]) -> Palettes:
    """
    Map a status label to a full palette.

    Matching is case-sensitive. Unknown or missing labels resolve to the
    default palette.
    """
    if status == BLOCKED:
        return BLOCKED_PALETTES

    muted_count = MUTED_SECTIONS.get(status) if status is not None else None
    if muted_count is None:
        if status:
            logger.debug("Unrecognised status, using default palette", status=status)
        return DEFAULT_PALETTES

    return mix_palettes(muted_count)


def known_statuses():
    return [BLOCKED, *MUTED_SECTIONS]
