"""
Palette data for totem icons.

Defines the five-section palette tables (default, muted, blocked) and the
normalisation rules that keep colour lookup index-stable:

- a section's fill colours are always exactly ``PALETTE_LENGTH`` long
  (truncated, or padded with ``FALLBACK_COLOR``)
- a missing section is replaced wholesale by the default section
- missing background/border values fall back to the default section's

Palettes never influence geometry; they are only read at colour assignment
and rasterisation time.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

import structlog

logger = structlog.get_logger()

PALETTE_LENGTH = 5
FALLBACK_COLOR = "#000000"
SECTION_NAMES = ("section0", "section1", "section2", "section3", "section4")


@dataclass(frozen=True)
class PaletteSection:
    """Colours for one horizontal band of the icon."""

    colors: Tuple[str, ...]
    background: str
    border: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": list(self.colors),
            "background": self.background,
            "border": self.border,
        }


@dataclass(frozen=True)
class Palettes:
    """A full five-section palette, ``section0`` at the top."""

    section0: PaletteSection
    section1: PaletteSection
    section2: PaletteSection
    section3: PaletteSection
    section4: PaletteSection

    @property
    def sections(self) -> Tuple[PaletteSection, ...]:
        return tuple(getattr(self, name) for name in SECTION_NAMES)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: getattr(self, name).to_dict() for name in SECTION_NAMES}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Palettes":
        """
        Build palettes from the editor's JSON shape.

        Malformed input is repaired section by section against the default
        table rather than rejected.
        """
        return resolve_palettes(data)


def normalize_colors(
    colors: Optional[List[str]], length: int = PALETTE_LENGTH, fill: str = FALLBACK_COLOR
) -> Tuple[str, ...]:
    """
    Truncate or pad a colour list to exactly ``length`` entries.

    Non-string entries are replaced by ``fill`` in place so later colours
    keep their index.
    """
    colors = [c if isinstance(c, str) else fill for c in (colors or [])]
    if len(colors) >= length:
        return tuple(colors[:length])
    return tuple(colors) + (fill,) * (length - len(colors))


def _section(colors: List[str], background: str, border: str) -> PaletteSection:
    return PaletteSection(colors=tuple(colors), background=background, border=border)


DEFAULT_PALETTES = Palettes(
    section0=_section(
        ["#FF6B35", "#F7931E", "#FFD23F", "#FF8C42", "#C73E1D"], "#FFF3E0", "#C73E1D"
    ),
    section1=_section(
        ["#0D7377", "#14A085", "#A4F1D1", "#7FDBDA", "#41B3A3"], "#E0F7FA", "#0D7377"
    ),
    section2=_section(
        ["#6C5CE7", "#A29BFE", "#FD79A8", "#FDCB6E", "#E17055"], "#F3E5F5", "#6C5CE7"
    ),
    section3=_section(
        ["#00B894", "#00CEC9", "#55A3FF", "#74B9FF", "#81ECEC"], "#E8F5E8", "#00B894"
    ),
    section4=_section(
        ["#FF7675", "#FD79A8", "#FDCB6E", "#E17055", "#F39C12"], "#FFF3E0", "#E17055"
    ),
)

MUTED_PALETTES = Palettes(
    section0=_section(
        ["#66533d", "#b9b4ac", "#835c54", "#66533e", "#835c53"], "#b9b4ac", "#835c54"
    ),
    section1=_section(
        ["#3a5550", "#aab1b1", "#647c7d", "#3a5551", "#647c7e"], "#aab1b1", "#647c7d"
    ),
    section2=_section(
        ["#4a4681", "#9f9ca0", "#716c93", "#4a4682", "#716c92"], "#9f9ca0", "#716c93"
    ),
    section3=_section(
        ["#496e67", "#979b97", "#284d46", "#496e68", "#284d47"], "#979b97", "#284d46"
    ),
    section4=_section(
        ["#74493e", "#a89f9f", "#a68982", "#74493d", "#a68983"], "#a89f9f", "#a68982"
    ),
)

# All red tones; section2 carries a slightly darker third shade.
BLOCKED_PALETTES = Palettes(
    section0=_section(
        ["#e00000", "#b80000", "#9e0000", "#570000", "#000000"], "#ff0000", "#940000"
    ),
    section1=_section(
        ["#e00000", "#b80000", "#9e0000", "#570000", "#000000"], "#ff0000", "#940000"
    ),
    section2=_section(
        ["#e00000", "#b80000", "#930000", "#570000", "#000000"], "#ff0000", "#940000"
    ),
    section3=_section(
        ["#e00000", "#b80000", "#9e0000", "#570000", "#000000"], "#ff0000", "#940000"
    ),
    section4=_section(
        ["#e00000", "#b80000", "#9e0000", "#570000", "#000000"], "#FF0000", "#940000"
    ),
)


def resolve_section(override: Any, default: PaletteSection) -> PaletteSection:
    """
    Resolve one section: the override if usable, else the default.

    Accepts either a ``PaletteSection`` or a mapping with ``colors``,
    ``background`` and ``border`` keys.
    """
    if override is None:
        return PaletteSection(
            colors=normalize_colors(list(default.colors)),
            background=default.background,
            border=default.border,
        )

    if isinstance(override, PaletteSection):
        colors = list(override.colors)
        background = override.background
        border = override.border
    elif isinstance(override, Mapping):
        colors = override.get("colors")
        background = override.get("background")
        border = override.get("border")
    else:
        logger.warning(
            "Unusable palette section, using default",
            section_type=type(override).__name__,
        )
        return resolve_section(None, default)

    if colors is None:
        colors = list(default.colors)
    elif not isinstance(colors, (list, tuple)):
        logger.warning("Palette colours are not a list", colors=colors)
        colors = []
    elif len(colors) != PALETTE_LENGTH:
        logger.debug("Normalising palette colours", length=len(colors))

    return PaletteSection(
        colors=normalize_colors(list(colors)),
        background=background if isinstance(background, str) and background else default.background,
        border=border if isinstance(border, str) and border else default.border,
    )


def resolve_palettes(
    override: Any = None, default: Palettes = DEFAULT_PALETTES
) -> Palettes:
    """Resolve every section of ``override`` against ``default``."""
    if override is None:
        override = {}
    elif isinstance(override, Palettes):
        override = {name: getattr(override, name) for name in SECTION_NAMES}
    elif not isinstance(override, Mapping):
        logger.warning(
            "Unusable palettes, using defaults", palettes_type=type(override).__name__
        )
        override = {}

    resolved = {}
    for name in SECTION_NAMES:
        section = override.get(name)
        if section is None and override:
            logger.warning("Palette section missing, using default", section=name)
        resolved[name] = resolve_section(section, getattr(default, name))
    return Palettes(**resolved)


def palettes_to_json(palettes: Palettes, indent: int = 2) -> str:
    return json.dumps(palettes.to_dict(), indent=indent)


def palettes_from_json(text: str) -> Palettes:
    """Parse palettes exported by the palette editor."""
    return Palettes.from_dict(json.loads(text))
