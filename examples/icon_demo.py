#!/usr/bin/env python3
"""
Demo script rendering one seed under every status palette.

Usage:
    python examples/icon_demo.py [seed] [output_dir]

Writes standard and high-res PNGs for each status, plus a framed copy of
the default palette.
"""

import sys
from pathlib import Path

from py_totem.core.export import to_png_bytes
from py_totem.core.generator import render_icon
from py_totem.core.status_palettes import known_statuses
from py_totem.logging_setup import configure_logging


def main():
    """Render the demo set."""
    configure_logging("INFO", "console")

    seed = sys.argv[1] if len(sys.argv) > 1 else "john@example.com"
    output_dir = Path(sys.argv[2] if len(sys.argv) > 2 else "totem_icons")
    output_dir.mkdir(parents=True, exist_ok=True)

    print(f"Rendering totem icons for seed {seed!r} into {output_dir}/")

    for status in [None, *known_statuses()]:
        label = status or "default"
        for high_res in (False, True):
            icon = render_icon(seed, status=status, high_res=high_res, cell_size=8)
            tier = "hires" if high_res else "std"
            path = output_dir / f"{label}_{tier}.png"
            path.write_bytes(to_png_bytes(icon.pixels))
            print(f"  {path.name}: {len(icon.cells)} cells, {len(icon.groups)} groups")

    framed = render_icon(seed, cell_size=8, framed=True)
    (output_dir / "default_framed.png").write_bytes(to_png_bytes(framed.pixels))
    print("Done.")


if __name__ == "__main__":
    main()
