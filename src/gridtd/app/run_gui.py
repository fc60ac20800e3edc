from __future__ import annotations

import argparse
import logging
from pathlib import Path

from gridtd.core.model.map import resolve_map_path


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Play on a map in a pyglet window.")
    ap.add_argument("--map", default="meadow", help="Map name (e.g. meadow) or path to json")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Imported late so the headless tools never need a display.
    from gridtd.gui.pyglet_app import run

    root = Path(__file__).resolve().parents[3]
    run(resolve_map_path(args.map, root=root))


if __name__ == "__main__":
    main()
