"""
Spiral Galaxy
=============

Procedurally generated spiral galaxy with optional connection lines,
viewed with an orbit camera.

Controls:
    - Mouse drag: Rotate camera (keeps spinning, then settles)
    - Right drag: Pan
    - Mouse wheel / Q/E: Zoom
    - W/A/S/D: Rotate camera
    - TAB / SHIFT+TAB: Select parameter
    - LEFT/RIGHT: Adjust parameter (hold SHIFT for x10)
    - L: Toggle connection lines
    - R: New random seed
    - F or double click: Toggle fullscreen
    - H: Toggle help
    - ESC: Quit

Usage:
    python main.py                       # Default galaxy
    python main.py --preset web          # Start from a preset
    python main.py --preset 3            # Preset by menu index
    python main.py --list-presets        # Show presets
    python main.py --headless --seed 1   # Generate once and print a summary
"""

import argparse
import sys

from galaxy import GalaxyError, GalaxyPipeline
from tools.presets import PRESETS, get_preset_by_index, get_preset_params, print_preset_menu


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Procedural spiral galaxy viewer")
    parser.add_argument("--preset", default="classic", help="Preset key or menu index (see --list-presets)")
    parser.add_argument("--list-presets", action="store_true", help="List presets and exit")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible generation")
    parser.add_argument("--count", type=int, default=None, help="Override particle count")
    parser.add_argument("--lines", action="store_true", help="Enable connection lines")
    parser.add_argument("--headless", action="store_true",
                        help="Generate once and print a summary, no window")
    return parser.parse_args(argv)


def run_headless(params) -> int:
    pipeline = GalaxyPipeline()
    try:
        with pipeline.run(params) as buffers:
            print(f"[Galaxy] points={buffers.point_count:,} "
                  f"segments={buffers.segment_count:,} time={buffers.elapsed:.2f}s")
    except GalaxyError as e:
        print(f"[Galaxy] Error: {e}")
        return 1
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.list_presets:
        print_preset_menu()
        return 0

    if args.preset.isdigit():
        key, _ = get_preset_by_index(int(args.preset))
        args.preset = key if key is not None else args.preset

    if args.preset not in PRESETS:
        print(f"[App] Unknown preset: {args.preset}")
        print_preset_menu()
        return 1

    overrides = {"seed": args.seed, "count": args.count}
    if args.lines:
        overrides["show_lines"] = True
    try:
        params = get_preset_params(args.preset, **overrides)
    except GalaxyError as e:
        print(f"[App] Invalid parameters: {e}")
        return 1

    if args.headless:
        return run_headless(params)

    from core.application import GalaxyApplication

    app = GalaxyApplication(params)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
