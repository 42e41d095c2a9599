#!/usr/bin/env python3
"""
MandalaRotate - Rotational symmetry drawing

Draw a freehand stroke and watch it repeated around the centre as a
kaleidoscope. Press 's' to save a bitmap, 'c' to clear.

Without a window, --replay plays recorded pointer samples through the
same engine and saves the result.
"""

import argparse
import cProfile
import sys
from pathlib import Path
from typing import Optional

from config import Config
from config_persistence import load_config
from logging_utils import log_event, set_log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run MandalaRotate")
    parser.add_argument("--segments", type=int, help="Symmetry sectors (even values tile cleanly)")
    parser.add_argument("--width", type=int, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, help="Canvas height in pixels")
    parser.add_argument("--capacity", type=int, help="Live points before a frame bakes to the surface")
    parser.add_argument(
        "--standard-quadrants",
        action="store_true",
        help="Use 2*pi - base for quadrant IV angles instead of the legacy rule",
    )
    parser.add_argument("--replay", type=Path, help="Replay pointer samples from a JSON file without a window")
    parser.add_argument("--save", help="Bitmap name to save after --replay (default: config save name)")
    parser.add_argument("--config", type=Path, help="Config JSON to load and save (default: ~/.mandalarotate/config.json)")
    parser.add_argument("--log-level", help="DEBUG/INFO/WARNING/ERROR")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable cProfile and save stats to --profile-out",
    )
    parser.add_argument(
        "--profile-out",
        default="profile.prof",
        help="Path to save cProfile stats (default: profile.prof)",
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Copy command-line overrides onto the loaded config."""
    if args.segments is not None:
        config.symmetry.segments = args.segments
    if args.width is not None:
        config.canvas.width = args.width
    if args.height is not None:
        config.canvas.height = args.height
    if args.capacity is not None:
        config.buffer.capacity = args.capacity
    if args.standard_quadrants:
        config.geometry.standard_quadrant_angles = True
    if args.log_level:
        config.log_level = args.log_level
    return config


def run_replay(config: Config, samples_path: Path, save_name: Optional[str]) -> int:
    from mandala_engine import MandalaEngine
    from sample_replay import SampleReplayer, load_samples

    try:
        samples = load_samples(samples_path)
    except (OSError, ValueError) as e:
        log_event("ERROR", "Replay", "Could not load samples", path=samples_path, error=e)
        return 1

    engine = MandalaEngine.from_config(config)
    replayer = SampleReplayer(
        engine,
        samples,
        input_interval_s=config.render.input_interval_ms / 1000.0,
        frame_interval_s=config.render.frame_interval_ms / 1000.0,
    )
    replayer.run()

    result = engine.save(save_name or config.export.save_name)
    return 0 if result.ok else 1


def run_app(config: Config, config_path: Optional[Path] = None) -> int:
    print("[Startup] Loading GUI...", flush=True)
    from main import main as gui_main

    return gui_main(config, config_path)


def main() -> None:
    args = build_parser().parse_args()

    config = apply_overrides(load_config(args.config), args)
    set_log_level(config.log_level)

    def target() -> int:
        if args.replay is not None:
            return run_replay(config, args.replay, args.save)
        return run_app(config, args.config)

    try:
        if args.profile:
            profiler = cProfile.Profile()
            profiler.enable()
            exit_code = target()
            profiler.disable()
            profiler.dump_stats(args.profile_out)
        else:
            exit_code = target()
    except ValueError as e:
        # Invalid canvas/symmetry settings are rejected by the engine
        print(f"[Startup] Invalid configuration: {e}", flush=True)
        exit_code = 2

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
