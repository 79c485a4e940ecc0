#!/usr/bin/env python3
"""
recolor_seeds.py
Recolour an image with an overlay grown from coloured seed points.

Usage:
  python recolor_seeds.py --original IMAGE --input SEEDS.json --output OUT.png
                          [--radius R] [--scale S] [--alpha A]
                          [--variant circles|voronoi] [--workers N] [--seed N]
                          [--measure] [--debug]

Variants:
  circles : discs of --radius around each seed; every covered pixel is blended
            with the colour of its nearest seed.
  voronoi : seed-coloured Voronoi cells, shown through the same disc mask.

Input:
  SEEDS.json is an array of {"id": "...", "x": "12", "y": "34"} records.
  Coordinates are multiplied by --scale. Each seed gets a random light colour;
  --seed makes the colours reproducible.

Output:
  PNG. Nothing is written when a step fails.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np
from PIL import UnidentifiedImageError

from seed_recolor.constants import (
    DEFAULT_ALPHA,
    DEFAULT_INPUT,
    DEFAULT_ORIGINAL,
    DEFAULT_OUTPUT,
    DEFAULT_RADIUS,
    DEFAULT_SCALE,
    VARIANTS,
)
from seed_recolor.errors import RecolorError
from seed_recolor.image_io import load_image_rgba, save_png_rgba
from seed_recolor.pipeline import PipelineConfig, run_pipeline
from seed_recolor.seeds import build_seeds, load_seed_records
from seed_recolor.utils import (
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    measure,
    print_banner,
    print_config_line,
)

# CLI args & small helpers


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for seed recolouring.

    Returns:
      argparse.Namespace with:
        radius, scale, alpha: core tunables
        original: Path to the image to recolour
        input: Path to the seed JSON
        output: Path of the PNG to write
        variant: "circles" | "voronoi"
        workers: threads for the recolour pass
        seed: optional RNG seed for seed colours
        measure, debug: bool
    """
    parser = argparse.ArgumentParser(
        prog="recolor_seeds",
        description="Recolour an image with an overlay grown from coloured seed points.",
    )
    parser.add_argument(
        "--radius", type=int, default=DEFAULT_RADIUS, help="The radius used for all circles."
    )
    parser.add_argument(
        "--scale", type=int, default=DEFAULT_SCALE, help="Scale factor for x and y coordinates."
    )
    parser.add_argument(
        "--alpha",
        type=int,
        default=DEFAULT_ALPHA,
        help="The alpha factor (0..255) applied to the overlay.",
    )
    parser.add_argument(
        "--original",
        type=Path,
        default=Path(DEFAULT_ORIGINAL),
        help="The original image to overlay.",
    )
    parser.add_argument(
        "--input", type=Path, default=Path(DEFAULT_INPUT), help="The input JSON file."
    )
    parser.add_argument(
        "--output", type=Path, default=Path(DEFAULT_OUTPUT), help="The generated PNG image."
    )
    parser.add_argument(
        "--variant", choices=list(VARIANTS), default="circles", help="Overlay style."
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Recolour threads"
    )
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for seed colours")
    parser.add_argument(
        "--measure", action="store_true", help="Measures the time of the single steps."
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def check_file_ending(path: Path, ext: str) -> Optional[str]:
    """Error message if `path` does not end in `ext`, else None."""
    if path.suffix.lower() != ext:
        return f"Invalid file extension. Expected a {ext[1:].upper()} file: {path}"
    return None


def check_paths(args: argparse.Namespace) -> Optional[str]:
    """First problem with the input/output paths, or None."""
    problem = check_file_ending(args.input, ".json") or check_file_ending(
        args.output, ".png"
    )
    if problem:
        return problem
    for path in (args.input, args.original):
        if not path.is_file():
            return f"File not found: {path}"
    return None


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    problem = check_paths(args)
    if problem:
        error(problem)
        return 2

    config = PipelineConfig(
        radius=args.radius,
        scale=args.scale,
        alpha=args.alpha,
        workers=args.workers,
        rng_seed=args.seed,
        variant=args.variant,
        measure=args.measure,
        debug=args.debug,
    )
    print_config_line(
        "run",
        [
            ("Variant", config.variant),
            ("Radius", config.radius),
            ("Scale", config.scale),
            ("Alpha", config.alpha),
            ("Workers", config.workers),
        ],
        debug=False,
    )

    print_banner(args.original.name)
    t_start = time.perf_counter()
    try:
        config.validate()
        rng = np.random.default_rng(config.rng_seed)
        with measure("Read points from JSON", config.measure):
            records = load_seed_records(args.input)
            seeds = build_seeds(
                records,
                scale=config.scale,
                rng=rng,
                as_float=config.variant == "voronoi",
            )
        with measure("Read original image", config.measure):
            original = load_image_rgba(args.original)
        if config.debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Seeds", len(seeds)),
                        ("Loaded", f"{original.shape[1]}x{original.shape[0]}"),
                    ]
                )
            )
        result = run_pipeline(original, seeds, config)
        with measure("Write to file", config.measure):
            out_path = save_png_rgba(args.output, result)
    except RecolorError as e:
        error(str(e))
        return 1
    except (OSError, UnidentifiedImageError) as e:
        error(f"{type(e).__name__}: {e}")
        return 2

    log(f"File written to: {out_path.resolve()}")
    if config.measure:
        log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
