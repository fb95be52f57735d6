#!/usr/bin/env python3
"""
shrink_notes.py
Flatten scanned or photographed notes to a small palette for compression and printing.

Usage:
  python shrink_notes.py INPUT [--outdir DIR] [--num-colors N] [--sample-fraction F]
                         [--brightness-threshold T] [--saturation-threshold T]
                         [--kmeans-max-iter N] [--no-saturate] [--no-white-background]
                         [--seed S] [--debug]

Input:
  Any Pillow-readable image, or a folder of them. Alpha is dropped.

Output:
  PNG shrinked_<stem>.png next to INPUT (or inside --outdir). Folder mode skips files
  that already carry the shrinked_ prefix.

Notes:
  Pipeline lives in noteshrink.pipeline; defaults in noteshrink.constants.
  Any load, save, or configuration failure ends the run with a non-zero exit.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np
from PIL import UnidentifiedImageError

from noteshrink.constants import IMAGE_EXTS, OUTPUT_PREFIX
from noteshrink.core_types import rgb_to_hex
from noteshrink.image_io import (
    is_image_file,
    load_image_rgb,
    output_path_for,
    save_image_rgb,
)
from noteshrink.options import ConfigError, ShrinkOptions
from noteshrink.pipeline import shrink_with_details
from noteshrink.utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

# CLI args & small helpers


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        sample_fraction, brightness_threshold, saturation_threshold: floats
        num_colors, kmeans_max_iter: ints
        saturate, white_background: bools
        seed: optional int for repeatable sampling
        debug: bool for per-stage details
    """
    defaults = ShrinkOptions()
    parser = argparse.ArgumentParser(
        prog="noteshrink",
        description="Flatten scanned notes to a small palette.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--sample-fraction",
        type=float,
        default=defaults.sample_fraction,
        help="Share of pixels sampled for palette analysis.",
    )
    parser.add_argument(
        "--brightness-threshold",
        type=float,
        default=defaults.brightness_threshold,
        help="HSV value distance from background that marks ink.",
    )
    parser.add_argument(
        "--saturation-threshold",
        type=float,
        default=defaults.saturation_threshold,
        help="HSV saturation distance from background that marks ink.",
    )
    parser.add_argument(
        "--num-colors",
        type=int,
        default=defaults.num_colors,
        help="Palette size including background.",
    )
    parser.add_argument(
        "--kmeans-max-iter",
        type=int,
        default=defaults.kmeans_max_iter,
        help="Cap on k-means rounds.",
    )
    parser.add_argument(
        "--no-saturate",
        dest="saturate",
        action="store_false",
        help="Keep palette saturation as clustered.",
    )
    parser.add_argument(
        "--no-white-background",
        dest="white_background",
        action="store_false",
        help="Keep the detected background colour instead of pure white.",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for pixel sampling"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose stage details")
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> ShrinkOptions:
    """Build validated ShrinkOptions from parsed CLI args."""
    return ShrinkOptions(
        sample_fraction=args.sample_fraction,
        brightness_threshold=args.brightness_threshold,
        saturation_threshold=args.saturation_threshold,
        num_colors=args.num_colors,
        kmeans_max_iter=args.kmeans_max_iter,
        saturate=args.saturate,
        white_background=args.white_background,
    ).validate()


def collect_inputs(src: Path) -> List[Path]:
    """Single file as-is; folder entries with image suffixes, sorted, minus prior outputs."""
    if not src.is_dir():
        return [src]
    files = [
        p
        for p in src.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.name.startswith(OUTPUT_PREFIX)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Per-file processing


def process_single_image(
    src_path: Path,
    outdir: Optional[Path],
    options: ShrinkOptions,
    rng: np.random.Generator,
    debug: bool,
) -> Path:
    """
    Process a single image path end-to-end:
      load -> shrink -> save -> report.
    """
    t_start = time.perf_counter()
    out_path = output_path_for(src_path, outdir)

    print_banner(src_path.name)

    rgb_in = load_image_rgb(src_path)
    height, width = rgb_in.shape[0], rgb_in.shape[1]
    if debug:
        debug_log(key_value_pairs_to_string([("Loaded", f"{width}x{height}")]))

    result = shrink_with_details(rgb_in, options, rng=rng, debug=debug)
    written = save_image_rgb(out_path, result.image)

    log(
        f"Wrote {written.name} | size={width}x{height} | palette_size={result.palette.shape[0]}"
    )
    log(
        key_value_pairs_to_string(
            [
                ("Background", rgb_to_hex(result.background)),
                ("Rendered as", rgb_to_hex(result.rendered_background)),
                ("Samples", result.num_samples),
                ("K-means iters", result.kmeans_iterations),
            ]
        )
    )
    log("Palette: " + " ".join(rgb_to_hex(row) for row in result.palette))
    log("Colours used:")
    for hex_code, count in colour_usage_report(result.image):
        log(f"  {hex_code}: {count:,}")
    log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    return written


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Handles a single file or a folder (processed in name order).
    Returns the process exit code.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        options = options_from_args(args)
    except ConfigError as e:
        error(str(e))
        return 1

    print_config_line("shrink", options.as_pairs(), debug=False)
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Seed", args.seed if args.seed is not None else "-")]
            )
        )

    src = args.src
    if not src.exists():
        print(f"error: not found: {src}", file=sys.stderr, flush=True)
        return 2
    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    files = collect_inputs(src)
    if src.is_dir() and args.debug:
        debug_log(key_value_pairs_to_string([("Images", len(files))]))

    rng = np.random.default_rng(args.seed)
    for path in files:
        if src.is_dir() and not is_image_file(path):
            warn(f"skipped unreadable image: {path.name}")
            continue
        try:
            process_single_image(path, args.outdir, options, rng, args.debug)
        except (OSError, UnidentifiedImageError, ConfigError) as e:
            error(f"{path}: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
