"""Pixel Art Editor - command-line entry point."""

import argparse
import logging
import sys

from config_manager import ConfigManager
from models import (
    DEFAULT_NOISE_LEVEL,
    DEFAULT_PIXEL_SIZE,
    MAX_NOISE_LEVEL,
    MAX_PIXEL_SIZE,
    MIN_NOISE_LEVEL,
    MIN_PIXEL_SIZE,
    ExportFormat,
    FilterParameters,
)
from pixel_art import EditorSession, ImageProcessor, PixelArtError
from pixel_art.session import format_for_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-art",
        description="Turn an image into pixel art and export it as PNG or SVG",
    )
    parser.add_argument("image_path", help="Path to the image file to process")
    parser.add_argument(
        "-o",
        "--output",
        help="Output file (default: pixel-art.png or pixel-art.svg in the current directory)",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        help="Export format (default: from the output suffix, else png)",
    )
    parser.add_argument(
        "--pixel-size",
        type=int,
        help=f"Block size in pixels, {MIN_PIXEL_SIZE}-{MAX_PIXEL_SIZE} (default: {DEFAULT_PIXEL_SIZE})",
    )
    parser.add_argument(
        "--noise",
        type=int,
        help=f"Noise level in percent, {MIN_NOISE_LEVEL}-{MAX_NOISE_LEVEL} (default: {DEFAULT_NOISE_LEVEL})",
    )
    parser.add_argument("--seed", type=int, help="Seed the noise for reproducible output")
    parser.add_argument("--preset", help="Load pixel size and noise level from a JSON preset")
    parser.add_argument("--save-preset", help="Save the effective settings to a JSON preset")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details")
    return parser


def resolve_parameters(args: argparse.Namespace) -> FilterParameters:
    """Preset values first, then explicit flags on top."""
    params = ConfigManager(args.preset).load() if args.preset else FilterParameters()
    return FilterParameters(
        pixel_size=args.pixel_size if args.pixel_size is not None else params.pixel_size,
        noise_level=args.noise if args.noise is not None else params.noise_level,
    )


def main(argv: "list[str] | None" = None) -> int:
    """Run the editor once over a single image. Returns the exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    params = resolve_parameters(args)

    if args.save_preset:
        ok, error = ConfigManager(args.save_preset).save(params)
        if ok:
            print(f"✓ Saved preset to {args.save_preset}")
        else:
            print(f"Warning: Could not save preset: {error}", file=sys.stderr)

    fmt = ExportFormat(args.format) if args.format else format_for_path(args.output)

    session = EditorSession(params, ImageProcessor(params, rng=args.seed))
    try:
        session.load(args.image_path)
        written = session.save(args.output, fmt)
    except PixelArtError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"✓ Saved {written} "
        f"(pixel size {params.pixel_size}, noise {params.noise_level}%)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
