"""Command line entry point for threshold-studio."""

from __future__ import annotations

import argparse
import sys
from dataclasses import fields
from typing import Optional, Sequence

from .app import create_app
from .config import SETTINGS, ProcessingConfig, configure_logging
from .infrastructure.codec import load_image, next_output_path, save_image
from .infrastructure.formats import (
    ImageIOError,
    UnsupportedFormatError,
    file_extension,
    is_format_supported,
)
from .infrastructure.network import FETCHER, SourceError
from .processing.pipeline import process_image

DEFAULT_INPUT = "img.png"

_CONFIG_FIELDS = tuple(field.name for field in fields(ProcessingConfig))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="threshold-studio",
        description="Threshold, darken, and invert the pixels of an image",
    )
    parser.add_argument("input", nargs="?", help=f"Input image (default: {DEFAULT_INPUT})")
    parser.add_argument(
        "output",
        nargs="?",
        help="Output image. If omitted, the next free outputN.png is used.",
    )
    parser.add_argument(
        "format",
        nargs="?",
        help="Output format. Defaults to the output file's extension.",
    )
    parser.add_argument("--url", help="Fetch the input image over HTTP instead of from disk")
    parser.add_argument("--serve", action="store_true", help="Run the web studio instead")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")

    effects = parser.add_argument_group("effects")
    effects.add_argument("--binary", dest="use_binary_threshold", action=argparse.BooleanOptionalAction, default=None)
    effects.add_argument(
        "--adjust-neighbors",
        dest="adjust_black_pixels_neighbors",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    effects.add_argument(
        "--multiple-thresholds",
        dest="use_multiple_thresholds",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    effects.add_argument("--contrast", dest="apply_contrast", action=argparse.BooleanOptionalAction, default=None)
    effects.add_argument("--invert", dest="invert_colors", action=argparse.BooleanOptionalAction, default=None)

    thresholds = parser.add_argument_group("thresholds")
    thresholds.add_argument("--binary-threshold", type=float, default=None)
    thresholds.add_argument("--white-threshold", type=float, default=None)
    thresholds.add_argument("--black-threshold", type=float, default=None)
    thresholds.add_argument("--contrast-threshold", type=float, default=None)
    thresholds.add_argument("--multiplier", type=float, default=None)
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[ProcessingConfig] = None) -> ProcessingConfig:
    base = base or ProcessingConfig.from_env()
    overrides = {
        name: getattr(args, name)
        for name in _CONFIG_FIELDS
        if getattr(args, name, None) is not None
    }
    config, _ = base.with_overrides(overrides)
    return config


def run(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = configure_logging(args.log_level)

    if args.serve:
        create_app().run(host="0.0.0.0", port=SETTINGS.port, debug=False)
        return 0

    if args.url and args.input:
        # No input file with --url: the positionals are [output] [format].
        if args.format:
            parser.error("--url accepts at most [output] [format]")
        args.output, args.format, args.input = args.input, args.output, None

    config = config_from_args(args)

    try:
        if args.url:
            image = FETCHER.fetch_image(args.url)
        else:
            image = load_image(args.input or DEFAULT_INPUT)

        if args.output:
            output_format = args.format or file_extension(args.output)
            if not is_format_supported(output_format, for_reading=False):
                raise UnsupportedFormatError(output_format, for_reading=False)

        result = process_image(image, config)

        if args.output:
            save_image(result, args.output, output_format)
        else:
            save_image(result, next_output_path(), "png")
    except FileNotFoundError as exc:
        logger.error("Error: %s", exc)
        return 1
    except (ImageIOError, SourceError) as exc:
        logger.error("Error processing image: %s", exc)
        return 1

    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
