"""CLI entry point for Jelatofish."""

import argparse
import logging
from pathlib import Path

from PIL import ImageColor

from . import generate
from .colour import Colour
from .errors import JelatofishError
from .generators import GeneratorKind
from .logging_config import setup_logging
from .renderer import render_texture


def _parse_colour(value):
    try:
        return Colour.from_rgb8(ImageColor.getrgb(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser():
    parser = argparse.ArgumentParser(
        prog="jelatofish",
        description="Generate seamless procedural creature images"
    )
    parser.add_argument(
        "--width", "-W", type=int, default=256,
        help="Output image width in pixels (default: 256)"
    )
    parser.add_argument(
        "--height", "-H", type=int, default=256,
        help="Output image height in pixels (default: 256)"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducible generation"
    )
    parser.add_argument(
        "--output", "-o", default="jelatofish.png",
        help="Output file path (default: jelatofish.png)"
    )
    parser.add_argument(
        "--layers", "-l", type=int, default=None,
        help="Number of layers 2-6 (default: random)"
    )
    parser.add_argument(
        "--cutoff", type=float, default=None,
        help="Alpha cutoff threshold 0.0-0.0625 (default: random)"
    )
    parser.add_argument(
        "--palette", "-p", nargs="+", type=_parse_colour, default=None,
        metavar="COLOUR",
        help="Palette colours, e.g. '#ff8800' or 'teal' (default: random)"
    )
    parser.add_argument(
        "--generator", "-g", choices=[k.value for k in GeneratorKind],
        default=None,
        help="Render a single greyscale texture from this generator"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log rendering details"
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.generator:
            image = render_texture(args.width, args.height, args.generator,
                                   seed=args.seed)
        else:
            image = generate(
                width=args.width,
                height=args.height,
                seed=args.seed,
                layer_count=args.layers,
                cutoff_threshold=args.cutoff,
                palette=tuple(args.palette or ()),
            )
    except JelatofishError as exc:
        parser.error(str(exc))

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output))
    print(f"Saved image ({image.size[0]}x{image.size[1]}) to {output}")


if __name__ == "__main__":
    main()
