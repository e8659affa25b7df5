"""CLI entry point for NoiseForge."""

import argparse
import logging
from pathlib import Path

from . import NOISE_TYPES, generate
from .config import DEFAULT_SEED
from .interpolation import Interpolation, SimplexRadius

logger = logging.getLogger("noiseforge")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="noiseforge",
        description="Render deterministic procedural noise to a grayscale PNG",
    )
    parser.add_argument("kind", choices=sorted(NOISE_TYPES), help="Noise variant")
    parser.add_argument(
        "--seed", "-s", type=int, default=DEFAULT_SEED,
        help=f"Integer seed (default: {DEFAULT_SEED})"
    )
    parser.add_argument(
        "--size", type=int, default=256,
        help="Image width and height in pixels (default: 256)"
    )
    parser.add_argument(
        "--scale", type=float, default=32.0,
        help="Pixels per noise unit, larger is smoother (default: 32)"
    )
    parser.add_argument(
        "--period", "-p", type=int, default=None,
        help="Wrap lattice indices every N units on both axes; value and perlin "
             "tile in image space, simplex wraps its skewed lattice and does not"
    )
    parser.add_argument(
        "--interpolation", "-i", default=Interpolation.SMOOTHSTEP.value,
        choices=[member.value for member in Interpolation],
        help="Lattice kernel for value and perlin noise (default: smoothstep)"
    )
    parser.add_argument(
        "--radius", "-r", default=SimplexRadius.TRADITIONAL.name.lower(),
        choices=[member.name.lower() for member in SimplexRadius],
        help="Falloff preset for simplex noise (default: traditional)"
    )
    parser.add_argument(
        "--octaves", type=int, default=1,
        help="Number of fractal octaves (default: 1)"
    )
    parser.add_argument(
        "--output", "-o", default="noise.png",
        help="Output file path (default: noise.png)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log debug output"
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.size < 1:
        parser.error("--size must be positive")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.octaves < 1:
        parser.error("--octaves must be at least 1")

    kwargs = {"period": args.period}
    if args.kind == "simplex":
        kwargs["radius"] = args.radius
    else:
        kwargs["interpolation"] = args.interpolation

    image = generate(
        args.kind,
        size=args.size,
        seed=args.seed,
        scale=args.scale,
        octaves=args.octaves,
        **kwargs,
    )

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output))
    logger.info("Saved %s noise (%dx%d, seed %d) to %s",
                args.kind, image.size[0], image.size[1], args.seed, output)
    return 0


if __name__ == "__main__":
    main()
