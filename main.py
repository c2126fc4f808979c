#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

import numpy as np
from PIL import Image

from pixel_scramble import raster, hidden_mask, utils
from pixel_scramble.prng import RandomNumberGenerator


def _default_output(input_path: str, suffix: str) -> str:
    p = Path(input_path)
    return str(p.with_name(f"{p.stem}_{suffix}.png"))


def scramble_image(input_path: str, seed: int = utils.RANDOM_SEED, output_path: str = None) -> int:
    """Scramble an image file and return the normalized seed it was stored with."""
    if seed == utils.RANDOM_SEED:
        seed = utils.random_seed()
    # the normalized seed is what reproduces the stream, so that one is stored
    num = RandomNumberGenerator(seed).seed
    print(f"[+] Using seed: {num}")

    source = utils.load_source(input_path)
    scrambled = raster.scramble(num, source)

    output_path = output_path or _default_output(input_path, "scrambled")
    utils.save_image(scrambled, output_path, seed=num)
    print(f"[+] Scrambled saved to {output_path}")
    return num


def descramble_image(input_path: str, output_path: str = None) -> np.ndarray:
    seed = utils.read_seed(input_path)
    print(f"[+] Seed from metadata: {seed}")

    source = utils.load_source(input_path)
    restored = raster.descramble(seed, source)

    if output_path:
        utils.save_image(restored, output_path)
        print(f"[+] Descrambled saved to {output_path}")
    return restored


def reveal_image(input_path: str, cover_path: str, output_path: str, opacity: float = hidden_mask.SHOWN):
    """Descramble an image and composite it over a cover image."""
    restored = descramble_image(input_path)
    cover = utils.load_rgba(cover_path)

    composed = hidden_mask.blend(utils.packed_to_rgba(restored), cover, opacity)
    try:
        Image.fromarray(composed, 'RGBA').save(output_path, format='PNG')
    except (OSError, ValueError) as e:
        raise utils.ImageIOError(f"cannot write image {output_path}: {e}") from e
    print(f"[+] Revealed saved to {output_path} (opacity={opacity})")


def _seed_arg(value: str) -> int:
    try:
        seed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {value!r}")
    if not utils.INT64_MIN <= seed <= utils.INT64_MAX:
        raise argparse.ArgumentTypeError(f"seed out of 64-bit range: {value}")
    return seed


def _opacity_arg(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid opacity: {value!r}")
    if not hidden_mask.HIDDEN <= f <= hidden_mask.SHOWN:
        raise argparse.ArgumentTypeError("opacity must be between 0.0 and 1.0")
    return f


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Scramble and descramble image pixels with a seed")
    mode = p.add_mutually_exclusive_group(required=True)
    mode.add_argument("--scramble", help="image path to scramble")
    mode.add_argument("--descramble", help="scrambled PNG to restore")
    mode.add_argument("--reveal", help="scrambled PNG to restore and hide behind --cover")
    p.add_argument("--seed", type=_seed_arg, default=utils.RANDOM_SEED,
                   help=f"scramble seed ({utils.RANDOM_SEED} picks a random one)")
    p.add_argument("--cover", help="cover image for --reveal")
    p.add_argument("--opacity", type=_opacity_arg, default=hidden_mask.SHOWN,
                   help="blend factor for --reveal, 0.0 hides, 1.0 shows")
    p.add_argument("--opacity-step", type=int, action="append", default=[],
                   help="percent added to --opacity, clamped to 0..100 (repeatable, e.g. -5 or 25)")
    p.add_argument("--output", help="output path")
    return p


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    try:
        if args.scramble:
            scramble_image(args.scramble, args.seed, args.output)
        elif args.descramble:
            output = args.output or _default_output(args.descramble, "descrambled")
            descramble_image(args.descramble, output)
        else:
            if not args.cover:
                p.error("--reveal requires --cover")
            output = args.output or _default_output(args.reveal, "revealed")
            opacity = args.opacity
            for step in args.opacity_step:
                opacity = hidden_mask.adjust_opacity(opacity, step)
            reveal_image(args.reveal, args.cover, output, opacity)
    except utils.ImageIOError as e:
        print(f"[-] Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
