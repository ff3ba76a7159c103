"""Interactive Perlin noise explorer that writes grayscale BMP images."""

from __future__ import annotations

import argparse
import math
import secrets
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

from .bmp import RGB, Image
from .perlin import PerlinNoise

PREVIEW_SIZE = 20
PREVIEW_STEP = 0.1
PREVIEW_OCTAVES = 6
IMAGE_SIZE = 512

_BANNER = (
    "---------------------------------\n"
    "* frequency [0.1 .. 8.0 .. 64.0] \n"
    "* octaves   [1 .. 8 .. 16]       \n"
    "* seed      [0 .. 2^32-1]        \n"
    "---------------------------------\n"
)


def render(perlin: PerlinNoise, image: Image, frequency: float, octaves: int) -> None:
    """Fill ``image`` with grayscale octave noise spanning ``frequency`` periods."""
    fx = frequency / image.width
    fy = frequency / image.height
    for y in range(image.height):
        for x in range(image.width):
            image.set(x, y, RGB.gray(perlin.octave2d_01(x * fx, y * fy, octaves)))


def output_name(frequency: float, octaves: int, seed: int) -> str:
    """File name recording the parameters an image was made with."""
    return f"f{frequency:g}o{octaves}_{seed}.bmp"


def preview(perlin: PerlinNoise) -> str:
    """A small text map of the noise, one digit per sample."""
    lines = []
    for y in range(PREVIEW_SIZE):
        digits = []
        for x in range(PREVIEW_SIZE):
            noise = perlin.octave2d_01(x * PREVIEW_STEP, y * PREVIEW_STEP, PREVIEW_OCTAVES)
            digits.append(str(int(math.floor(noise * 10) - 0.5)))
        lines.append("".join(digits))
    return "\n".join(lines) + "\n"


def _tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def _ask(tokens: Iterator[str], prompt: str) -> str | None:
    print(prompt, end="", flush=True)
    return next(tokens, None)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render Perlin noise images interactively.")
    parser.add_argument("--output-dir", default=".")
    parser.add_argument("--size", type=int, default=IMAGE_SIZE)
    args = parser.parse_args(argv)

    print(preview(PerlinNoise(secrets.randbits(32))), end="")

    image = Image(args.size, args.size)
    output_dir = Path(args.output_dir)
    print(_BANNER, end="")
    tokens = _tokens(sys.stdin)

    while True:
        try:
            raw = _ask(tokens, "double frequency = ")
            if raw is None:
                return 0
            frequency = min(max(float(raw), 0.1), 64.0)

            raw = _ask(tokens, "int32 octaves    = ")
            if raw is None:
                return 0
            octaves = min(max(int(raw), 1), 16)

            raw = _ask(tokens, "uint32 seed      = ")
            if raw is None:
                return 0
            seed = int(raw) % 2**32
        except ValueError as error:
            print(f"\ninvalid input: {error}", file=sys.stderr)
            return 1

        render(PerlinNoise(seed), image, frequency, octaves)
        name = output_name(frequency, octaves, seed)
        try:
            image.save_bmp(output_dir / name)
        except OSError:
            print("...failed")
        else:
            print(f'...saved "{name}"')

        answer = _ask(tokens, "continue? [y/n] >")
        if answer != "y":
            return 0
        print()


if __name__ == "__main__":
    raise SystemExit(main())