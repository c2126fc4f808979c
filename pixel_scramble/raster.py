# pixel_scramble/raster.py
# reversible pixel shuffle: one swap sequence, replayed forwards or backwards
from enum import Enum
from typing import List, NamedTuple, Protocol, Sequence

import numpy as np

from pixel_scramble.prng import RandomNumberGenerator


class SwapDirection(Enum):
    FORWARD = "forward"     # scramble
    BACKWARD = "backward"   # descramble


class SwapElement(NamedTuple):
    left_index: int
    right_index: int


class PixelSource(Protocol):
    width: int
    height: int

    def get_row(self, y: int) -> Sequence[int]:
        ...


class ArraySource:
    """PixelSource over a (height, width) array of packed ARGB ints."""

    def __init__(self, packed):
        packed = np.asarray(packed, dtype=np.uint32)
        if packed.ndim != 2:
            raise ValueError(f"expected a 2-D array of packed pixels, got shape {packed.shape}")
        self.pixels = packed
        self.height, self.width = packed.shape

    def get_row(self, y: int) -> np.ndarray:
        return self.pixels[y]


def unpack_argb(packed) -> np.ndarray:
    """Split packed 0xAARRGGBB ints into an (N, 4) uint8 array of [R, G, B, A]."""
    p = np.asarray(packed, dtype=np.uint32).reshape(-1)
    out = np.empty((p.size, 4), dtype=np.uint8)
    out[:, 0] = (p >> 16) & 0xFF
    out[:, 1] = (p >> 8) & 0xFF
    out[:, 2] = p & 0xFF
    out[:, 3] = (p >> 24) & 0xFF
    return out


def pack_argb(rgba) -> np.ndarray:
    """Inverse of unpack_argb, except alpha is always written as 255."""
    c = np.asarray(rgba, dtype=np.uint32).reshape(-1, 4)
    return (np.uint32(0xFF) << 24) | (c[:, 0] << 16) | (c[:, 1] << 8) | c[:, 2]


def build_swaps(seed: int, n: int) -> List[SwapElement]:
    rand = RandomNumberGenerator(seed)
    swaps = []
    for left in range(n):
        # left <= right < n
        right = left + int(rand.random(0, n - left))
        swaps.append(SwapElement(left, right))
    return swaps


def apply_swaps(items, swaps: Sequence[SwapElement], direction: SwapDirection):
    """Swap elements of a mutable sequence in place and return it."""
    order = swaps if direction is SwapDirection.FORWARD else reversed(swaps)
    for left, right in order:
        items[left], items[right] = items[right], items[left]
    return items


def create(direction: SwapDirection, seed: int, source: PixelSource) -> np.ndarray:
    """
    Scramble (FORWARD) or descramble (BACKWARD) every pixel of `source`.

    Returns a (height, width) uint32 array of packed ARGB pixels. The alpha
    channel of every output pixel is 255.
    """
    width, height = source.width, source.height
    if width * height == 0:
        return np.zeros((height, width), dtype=np.uint32)

    rows = [np.asarray(source.get_row(y), dtype=np.uint32)[:width] for y in range(height)]
    buffer = unpack_argb(np.concatenate(rows))

    swaps = build_swaps(seed, buffer.shape[0])
    # swap positions on an index list, then gather the pixels once
    order = apply_swaps(list(range(buffer.shape[0])), swaps, direction)
    buffer = buffer[np.asarray(order, dtype=np.intp)]

    return pack_argb(buffer).reshape(height, width)


def scramble(seed: int, source: PixelSource) -> np.ndarray:
    return create(SwapDirection.FORWARD, seed, source)


def descramble(seed: int, source: PixelSource) -> np.ndarray:
    return create(SwapDirection.BACKWARD, seed, source)
