import os
import re
import numpy as np
from PIL import Image, PngImagePlugin, UnidentifiedImageError

from pixel_scramble.raster import ArraySource, unpack_argb

SEED_KEY = "seed"
RANDOM_SEED = -1

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_SEED_RE = re.compile(r"[+-]?[0-9]+")

# Pillow refuses oversized images with an error that is not an OSError
_READ_ERRORS = (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError)


class ImageIOError(OSError):
    """Image could not be read or written, or carries no usable seed."""


def random_seed() -> int:
    """Signed 64-bit seed drawn from system entropy."""
    return int.from_bytes(os.urandom(8), 'big', signed=True)


def rgba_to_packed(arr) -> np.ndarray:
    """(h, w, 4) uint8 RGBA array -> (h, w) uint32 ARGB array."""
    a = np.asarray(arr, dtype=np.uint32)
    return (a[..., 3] << 24) | (a[..., 0] << 16) | (a[..., 1] << 8) | a[..., 2]


def packed_to_rgba(packed) -> np.ndarray:
    packed = np.asarray(packed, dtype=np.uint32)
    h, w = packed.shape
    return unpack_argb(packed).reshape(h, w, 4)


def load_rgba(path: str) -> np.ndarray:
    """Open any Pillow-readable image as an (h, w, 4) uint8 RGBA array."""
    try:
        with Image.open(path) as img:
            return np.array(img.convert('RGBA'), dtype=np.uint8)
    except _READ_ERRORS as e:
        raise ImageIOError(f"cannot read image {path}: {e}") from e


def load_source(path: str) -> ArraySource:
    return ArraySource(rgba_to_packed(load_rgba(path)))


def to_image(packed) -> Image.Image:
    return Image.fromarray(packed_to_rgba(packed), 'RGBA')


def save_image(packed, path: str, seed=None):
    """Save packed pixels as PNG; a seed is stored as a tEXt entry."""
    info = None
    if seed is not None:
        info = PngImagePlugin.PngInfo()
        info.add_text(SEED_KEY, str(seed))
    try:
        to_image(packed).save(path, format='PNG', pnginfo=info)
    except (OSError, ValueError) as e:
        raise ImageIOError(f"cannot write image {path}: {e}") from e


def read_seed(path: str) -> int:
    """Return the scramble seed stored in the PNG metadata of `path`."""
    try:
        with Image.open(path) as img:
            img.load()
            # tEXt, zTXt and iTXt chunks all end up in img.text for PNG files
            found = dict(getattr(img, 'text', None) or {})
    except _READ_ERRORS as e:
        raise ImageIOError(f"cannot read image {path}: {e}") from e

    value = found.get(SEED_KEY)
    if value is None:
        raise ImageIOError(f"no '{SEED_KEY}' entry in metadata of {path}")
    # plain ASCII decimal only: no padding, no digit separators
    if not isinstance(value, str) or not _SEED_RE.fullmatch(value):
        raise ImageIOError(f"malformed seed {value!r} in {path}")
    seed = int(value)
    if not INT64_MIN <= seed <= INT64_MAX:
        raise ImageIOError(f"seed {seed} in {path} is not a 64-bit integer")
    return seed
