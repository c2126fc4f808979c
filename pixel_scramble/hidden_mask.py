# pixel_scramble/hidden_mask.py
# "darken" style composite used to hide one image behind another
import numpy as np

HIDDEN = 0.0
SHOWN = 1.0

# opacity steps of the viewer keys, in percent
STEP_SMALL = 5
STEP_PAGE = 25
STEP_FULL = 100


def adjust_opacity(current: float, step: int) -> float:
    """Move the opacity by step percent, clamped to [0, 1]."""
    return max(min(SHOWN, current + step / 100.0), HIDDEN)


def blend(src, dst, opacity: float) -> np.ndarray:
    """
    Composite RGBA `src` onto RGBA `dst` and return the new dst pixels.

    Colour channels take the darker of both images, alpha is the union of
    both alphas; the result is then mixed into dst by `opacity` (0 keeps dst,
    1 keeps the blend). Only the overlapping top-left region is composited.
    """
    if not HIDDEN <= opacity <= SHOWN:
        raise ValueError("opacity must be between 0.0 and 1.0")

    src = np.asarray(src, dtype=np.uint8)
    dst = np.asarray(dst, dtype=np.uint8)
    h = min(src.shape[0], dst.shape[0])
    w = min(src.shape[1], dst.shape[1])
    s = src[:h, :w].astype(np.int32)
    d = dst[:h, :w].astype(np.int32)

    result = np.empty_like(d)
    result[..., :3] = np.minimum(s[..., :3], d[..., :3])
    result[..., 3] = np.minimum(255, s[..., 3] + d[..., 3] - (s[..., 3] * d[..., 3]) // 255)

    alpha = np.float32(opacity)
    mixed = d.astype(np.float32) + (result - d).astype(np.float32) * alpha

    out = dst.copy()
    out[:h, :w] = np.trunc(mixed).astype(np.int32) & 0xFF
    return out
