"""
Luma extraction for the engine package.

Reduces a PixelGrid to one integer brightness value per pixel using the
same fixed-point ITU-R 601-2 transform PIL uses for convert('L').
Fully transparent pixels count as white.
"""

from __future__ import annotations

from ..config import LUMA_SHIFT, LUMA_WEIGHTS, TRANSPARENT_LUMA
from ..models import PixelGrid
from .dependencies import np


def luma_plane(grid: PixelGrid) -> np.ndarray:
    """
    Compute the (height, width) int64 luma plane of a grid.

    Single-channel grids pass through unchanged.
    """
    pixels = grid.as_array().astype(np.int64)

    if grid.channels in (1, 2):
        luma = pixels[..., 0].copy()
    else:
        weights = np.array(LUMA_WEIGHTS, dtype=np.int64)
        luma = (pixels[..., :3] @ weights + (1 << (LUMA_SHIFT - 1))) >> LUMA_SHIFT

    if grid.has_alpha:
        luma[pixels[..., -1] == 0] = TRANSPARENT_LUMA

    return luma


__all__ = ['luma_plane']
