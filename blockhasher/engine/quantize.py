"""
Bit quantization for the engine package.

Thresholds each row of block values against that row's median: a block is 1
if strictly brighter than the median of its row, else 0. This policy is part
of the fingerprint format; changing it breaks comparability with stored
fingerprints.
"""

from __future__ import annotations

from .dependencies import np


def blocks_to_bits(values: np.ndarray) -> np.ndarray:
    """
    Quantize a (rows, cols) array of block values to a uint8 bit array.

    Examples:
        >>> blocks_to_bits(np.array([[1, 2, 3, 4], [8, 8, 8, 8]])).tolist()
        [[0, 0, 1, 1], [0, 0, 0, 0]]
    """
    medians = np.median(values, axis=1, keepdims=True)
    return (values > medians).astype(np.uint8)


__all__ = ['blocks_to_bits']
