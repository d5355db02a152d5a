"""
Hamming distance between fingerprints.

Fingerprints are only comparable when they have the same length (i.e. were
produced with the same bits value). Unequal lengths raise LengthMismatch
instead of comparing a common prefix.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from .exceptions import LengthMismatch
from .models import Fingerprint

FingerprintLike = Union[Fingerprint, Sequence[int]]


def _as_bit_array(value: FingerprintLike) -> np.ndarray:
    if isinstance(value, Fingerprint):
        return value.to_array()
    return np.asarray(value, dtype=bool).reshape(-1)


def hamming_distance(a: FingerprintLike, b: FingerprintLike) -> int:
    """
    Count the bit positions where two fingerprints differ.

    Args:
        a: First fingerprint (Fingerprint or sequence of 0/1)
        b: Second fingerprint

    Returns:
        Number of differing bits

    Raises:
        LengthMismatch: If the fingerprints have different lengths

    Examples:
        >>> hamming_distance([0, 1, 1, 0], [1, 1, 0, 0])
        2
    """
    left = _as_bit_array(a)
    right = _as_bit_array(b)
    if left.size != right.size:
        raise LengthMismatch(left.size, right.size)
    return int(np.count_nonzero(left != right))


def hex_hamming_distance(hex_a: str, hex_b: str, bit_count: Optional[int] = None) -> int:
    """
    Hamming distance between two hex-encoded fingerprints.

    Args:
        hex_a: First fingerprint as hex
        hex_b: Second fingerprint as hex
        bit_count: Meaningful bit count for both (default: 4 * hex length)

    Raises:
        LengthMismatch: If the hex strings have different lengths
    """
    hex_a = hex_a.strip()
    hex_b = hex_b.strip()
    if len(hex_a) != len(hex_b):
        raise LengthMismatch(len(hex_a) * 4, len(hex_b) * 4)
    return hamming_distance(
        Fingerprint.from_hex(hex_a, bit_count),
        Fingerprint.from_hex(hex_b, bit_count),
    )


def similarity(a: FingerprintLike, b: FingerprintLike) -> float:
    """Similarity in [0, 1]: 1 - distance / length."""
    distance = hamming_distance(a, b)
    length = _as_bit_array(a).size
    if length == 0:
        return 1.0
    return 1.0 - (distance / length)


__all__ = [
    'hamming_distance',
    'hex_hamming_distance',
    'similarity',
]
