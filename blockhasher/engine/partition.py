"""
Block partitioning for the engine package.

Splits one image dimension into a fixed number of contiguous blocks.
Block lengths are floor(length / count); the remainder adds one pixel to
each of the last blocks, so every pixel belongs to exactly one block.
"""

from __future__ import annotations

from ..config import MIN_BLOCK_SIZE
from ..exceptions import InvalidInput
from .dependencies import np


def block_edges(length: int, count: int) -> np.ndarray:
    """
    Compute block boundaries along one dimension.

    Args:
        length: Number of pixels in the dimension
        count: Number of blocks

    Returns:
        Array of count + 1 increasing offsets, starting at 0 and ending at length

    Raises:
        InvalidInput: If count is not positive or a block would be smaller
            than MIN_BLOCK_SIZE

    Examples:
        >>> block_edges(10, 4).tolist()
        [0, 2, 4, 7, 10]
    """
    if count <= 0:
        raise InvalidInput(f"Block count must be positive, got {count}")
    base, remainder = divmod(length, count)
    if base < MIN_BLOCK_SIZE:
        raise InvalidInput(
            f"Cannot split {length} pixels into {count} blocks "
            f"of at least {MIN_BLOCK_SIZE} pixel(s)"
        )

    sizes = np.full(count, base, dtype=np.intp)
    if remainder:
        sizes[count - remainder:] += 1

    edges = np.zeros(count + 1, dtype=np.intp)
    np.cumsum(sizes, out=edges[1:])
    return edges


def subdivide_edges(edges: np.ndarray, factor: int) -> np.ndarray:
    """
    Split every block described by `edges` into `factor` cells.

    Each block is partitioned with the same rule as block_edges, so cells
    never straddle a block boundary.

    Returns:
        Array of len(edges - 1) * factor + 1 offsets
    """
    parts = [edges[:1]]
    for start, stop in zip(edges[:-1], edges[1:]):
        parts.append(start + block_edges(int(stop - start), factor)[1:])
    return np.concatenate(parts)


__all__ = ['block_edges', 'subdivide_edges']
