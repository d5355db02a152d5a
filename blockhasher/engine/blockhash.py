"""
Block hash computation.

Divides the image into a bits x bits grid of blocks, reduces each block to a
brightness value and thresholds every row of blocks against its median.

Two block-value strategies are available:
- QUICK: mean luma of the block, one pass over the pixels
- PRECISE: the block is split into up to OVERSAMPLE_FACTOR x OVERSAMPLE_FACTOR
  cells and the block value is the median of the cell means, which is less
  sensitive to small bright or dark spots (watermarks, compression artifacts)
"""

from __future__ import annotations

from typing import Union

from ..config import DEFAULT_BITS, MIN_BLOCK_SIZE, OVERSAMPLE_FACTOR
from ..exceptions import InvalidInput
from ..models import Fingerprint, HashMethod, HashParameters, PixelGrid
from .dependencies import np, _logger
from .luma import luma_plane
from .partition import block_edges, subdivide_edges
from .quantize import blocks_to_bits


def _region_means(luma: np.ndarray, row_edges: np.ndarray, col_edges: np.ndarray) -> np.ndarray:
    """Mean luma of each rectangle described by row/col edges."""
    sums = np.add.reduceat(luma, row_edges[:-1], axis=0)
    sums = np.add.reduceat(sums, col_edges[:-1], axis=1)
    areas = np.outer(np.diff(row_edges), np.diff(col_edges))
    return sums / areas


def _quick_block_values(luma, row_edges, col_edges) -> np.ndarray:
    return _region_means(luma, row_edges, col_edges)


def _precise_block_values(luma, row_edges, col_edges) -> np.ndarray:
    rows = len(row_edges) - 1
    cols = len(col_edges) - 1
    # Smallest block edge bounds how many cells fit per block
    cells_y = max(1, min(OVERSAMPLE_FACTOR, int(np.diff(row_edges).min())))
    cells_x = max(1, min(OVERSAMPLE_FACTOR, int(np.diff(col_edges).min())))

    cells = _region_means(
        luma,
        subdivide_edges(row_edges, cells_y),
        subdivide_edges(col_edges, cells_x),
    )
    cells = cells.reshape(rows, cells_y, cols, cells_x).transpose(0, 2, 1, 3)
    return np.median(cells.reshape(rows, cols, cells_y * cells_x), axis=2)


def compute_hash_with(grid: PixelGrid, params: HashParameters) -> Fingerprint:
    """
    Compute the block hash of a pixel grid.

    Args:
        grid: Decoded image
        params: Block grid size and method

    Returns:
        Fingerprint with exactly params.bits ** 2 bits

    Raises:
        InvalidInput: Zero-size grid, non-positive bits, or bits larger than
            the image so that a block would be empty
    """
    params.validate()
    bits = params.bits

    if grid.width == 0 or grid.height == 0:
        raise InvalidInput(f"Cannot hash an empty image ({grid.width}x{grid.height})")
    if bits * MIN_BLOCK_SIZE > grid.width or bits * MIN_BLOCK_SIZE > grid.height:
        raise InvalidInput(
            f"bits={bits} would produce empty blocks for a "
            f"{grid.width}x{grid.height} image"
        )

    luma = luma_plane(grid)
    row_edges = block_edges(grid.height, bits)
    col_edges = block_edges(grid.width, bits)

    if params.method is HashMethod.PRECISE:
        values = _precise_block_values(luma, row_edges, col_edges)
    else:
        values = _quick_block_values(luma, row_edges, col_edges)

    result = Fingerprint(tuple(int(b) for b in blocks_to_bits(values).flat))
    _logger.debug(
        f"Hashed {grid.width}x{grid.height} {grid.mode} grid "
        f"(bits={bits}, method={params.method.value}): {result}"
    )
    return result


def compute_hash(
    grid: PixelGrid,
    bits: int = DEFAULT_BITS,
    method: Union[HashMethod, str, bool] = HashMethod.QUICK,
) -> Fingerprint:
    """
    Compute the block hash of a pixel grid.

    Args:
        grid: Decoded image
        bits: Block grid size (fingerprint has bits * bits bits)
        method: HashMethod, 'quick'/'precise', or True for precise

    Returns:
        Fingerprint in row-major block order

    Examples:
        >>> grid = PixelGrid(4, 4, 1, [0, 0, 255, 255] * 4)
        >>> compute_hash(grid, bits=2).to_hex()
        '5'
    """
    return compute_hash_with(grid, HashParameters(bits, HashMethod.parse(method)))


__all__ = ['compute_hash', 'compute_hash_with']
