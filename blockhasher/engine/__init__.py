"""
Block hash engine.

Public API:
- compute_hash: Fingerprint a PixelGrid with a bits value and method
- compute_hash_with: Same, taking a HashParameters object
- block_edges: Block boundaries along one dimension
- luma_plane: Per-pixel luma of a PixelGrid
- blocks_to_bits: Per-row median thresholding
"""

from __future__ import annotations

from .blockhash import compute_hash, compute_hash_with
from .partition import block_edges, subdivide_edges
from .luma import luma_plane
from .quantize import blocks_to_bits

__all__ = [
    'compute_hash',
    'compute_hash_with',
    'block_edges',
    'subdivide_edges',
    'luma_plane',
    'blocks_to_bits',
]
