"""
Decode boundary: compressed bytes in, PixelGrid out.

Public API:
- ImageFormat: PNG / JPEG / WebP
- sniff_format: Detect the container format from magic bytes
- format_from_extension: Map an extension, filename or MIME type to a format
- decode_image: Decode bytes into a DecodeResult
- image_to_grid: Convert an already-open PIL image to a PixelGrid
"""

from __future__ import annotations

from .sniffing import ImageFormat, sniff_format, format_from_extension, normalize_extension
from .dispatch import DecodeResult, decode_image, image_to_grid

__all__ = [
    'ImageFormat',
    'sniff_format',
    'format_from_extension',
    'normalize_extension',
    'DecodeResult',
    'decode_image',
    'image_to_grid',
]
