"""
Exception types for blockhasher.

All errors raised by the package derive from BlockHashError. Decode-boundary
failures derive from ImageFormatError so callers can handle "could not get
pixels" separately from "bad hashing parameters".
"""

from __future__ import annotations

from typing import Optional


class BlockHashError(Exception):
    """Base class for all blockhasher errors."""


class InvalidInput(BlockHashError, ValueError):
    """Zero-size grid, non-positive bits, or bits that would leave a block empty."""


class LengthMismatch(BlockHashError, ValueError):
    """Two fingerprints of different lengths were compared."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot compare fingerprints of different lengths: {left} != {right} bits"
        )


class ImageSourceError(BlockHashError):
    """The image source is missing or cannot be read."""


class ImageFormatError(BlockHashError):
    """Base class for failures at the decode boundary."""


class UnsupportedFormat(ImageFormatError):
    """Content is not PNG, JPEG or WebP."""


class FormatMismatch(ImageFormatError):
    """Declared extension disagrees with the sniffed content type."""

    def __init__(self, extension: str, sniffed: Optional[str]):
        self.extension = extension
        self.sniffed = sniffed
        super().__init__(
            f"Unrecognized file extension, mime type or mismatch, "
            f"ext: {extension} / type: {sniffed or 'unknown'}"
        )


class DecodeError(ImageFormatError):
    """Data was recognized but could not be decoded (corrupt or truncated)."""


__all__ = [
    'BlockHashError',
    'InvalidInput',
    'LengthMismatch',
    'ImageSourceError',
    'ImageFormatError',
    'UnsupportedFormat',
    'FormatMismatch',
    'DecodeError',
]
