"""
Decode dispatch.

Turns compressed image bytes into a PixelGrid. The sniffed content type and
the declared extension (when there is one) must agree; the outcome is
returned as a DecodeResult rather than raised, so batch callers can inspect
failures without exception plumbing.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..exceptions import DecodeError, FormatMismatch, ImageFormatError, UnsupportedFormat
from ..models import CHANNEL_MODES, PixelGrid
from .dependencies import Image, UnidentifiedImageError, _logger
from .sniffing import ImageFormat, format_from_extension, normalize_extension, sniff_format


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of decode_image: exactly one of grid or error is set.

    Attributes:
        format: Sniffed container format (None if unrecognized)
        grid: Decoded pixels on success
        error: UnsupportedFormat, FormatMismatch or DecodeError on failure
    """
    format: Optional[ImageFormat] = None
    grid: Optional[PixelGrid] = None
    error: Optional[ImageFormatError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.grid is not None

    def unwrap(self) -> PixelGrid:
        """Return the grid, or raise the recorded error."""
        if self.error is not None:
            raise self.error
        if self.grid is None:
            raise DecodeError("Decode produced no pixel data")
        return self.grid


def _target_mode(img) -> str:
    """Pick the L/LA/RGB/RGBA mode an image is normalized to."""
    mode = img.mode
    if mode in CHANNEL_MODES.values():
        return mode
    if mode in ('P', 'PA'):
        has_alpha = mode == 'PA' or 'transparency' in img.info
        return 'RGBA' if has_alpha else 'RGB'
    if mode == '1':
        return 'L'
    return 'RGBA' if mode.endswith('A') else 'RGB'


def _high_depth_to_8bit(img) -> np.ndarray:
    """
    Scale a 16-bit, 32-bit integer or float grayscale image down to uint8.

    16-bit samples keep their high byte. This covers I;16 variants and mode I
    images whose values fit in 16 bits (Pillow opens 16-bit PNGs as either).
    Anything else is stretched from its min..max range to 0..255 (a constant
    image becomes all zeros).
    """
    values = np.asarray(img)
    if img.mode.startswith('I;16'):
        return (values.astype(np.uint16) >> 8).astype(np.uint8)

    low, high = float(values.min()), float(values.max())
    if img.mode == 'I' and low >= 0 and high <= 0xFFFF:
        return (values.astype(np.uint16) >> 8).astype(np.uint8)

    values = values.astype(np.float64)
    if high <= low:
        return np.zeros(values.shape, dtype=np.uint8)
    return np.round((values - low) * (255.0 / (high - low))).astype(np.uint8)


def image_to_grid(img) -> PixelGrid:
    """
    Convert a loaded PIL image to a PixelGrid.

    Args:
        img: PIL.Image.Image (first frame is used for animated images)

    Returns:
        PixelGrid with 1-4 uint8 channels
    """
    if img.mode == 'F' or img.mode.startswith('I'):
        _logger.debug(f"Scaling {img.mode} image to 8 bits")
        samples = _high_depth_to_8bit(img)
        return PixelGrid(img.width, img.height, 1, samples.reshape(-1))

    target = _target_mode(img)
    if img.mode != target:
        _logger.debug(f"Converting image mode {img.mode} -> {target}")
        img = img.convert(target)

    samples = np.asarray(img, dtype=np.uint8)
    return PixelGrid(
        width=img.width,
        height=img.height,
        channels=len(img.getbands()),
        samples=samples.reshape(-1),
    )


def _check_format(
    sniffed: Optional[ImageFormat],
    extension: Optional[str],
    verbose: bool,
) -> Optional[ImageFormatError]:
    """Apply the sniffed-vs-declared dispatch policy; return an error or None."""
    if not extension:
        level = logging.WARNING if verbose else logging.DEBUG
        _logger.log(level, "No file extension found, validating by content type only.")
        if sniffed is None:
            return UnsupportedFormat("Unrecognized image content (expected PNG, JPEG or WebP)")
        return None

    declared = format_from_extension(extension)
    if declared is None and sniffed is None:
        return UnsupportedFormat(
            f"Unsupported image type: {normalize_extension(extension)}"
        )
    if declared is not sniffed:
        return FormatMismatch(
            normalize_extension(extension),
            sniffed.mime if sniffed else None,
        )
    return None


def decode_image(
    data: bytes,
    extension: Optional[str] = None,
    verbose: bool = False,
    max_pixels: Optional[int] = None,
) -> DecodeResult:
    """
    Decode compressed image bytes into a PixelGrid.

    Args:
        data: Raw file contents
        extension: Declared extension, filename or MIME type (optional)
        verbose: Log the "extension validation skipped" notice at WARNING
            instead of DEBUG
        max_pixels: Reject images with more pixels than this (optional)

    Returns:
        DecodeResult holding either the grid or the failure
    """
    if not data:
        return DecodeResult(error=UnsupportedFormat("No image data provided"))

    sniffed = sniff_format(data)
    error = _check_format(sniffed, extension, verbose)
    if error is not None:
        _logger.debug(f"Rejected image data: {error}")
        return DecodeResult(format=sniffed, error=error)

    try:
        with Image.open(io.BytesIO(data), formats=[sniffed.pil_format]) as img:
            if max_pixels and img.width * img.height > max_pixels:
                raise DecodeError(
                    f"Image too large: {img.width}x{img.height} exceeds "
                    f"{max_pixels:,} pixels"
                )
            # Force load to detect truncated/corrupt images early
            img.load()
            grid = image_to_grid(img)
    except DecodeError as e:
        return DecodeResult(format=sniffed, error=e)
    except UnidentifiedImageError as e:
        error = DecodeError(f"Not a valid {sniffed.name} image: {e}")
        error.__cause__ = e
        return DecodeResult(format=sniffed, error=error)
    except Exception as e:
        error = DecodeError(f"Corrupt or truncated {sniffed.name} image: {e}")
        error.__cause__ = e
        return DecodeResult(format=sniffed, error=error)

    _logger.debug(f"Decoded {sniffed.name} image: {grid.width}x{grid.height} {grid.mode}")
    return DecodeResult(format=sniffed, grid=grid)


__all__ = [
    'DecodeResult',
    'decode_image',
    'image_to_grid',
]
