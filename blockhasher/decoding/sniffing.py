"""
Container format detection.

Identifies PNG, JPEG and WebP content from magic bytes, and maps declared
extensions (or MIME types) to the same format enum.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional

from ..config import FORMAT_EXTENSIONS


class ImageFormat(Enum):
    """Container formats the decode boundary accepts."""
    PNG = 'image/png'
    JPEG = 'image/jpeg'
    WEBP = 'image/webp'

    @property
    def mime(self) -> str:
        return self.value

    @property
    def extensions(self) -> tuple:
        return FORMAT_EXTENSIONS[self.name]

    @property
    def pil_format(self) -> str:
        """Format name reported by PIL's Image.format."""
        return self.name


PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
JPEG_SIGNATURE = b'\xff\xd8\xff'


def sniff_format(data: bytes) -> Optional[ImageFormat]:
    """
    Detect the container format from leading bytes.

    Returns:
        ImageFormat, or None if the content is not PNG, JPEG or WebP

    Examples:
        >>> sniff_format(b'\\x89PNG\\r\\n\\x1a\\n' + bytes(8))
        <ImageFormat.PNG: 'image/png'>
        >>> sniff_format(b'GIF89a') is None
        True
    """
    if data.startswith(PNG_SIGNATURE):
        return ImageFormat.PNG
    if data.startswith(JPEG_SIGNATURE):
        return ImageFormat.JPEG
    if len(data) >= 12 and data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return ImageFormat.WEBP
    return None


def normalize_extension(value: str) -> str:
    """
    Reduce a filename, extension or MIME type to a lowercase token.

    Examples:
        >>> normalize_extension('holiday.JPG')
        'jpg'
        >>> normalize_extension('image/webp')
        'webp'
    """
    value = value.strip().lower()
    if value.startswith('image/'):
        return value[len('image/'):]
    if '.' in value:
        return os.path.splitext(value)[1].lstrip('.') or value.lstrip('.')
    return value


def format_from_extension(value: Optional[str]) -> Optional[ImageFormat]:
    """
    Map a declared extension, filename or MIME type to an ImageFormat.

    Returns:
        ImageFormat, or None if the extension is empty or not supported
    """
    if not value:
        return None
    token = normalize_extension(value)
    for fmt in ImageFormat:
        if token == fmt.name.lower() or f'.{token}' in fmt.extensions:
            return fmt
    return None


__all__ = [
    'ImageFormat',
    'sniff_format',
    'normalize_extension',
    'format_from_extension',
]
