"""
Dependency initialization for the decoding package.

Handles the PIL import with proper error handling and configuration.
"""

from __future__ import annotations

import logging
import warnings

from ..config import DEFAULT_MAX_IMAGE_PIXELS

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image, UnidentifiedImageError
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install Pillow"
    )

# Raise PIL's decompression bomb limit for large photos and scans.
# Callers can tighten it per call via decode_image(max_pixels=...).
Image.MAX_IMAGE_PIXELS = DEFAULT_MAX_IMAGE_PIXELS

# Images above the limit raise DecompressionBombError, which we report as a
# DecodeError; the intermediate warning is noise.
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)


__all__ = [
    'Image',
    'UnidentifiedImageError',
    '_logger',
]
