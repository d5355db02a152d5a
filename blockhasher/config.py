"""
Configuration constants for blockhasher.

This module contains the fixed parameters of the fingerprint format and the
defaults used by the pipeline and CLI:
- Block grid size and oversampling factor
- Supported image formats and extensions
"""

import os

# Default block grid size (bits x bits blocks -> bits * bits fingerprint bits)
# 16 gives a 256-bit fingerprint, 64 hex characters
DEFAULT_BITS = 16

# Default block-value strategy ('quick' = mean, 'precise' = oversampled median)
DEFAULT_METHOD = 'quick'

# Linear oversampling factor for the precise method.
# Each block is split into up to 4x4 cells; the block value is their median.
OVERSAMPLE_FACTOR = 4

# Smallest allowed block edge in pixels
MIN_BLOCK_SIZE = 1

# Fixed-point luma weights (ITU-R 601-2 scaled by 2**16, same as PIL's convert('L'))
LUMA_WEIGHTS = (19595, 38470, 7471)
LUMA_SHIFT = 16

# Value substituted for fully transparent pixels (white)
TRANSPARENT_LUMA = 255

# Supported extensions mapped to format names
FORMAT_EXTENSIONS = {
    'PNG': ('.png',),
    'JPEG': ('.jpg', '.jpeg', '.jpe', '.jfif'),
    'WEBP': ('.webp',),
}

IMAGE_EXTENSIONS = {ext for exts in FORMAT_EXTENSIONS.values() for ext in exts}

# Default number of parallel workers for batch hashing
DEFAULT_WORKERS = 4

# Decompression bomb limit passed to PIL (500 megapixels)
DEFAULT_MAX_IMAGE_PIXELS = 500_000_000

# User configuration location
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.blockhasher')
