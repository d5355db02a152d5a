"""
blockhasher
===========
Perceptual block hashing for images.

Features:
- Block hash fingerprints (bits x bits grid, quick mean or precise median)
- Per-row median thresholding, robust to uniform brightness shifts
- Hex serialization and Hamming distance comparison
- PNG, JPEG and WebP decoding with content/extension validation
- Parallel batch hashing and a command line interface
"""

__version__ = "1.0.0"

from .models import HashMethod, PixelGrid, HashParameters, Fingerprint
from .exceptions import (
    BlockHashError,
    InvalidInput,
    LengthMismatch,
    ImageSourceError,
    ImageFormatError,
    UnsupportedFormat,
    FormatMismatch,
    DecodeError,
)
from .engine import compute_hash, compute_hash_with
from .distance import hamming_distance, hex_hamming_distance, similarity
from .decoding import ImageFormat, DecodeResult, decode_image, sniff_format
from .pipeline import (
    ImageBuffer,
    HashResult,
    hash_image,
    hash_images_parallel,
    find_image_files,
)

__all__ = [
    "HashMethod",
    "PixelGrid",
    "HashParameters",
    "Fingerprint",
    "BlockHashError",
    "InvalidInput",
    "LengthMismatch",
    "ImageSourceError",
    "ImageFormatError",
    "UnsupportedFormat",
    "FormatMismatch",
    "DecodeError",
    "compute_hash",
    "compute_hash_with",
    "hamming_distance",
    "hex_hamming_distance",
    "similarity",
    "ImageFormat",
    "DecodeResult",
    "decode_image",
    "sniff_format",
    "ImageBuffer",
    "HashResult",
    "hash_image",
    "hash_images_parallel",
    "find_image_files",
]
