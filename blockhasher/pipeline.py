"""
Hashing pipeline: image source -> bytes -> PixelGrid -> Fingerprint.

Provides single-image hashing from a path or in-memory buffer, parallel
batch hashing where each image succeeds or fails independently, and image
file discovery for directory inputs.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from .config import DEFAULT_BITS, DEFAULT_WORKERS, IMAGE_EXTENSIONS
from .decoding import decode_image
from .engine import compute_hash
from .exceptions import ImageSourceError
from .models import Fingerprint, HashMethod
from .utils.validators import validate_file_accessible

logger = logging.getLogger(__name__)

# Optional: tqdm for progress bars
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass


@dataclass(frozen=True)
class ImageBuffer:
    """
    An in-memory image source.

    Attributes:
        data: Compressed image bytes
        name: Optional filename; its extension is used for validation
        ext: Optional explicit extension or MIME type (wins over name)
    """
    data: bytes
    name: Optional[str] = None
    ext: Optional[str] = None

    @property
    def declared_extension(self) -> Optional[str]:
        if self.ext:
            return self.ext
        if self.name and self.name.rfind('.') > 0:
            return self.name
        return None


ImageSource = Union[str, Path, ImageBuffer]


@dataclass
class HashResult:
    """
    Outcome of hashing one source in a batch.

    Attributes:
        source: The input as given
        fingerprint: Fingerprint on success
        error: Error message on failure
        error_type: Exception class name on failure
    """
    source: Any
    fingerprint: Optional[Fingerprint] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fingerprint is not None

    @property
    def label(self) -> str:
        """Printable name of the source."""
        if isinstance(self.source, ImageBuffer):
            return self.source.name or '<buffer>'
        return str(self.source)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'source': self.label,
            'hash': self.fingerprint.to_hex() if self.fingerprint is not None else None,
            'bits': len(self.fingerprint) if self.fingerprint is not None else None,
            'error': self.error,
            'error_type': self.error_type,
        }


def read_source(source: ImageSource) -> tuple[bytes, Optional[str]]:
    """
    Load the bytes and declared extension of an image source.

    Raises:
        ImageSourceError: If no source is given or the file cannot be read
    """
    if source is None:
        raise ImageSourceError("No image source provided")

    if isinstance(source, ImageBuffer):
        return source.data, source.declared_extension

    filepath = str(source)
    is_valid, error = validate_file_accessible(filepath)
    if not is_valid:
        raise ImageSourceError(f"{error}: {filepath}")

    try:
        with open(filepath, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise ImageSourceError(f"Cannot read {filepath}: {e}") from e

    name = os.path.basename(filepath)
    return data, (name if name.rfind('.') > 0 else None)


def hash_image(
    source: ImageSource,
    bits: int = DEFAULT_BITS,
    method: Union[HashMethod, str, bool] = HashMethod.QUICK,
    verbose: bool = False,
    max_pixels: Optional[int] = None,
) -> Fingerprint:
    """
    Fingerprint an image file or buffer.

    Args:
        source: Path to an image, or an ImageBuffer
        bits: Block grid size (fingerprint has bits * bits bits)
        method: HashMethod, 'quick'/'precise', or True for precise
        verbose: Log advisory decode notices as warnings
        max_pixels: Reject images with more pixels than this

    Returns:
        Fingerprint of the first frame

    Raises:
        ImageSourceError: Missing or unreadable source
        UnsupportedFormat, FormatMismatch, DecodeError: Decode failures
        InvalidInput: Bad bits/method for this image
    """
    data, extension = read_source(source)
    grid = decode_image(data, extension, verbose=verbose, max_pixels=max_pixels).unwrap()
    return compute_hash(grid, bits, method)


def _hash_one(source, bits, method, verbose, max_pixels) -> HashResult:
    try:
        fingerprint = hash_image(source, bits, method, verbose=verbose, max_pixels=max_pixels)
        return HashResult(source=source, fingerprint=fingerprint)
    except Exception as e:
        logger.debug(f"Hashing failed for {source}: {e}")
        return HashResult(source=source, error=str(e), error_type=type(e).__name__)


def hash_images_parallel(
    sources: Sequence[ImageSource],
    bits: int = DEFAULT_BITS,
    method: Union[HashMethod, str, bool] = HashMethod.QUICK,
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = False,
    verbose: bool = False,
    max_pixels: Optional[int] = None,
) -> list[HashResult]:
    """
    Hash many images in parallel.

    A failure on one image is recorded in its HashResult and does not affect
    the others.

    Args:
        sources: Paths and/or ImageBuffers
        bits: Block grid size
        method: Block-value method
        max_workers: Number of worker threads
        progress_callback: Optional callback(current, total)
        show_progress: Show a tqdm progress bar if tqdm is installed
        verbose: Log advisory decode notices as warnings
        max_pixels: Reject images with more pixels than this

    Returns:
        One HashResult per source, in input order
    """
    if not sources:
        return []

    method = HashMethod.parse(method)
    total = len(sources)
    results: list[Optional[HashResult]] = [None] * total

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(total=total, desc="Hashing images", unit="img", ncols=80)

    # Throttle progress callbacks to at most one per interval
    last_callback_time = time.time()
    callback_interval = 1.0  # seconds

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_hash_one, source, bits, method, verbose, max_pixels): index
            for index, source in enumerate(sources)
        }

        for done, future in enumerate(as_completed(futures), start=1):
            results[futures[future]] = future.result()

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                if current_time - last_callback_time >= callback_interval or done == total:
                    progress_callback(done, total)
                    last_callback_time = current_time

    if pbar is not None:
        pbar.close()

    failed = sum(1 for r in results if r is not None and not r.ok)
    if failed:
        logger.info(f"Hashed {total - failed:,} of {total:,} images ({failed:,} failed)")

    return [r for r in results if r is not None]


def find_image_files(root_path: str | Path, recursive: bool = True) -> list[str]:
    """
    Find all supported image files (PNG, JPEG, WebP) in a directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively

    Returns:
        Sorted list of absolute, de-duplicated file paths
    """
    root = Path(root_path)
    iterator = root.rglob('*') if recursive else root.glob('*')

    images = set()
    for filepath in iterator:
        if filepath.is_file() and filepath.suffix.lower() in IMAGE_EXTENSIONS:
            images.add(str(filepath.resolve()))

    return sorted(images)


__all__ = [
    'ImageBuffer',
    'ImageSource',
    'HashResult',
    'read_source',
    'hash_image',
    'hash_images_parallel',
    'find_image_files',
]
