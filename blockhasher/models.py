"""
Data models for blockhasher.

Contains the value types shared by the engine, the comparator and the
decode boundary: the hashing method selector, the decoded pixel grid,
hashing parameters and the resulting fingerprint.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

import imagehash
import numpy as np

from .exceptions import InvalidInput


class HashMethod(Enum):
    """Block-value computation strategy."""
    QUICK = 'quick'      # mean luma per block
    PRECISE = 'precise'  # median of an oversampled cell grid per block

    @classmethod
    def parse(cls, value: Union['HashMethod', str, bool]) -> 'HashMethod':
        """
        Coerce a user-supplied method selector.

        Accepts a HashMethod, its name or value (case-insensitive), or a
        boolean where True selects PRECISE.

        Examples:
            >>> HashMethod.parse('Precise')
            <HashMethod.PRECISE: 'precise'>
            >>> HashMethod.parse(False)
            <HashMethod.QUICK: 'quick'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.PRECISE if value else cls.QUICK
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key == member.value:
                    return member
        raise InvalidInput(f"Unknown hash method: {value!r} (use 'quick' or 'precise')")


# Channel count -> PIL mode name
CHANNEL_MODES = {1: 'L', 2: 'LA', 3: 'RGB', 4: 'RGBA'}


def _to_uint8_samples(samples) -> np.ndarray:
    """Flatten samples to uint8, rejecting values outside 0..255."""
    if isinstance(samples, (bytes, bytearray, memoryview)):
        return np.frombuffer(samples, dtype=np.uint8)

    try:
        raw = np.asarray(samples).reshape(-1)
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidInput(f"Samples are not a flat sequence of integers: {e}") from e

    if raw.dtype == np.uint8 or raw.size == 0:
        return raw.astype(np.uint8)
    if raw.dtype.kind not in 'iub':
        raise InvalidInput(f"Samples must be integers, got dtype {raw.dtype}")
    if raw.dtype.kind != 'b' and (raw.min() < 0 or raw.max() > 255):
        raise InvalidInput(
            f"Sample values must be in 0..255, got {raw.min()}..{raw.max()}"
        )
    return raw.astype(np.uint8)


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """
    A decoded, immutable raster image.

    Two grids are equal when their dimensions, channels and samples match.
    Grids are not hashable.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        channels: Samples per pixel (1=L, 2=LA, 3=RGB, 4=RGBA)
        samples: Flat row-major uint8 samples, len == width * height * channels
    """
    width: int
    height: int
    channels: int
    samples: np.ndarray = field(repr=False)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidInput(f"Negative grid dimensions: {self.width}x{self.height}")
        if self.channels not in CHANNEL_MODES:
            raise InvalidInput(f"Unsupported channel count: {self.channels}")

        samples = _to_uint8_samples(self.samples)
        expected = self.width * self.height * self.channels
        if samples.size != expected:
            raise InvalidInput(
                f"Sample count {samples.size} does not match "
                f"{self.width}x{self.height}x{self.channels} = {expected}"
            )
        # Read-only copy so callers can't mutate the grid behind our back
        samples = samples.copy()
        samples.flags.writeable = False
        object.__setattr__(self, 'samples', samples)

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (
            (self.width, self.height, self.channels)
            == (other.width, other.height, other.channels)
            and np.array_equal(self.samples, other.samples)
        )

    __hash__ = None

    @property
    def has_alpha(self) -> bool:
        """True if the last channel is alpha."""
        return self.channels in (2, 4)

    @property
    def mode(self) -> str:
        """PIL-style mode name for this grid."""
        return CHANNEL_MODES[self.channels]

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width, channels) view of the samples."""
        return self.samples.reshape(self.height, self.width, self.channels)


@dataclass(frozen=True)
class HashParameters:
    """
    Parameters for one hash computation.

    Attributes:
        bits: Block grid size; the fingerprint has bits * bits bits
        method: Block-value strategy
    """
    bits: int
    method: HashMethod = HashMethod.QUICK

    def validate(self) -> None:
        """Raise InvalidInput if bits is not a positive integer."""
        if isinstance(self.bits, bool) or not isinstance(self.bits, int):
            raise InvalidInput(f"bits must be an integer, got {self.bits!r}")
        if self.bits <= 0:
            raise InvalidInput(f"bits must be positive, got {self.bits}")

    @property
    def bit_count(self) -> int:
        return self.bits * self.bits


@dataclass(frozen=True)
class Fingerprint:
    """
    A perceptual fingerprint: bits in row-major block order.

    The canonical external form is lowercase hex, most significant bit first
    in each nibble, with trailing zero padding when the bit count is not a
    multiple of 4.
    """
    bits: tuple = ()

    def __post_init__(self):
        normalized = tuple(1 if b else 0 for b in self.bits)
        object.__setattr__(self, 'bits', normalized)

    @classmethod
    def from_bits(cls, bits: Iterable) -> 'Fingerprint':
        return cls(tuple(bits))

    def __len__(self) -> int:
        return len(self.bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self.bits)

    def __getitem__(self, index):
        return self.bits[index]

    def __str__(self) -> str:
        return self.to_hex()

    def __sub__(self, other: 'Fingerprint') -> int:
        """Hamming distance, so `a - b` reads like imagehash.ImageHash."""
        from .distance import hamming_distance
        return hamming_distance(self, other)

    @property
    def grid_size(self) -> Optional[int]:
        """Side length of the block grid, or None if len is not a perfect square."""
        side = math.isqrt(len(self.bits))
        return side if side * side == len(self.bits) else None

    def to_hex(self) -> str:
        """Encode as lowercase hex (ceil(len / 4) characters)."""
        if not self.bits:
            return ''
        width = -(-len(self.bits) // 4)
        padded = ''.join(str(b) for b in self.bits).ljust(width * 4, '0')
        return f"{int(padded, 2):0{width}x}"

    @classmethod
    def from_hex(cls, text: str, bit_count: Optional[int] = None) -> 'Fingerprint':
        """
        Decode a hex fingerprint.

        Args:
            text: Hex string (case-insensitive)
            bit_count: Number of meaningful bits. Defaults to 4 * len(text).
                Padding bits past bit_count are ignored.

        Returns:
            Fingerprint with exactly bit_count bits

        Examples:
            >>> Fingerprint.from_hex('f8', bit_count=5).bits
            (1, 1, 1, 1, 1)
        """
        text = text.strip().lower()
        if text.startswith('0x'):
            text = text[2:]
        if bit_count is None:
            bit_count = len(text) * 4
        if bit_count < 0 or -(-bit_count // 4) != len(text):
            raise InvalidInput(
                f"Hex string of {len(text)} characters cannot hold {bit_count} bits"
            )
        if not text:
            return cls(())
        if any(c not in string.hexdigits for c in text):
            raise InvalidInput(f"Not a hexadecimal fingerprint: {text!r}")
        binary = format(int(text, 16), f'0{len(text) * 4}b')
        return cls(tuple(int(c) for c in binary[:bit_count]))

    def to_array(self) -> np.ndarray:
        """Return the bits as a flat numpy bool array."""
        return np.array(self.bits, dtype=bool)

    def to_imagehash(self) -> imagehash.ImageHash:
        """Convert a square fingerprint to an imagehash.ImageHash."""
        side = self.grid_size
        if not side:
            raise InvalidInput(
                f"Only square fingerprints convert to ImageHash ({len(self.bits)} bits)"
            )
        return imagehash.ImageHash(self.to_array().reshape(side, side))

    @classmethod
    def from_imagehash(cls, image_hash: imagehash.ImageHash) -> 'Fingerprint':
        """Build a fingerprint from an imagehash.ImageHash (row-major)."""
        return cls(tuple(int(b) for b in image_hash.hash.flatten()))


__all__ = [
    'HashMethod',
    'PixelGrid',
    'HashParameters',
    'Fingerprint',
    'CHANNEL_MODES',
]
