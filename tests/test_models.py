"""
Unit tests for data models (HashMethod, PixelGrid, HashParameters, Fingerprint).
"""

import imagehash
import numpy as np
import pytest

from blockhasher.exceptions import InvalidInput
from blockhasher.models import Fingerprint, HashMethod, HashParameters, PixelGrid


class TestHashMethod:
    """Test HashMethod parsing."""

    @pytest.mark.parametrize("value,expected", [
        ('quick', HashMethod.QUICK),
        ('PRECISE', HashMethod.PRECISE),
        (' Precise ', HashMethod.PRECISE),
        (HashMethod.QUICK, HashMethod.QUICK),
        (True, HashMethod.PRECISE),
        (False, HashMethod.QUICK),
    ])
    def test_parse(self, value, expected):
        """Test accepted method selectors."""
        assert HashMethod.parse(value) is expected

    def test_parse_unknown(self):
        """Test unknown method names are rejected."""
        with pytest.raises(InvalidInput):
            HashMethod.parse('fast')


class TestPixelGrid:
    """Test PixelGrid construction and invariants."""

    def test_basic_grid(self):
        """Test a valid RGB grid."""
        grid = PixelGrid(2, 3, 3, [10] * 18)
        assert grid.pixel_count == 6
        assert grid.mode == 'RGB'
        assert not grid.has_alpha
        assert grid.as_array().shape == (3, 2, 3)

    def test_alpha_modes(self):
        """Test alpha detection for LA and RGBA."""
        assert PixelGrid(1, 1, 2, [0, 0]).has_alpha
        assert PixelGrid(1, 1, 4, [0, 0, 0, 0]).has_alpha
        assert not PixelGrid(1, 1, 1, [0]).has_alpha

    def test_sample_count_mismatch(self):
        """Test samples must match width * height * channels."""
        with pytest.raises(InvalidInput):
            PixelGrid(2, 2, 3, [0] * 11)

    def test_bad_channel_count(self):
        """Test unsupported channel counts are rejected."""
        with pytest.raises(InvalidInput):
            PixelGrid(1, 1, 5, [0] * 5)

    def test_zero_size_is_representable(self):
        """Test empty grids can be built (the engine rejects them)."""
        grid = PixelGrid(0, 4, 3, [])
        assert grid.pixel_count == 0

    def test_samples_read_only(self):
        """Test the grid does not alias or expose mutable samples."""
        source = np.zeros(4, dtype=np.uint8)
        grid = PixelGrid(2, 2, 1, source)
        source[0] = 255
        assert grid.samples[0] == 0
        with pytest.raises(ValueError):
            grid.samples[0] = 1

    @pytest.mark.parametrize("samples", [
        [300],
        [-1],
        np.array([256], dtype=np.int64),
        np.array([0.5]),
    ])
    def test_out_of_range_samples_rejected(self, samples):
        """Test samples outside 0..255 or non-integer samples are rejected, not wrapped."""
        with pytest.raises(InvalidInput):
            PixelGrid(1, 1, 1, samples)

    def test_scaled_array_rejected(self):
        """Test a 16-bit range array is not silently truncated to 8 bits."""
        values = np.arange(16, dtype=np.int64) * 1024
        with pytest.raises(InvalidInput):
            PixelGrid(4, 4, 1, values)

    def test_bytes_samples(self):
        """Test raw bytes are accepted as samples."""
        grid = PixelGrid(2, 1, 1, b'\x00\xff')
        assert list(grid.samples) == [0, 255]

    def test_equality_compares_samples(self):
        """Test grids with equal shape but different pixels are not equal."""
        black = PixelGrid(2, 2, 1, [0] * 4)
        white = PixelGrid(2, 2, 1, [255] * 4)
        assert black != white
        assert black == PixelGrid(2, 2, 1, np.zeros(4, dtype=np.uint8))
        assert black != PixelGrid(4, 1, 1, [0] * 4)

    def test_not_hashable(self):
        """Test grids cannot be used as dict keys."""
        with pytest.raises(TypeError):
            hash(PixelGrid(1, 1, 1, [0]))


class TestHashParameters:
    """Test HashParameters validation."""

    def test_bit_count(self):
        """Test bit_count is bits squared."""
        assert HashParameters(5).bit_count == 25

    @pytest.mark.parametrize("bits", [0, -3, 2.5, '8', True])
    def test_invalid_bits(self, bits):
        """Test non-positive or non-integer bits are rejected."""
        with pytest.raises(InvalidInput):
            HashParameters(bits).validate()


class TestFingerprintHex:
    """Test Fingerprint hex serialization."""

    def test_known_encoding(self):
        """Test MSB-first nibble encoding."""
        fp = Fingerprint((1, 0, 1, 0, 0, 0, 0, 1))
        assert fp.to_hex() == 'a1'
        assert str(fp) == 'a1'

    def test_padding_is_trailing_zeros(self):
        """Test 25 bits encode to 7 hex chars with 3 zero padding bits."""
        fp = Fingerprint((1,) * 25)
        assert fp.to_hex() == 'ffffff8'
        assert len(fp.to_hex()) == 7

    @pytest.mark.parametrize("bits", [1, 2, 3, 4, 5, 7, 16])
    def test_round_trip(self, bits):
        """Test hex round trip reproduces the exact bits."""
        rng = np.random.default_rng(bits)
        fp = Fingerprint(tuple(rng.integers(0, 2, bits * bits)))
        decoded = Fingerprint.from_hex(fp.to_hex(), bit_count=bits * bits)
        assert decoded == fp
        assert len(decoded) == bits * bits

    def test_from_hex_default_length(self):
        """Test bit_count defaults to 4 bits per character."""
        assert len(Fingerprint.from_hex('00ff')) == 16

    def test_from_hex_ignores_padding(self):
        """Test padding bits are dropped on decode."""
        assert Fingerprint.from_hex('f', bit_count=1).bits == (1,)
        assert Fingerprint.from_hex('8', bit_count=1).bits == (1,)

    def test_from_hex_uppercase(self):
        """Test uppercase hex is accepted."""
        assert Fingerprint.from_hex('A1').to_hex() == 'a1'

    def test_from_hex_invalid_characters(self):
        """Test non-hex input is rejected."""
        with pytest.raises(InvalidInput):
            Fingerprint.from_hex('zz')

    @pytest.mark.parametrize("text", ['-f', '+ff', 'f_f', ' f f', '0x-f'])
    def test_from_hex_rejects_int_literal_syntax(self, text):
        """Test signs, underscores and inner spaces are not hex digits."""
        with pytest.raises(InvalidInput):
            Fingerprint.from_hex(text)

    def test_from_hex_wrong_bit_count(self):
        """Test bit_count must fit the hex length exactly."""
        with pytest.raises(InvalidInput):
            Fingerprint.from_hex('ff', bit_count=4)
        with pytest.raises(InvalidInput):
            Fingerprint.from_hex('ff', bit_count=9)

    def test_empty(self):
        """Test the empty fingerprint."""
        assert Fingerprint(()).to_hex() == ''
        assert Fingerprint.from_hex('') == Fingerprint(())


class TestFingerprintBehaviour:
    """Test Fingerprint sequence behaviour and imagehash interop."""

    def test_normalizes_truthy_values(self):
        """Test bits are stored as 0/1 ints."""
        fp = Fingerprint((True, 0, 5, False))
        assert fp.bits == (1, 0, 1, 0)
        assert list(fp) == [1, 0, 1, 0]
        assert fp[2] == 1

    def test_hashable_and_equal(self):
        """Test equal fingerprints compare and hash equal."""
        a = Fingerprint((1, 0, 1, 1))
        b = Fingerprint.from_bits([1, 0, 1, 1])
        assert a == b
        assert len({a, b}) == 1

    def test_subtraction_is_hamming_distance(self):
        """Test `a - b` returns the Hamming distance."""
        assert Fingerprint((1, 1, 0, 0)) - Fingerprint((0, 1, 0, 1)) == 2

    def test_grid_size(self):
        """Test grid_size for square and non-square lengths."""
        assert Fingerprint((0,) * 16).grid_size == 4
        assert Fingerprint((0,) * 17).grid_size is None

    def test_imagehash_round_trip(self):
        """Test conversion to and from imagehash.ImageHash."""
        fp = Fingerprint((1, 0, 0, 1, 1, 1, 0, 0, 0, 0, 1, 0, 1, 0, 1, 1))
        ih = fp.to_imagehash()
        assert isinstance(ih, imagehash.ImageHash)
        assert ih.hash.shape == (4, 4)
        assert Fingerprint.from_imagehash(ih) == fp

    def test_imagehash_distance_agrees(self):
        """Test imagehash subtraction agrees with our Hamming distance."""
        a = Fingerprint((1, 0) * 8)
        b = Fingerprint((1, 1) * 8)
        assert a.to_imagehash() - b.to_imagehash() == a - b

    def test_imagehash_requires_square(self):
        """Test non-square fingerprints cannot become ImageHash."""
        with pytest.raises(InvalidInput):
            Fingerprint((1,) * 17).to_imagehash()
