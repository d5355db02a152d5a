"""
Pytest configuration and shared fixtures for test suite.
"""

import io

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image, features

from blockhasher.models import PixelGrid


requires_webp = pytest.mark.skipif(
    not features.check('webp'), reason="Pillow built without WebP support"
)


def make_split_image(size=64, left=(0, 0, 0), right=(255, 255, 255), mode='RGB'):
    """Create an image whose left half is `left` and right half is `right`."""
    img = Image.new(mode, (size, size), color=left)
    img.paste(right, (size // 2, 0, size, size))
    return img


def encode(img, fmt, **kwargs) -> bytes:
    """Encode a PIL image to bytes in the given format."""
    buffer = io.BytesIO()
    img.save(buffer, fmt, **kwargs)
    return buffer.getvalue()


def grid_from_image(img) -> PixelGrid:
    """Build a PixelGrid directly from a PIL image (L, LA, RGB or RGBA)."""
    return PixelGrid(img.width, img.height, len(img.getbands()), list(img.tobytes()))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def split_grid():
    """64x64 RGB grid, black left half and white right half."""
    return grid_from_image(make_split_image())


@pytest.fixture
def image_bytes():
    """
    Encoded versions of the black/white split image.

    Returns:
        dict with 'png', 'jpeg' and 'webp' keys ('webp' only if supported)
    """
    img = make_split_image()
    data = {
        'png': encode(img, 'PNG'),
        'jpeg': encode(img, 'JPEG', quality=95),
    }
    if features.check('webp'):
        data['webp'] = encode(img, 'WEBP', lossless=True)
    return data


@pytest.fixture
def sample_images(temp_dir, image_bytes):
    """
    Write sample files to disk.

    Returns:
        dict with paths to:
        - split.png, split.jpg: the black/white split image
        - swapped.png: the same image with halves swapped
        - mislabeled.jpg: PNG content with a .jpg extension
        - corrupted.png: truncated PNG data
        - notes.txt: not an image
    """
    images = {}

    path = temp_dir / "split.png"
    path.write_bytes(image_bytes['png'])
    images['split_png'] = str(path)

    path = temp_dir / "split.jpg"
    path.write_bytes(image_bytes['jpeg'])
    images['split_jpg'] = str(path)

    path = temp_dir / "swapped.png"
    make_split_image(left=(255, 255, 255), right=(0, 0, 0)).save(path, 'PNG')
    images['swapped_png'] = str(path)

    path = temp_dir / "mislabeled.jpg"
    path.write_bytes(image_bytes['png'])
    images['mislabeled'] = str(path)

    path = temp_dir / "corrupted.png"
    path.write_bytes(image_bytes['png'][:len(image_bytes['png']) // 2])
    images['corrupted'] = str(path)

    path = temp_dir / "notes.txt"
    path.write_text("not an image")
    images['text'] = str(path)

    return images


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """Point UserConfig at an empty config directory and clear env overrides."""
    from blockhasher.user_config import get_user_config

    config_dir = temp_dir / "config"
    monkeypatch.setenv('BLOCKHASHER_CONFIG_DIR', str(config_dir))
    for var in ('BLOCKHASHER_BITS', 'BLOCKHASHER_METHOD', 'BLOCKHASHER_WORKERS',
                'BLOCKHASHER_MAX_PIXELS', 'BLOCKHASHER_VERBOSE'):
        monkeypatch.delenv(var, raising=False)

    config = get_user_config()
    config.reload()
    yield config
    config.reload()
