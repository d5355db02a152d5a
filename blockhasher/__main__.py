"""
Allow running the package with: python -m blockhasher

Examples:
    python -m blockhasher hash photo.jpg
    python -m blockhasher compare a.png b.png
    python -m blockhasher config --init
"""

import sys

from .cli import main


if __name__ == '__main__':
    sys.exit(main())
