"""
Argument parsing for the blockhasher command line.

Provides functions to create the argument parser with the hash, compare and
config subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_hash_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-b', '--bits',
        type=int,
        default=None,
        help='Block grid size; the hash has BITS*BITS bits. Default: from config (16)'
    )
    parser.add_argument(
        '-m', '--method',
        choices=['quick', 'precise'],
        default=None,
        help='Block value method: quick (mean) or precise (oversampled median)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='blockhasher',
        description='Compute and compare perceptual block hashes of images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s hash photo.jpg
      Print the 256-bit block hash of one image

  %(prog)s hash /path/to/photos --bits 8 --method precise --format csv
      Hash every PNG/JPEG/WebP under a directory

  %(prog)s compare a.png b.png
      Print the Hamming distance between two images

  %(prog)s compare 9f3c... 9f1c...
      Compare two stored hex hashes

  %(prog)s config --init
      Create an example configuration file
        """
    )
    subparsers = parser.add_subparsers(dest='command')

    hash_parser = subparsers.add_parser('hash', help='Hash images')
    hash_parser.add_argument(
        'paths',
        type=Path,
        nargs='+',
        help='Image files or directories'
    )
    _add_hash_options(hash_parser)
    hash_parser.add_argument(
        '-r', '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )
    hash_parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Number of parallel workers. Default: from config (4)'
    )
    hash_parser.add_argument(
        '-f', '--format',
        choices=['txt', 'csv', 'json'],
        default='txt',
        help='Output format. Default: txt'
    )
    hash_parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    compare_parser = subparsers.add_parser('compare', help='Compare two images or hex hashes')
    compare_parser.add_argument('first', help='Image path or hex hash')
    compare_parser.add_argument('second', help='Image path or hex hash')
    _add_hash_options(compare_parser)

    config_parser = subparsers.add_parser('config', help='Show or create the configuration file')
    config_parser.add_argument(
        '-i', '--init',
        action='store_true',
        help='Create an example configuration file'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['hash', 'photo.png', '--bits', '8'])
        >>> args.bits
        8
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
