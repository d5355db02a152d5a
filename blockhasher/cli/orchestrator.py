"""
CLI workflow orchestration for blockhasher.

Provides the CLIOrchestrator class that resolves settings (arguments first,
then user configuration) and runs the requested subcommand.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..config import IMAGE_EXTENSIONS
from ..distance import hamming_distance
from ..exceptions import BlockHashError, ImageSourceError
from ..models import Fingerprint, HashMethod
from ..pipeline import find_image_files, hash_image, hash_images_parallel
from ..user_config import get_user_config
from ..utils.validators import validate_hash_params
from .arg_parser import create_parser
from .reporting import print_comparison, print_hash_results


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
        stream=sys.stderr,
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates one CLI invocation.

    Exit codes: 0 success, 1 hashing/comparison error, 2 usage error.
    """

    def __init__(self, stream=None):
        """Initialize the orchestrator."""
        self.config = get_user_config()
        self.stream = stream or sys.stdout
        self.logger = logging.getLogger(__name__)
        self.args = None

    def run(self, argv=None) -> int:
        """
        Execute the CLI workflow.

        Args:
            argv: Argument list (default: sys.argv[1:])

        Returns:
            Exit code
        """
        parser = create_parser()
        self.args = parser.parse_args(argv)

        if self.args.command is None:
            parser.print_help(self.stream)
            return 2

        verbose = getattr(self.args, 'verbose', False) or self.config.verbose
        self.logger = setup_logging(verbose)

        if self.args.command == 'config':
            return self._config_command()

        bits = self.args.bits if self.args.bits is not None else self.config.default_bits
        method = self.args.method or self.config.default_method
        workers = getattr(self.args, 'workers', None) or self.config.default_workers

        is_valid, error = validate_hash_params(bits, method, workers)
        if not is_valid:
            self.logger.error(error)
            return 2

        method = HashMethod.parse(method)
        if self.args.command == 'hash':
            return self._hash_command(bits, method, workers, verbose)
        return self._compare_command(bits, method, verbose)

    def _collect_sources(self) -> list[str]:
        """Expand directory arguments into image files."""
        sources = []
        for path in self.args.paths:
            if path.is_dir():
                found = find_image_files(path, recursive=not self.args.no_recursive)
                self.logger.info(f"Found {len(found):,} images in {path}")
                sources.extend(found)
            else:
                sources.append(str(path))
        return sources

    def _hash_command(self, bits: int, method: HashMethod, workers: int, verbose: bool) -> int:
        sources = self._collect_sources()
        if not sources:
            self.logger.error("No images found")
            return 1

        results = hash_images_parallel(
            sources,
            bits=bits,
            method=method,
            max_workers=workers,
            show_progress=not self.args.no_progress and len(sources) > 1,
            verbose=verbose,
            max_pixels=self.config.max_image_pixels,
        )
        print_hash_results(results, self.args.format, self.stream)
        return 0 if all(r.ok for r in results) else 1

    def _resolve_operand(self, operand: str, bits: int, method: HashMethod, verbose: bool) -> Fingerprint:
        """Hash an image path, or parse a hex fingerprint."""
        if os.path.exists(operand):
            return hash_image(
                Path(operand), bits, method,
                verbose=verbose,
                max_pixels=self.config.max_image_pixels,
            )
        looks_like_path = (
            os.sep in operand or '/' in operand
            or os.path.splitext(operand)[1].lower() in IMAGE_EXTENSIONS
        )
        if looks_like_path:
            raise ImageSourceError(f"File does not exist: {operand}")
        # Use the configured bit count when the hex length matches it
        bit_count = bits * bits
        if -(-bit_count // 4) != len(operand.strip()):
            bit_count = None
        return Fingerprint.from_hex(operand, bit_count)

    def _compare_command(self, bits: int, method: HashMethod, verbose: bool) -> int:
        try:
            first = self._resolve_operand(self.args.first, bits, method, verbose)
            second = self._resolve_operand(self.args.second, bits, method, verbose)
            distance = hamming_distance(first, second)
        except BlockHashError as e:
            self.logger.error(str(e))
            return 1

        print_comparison(distance, len(first), self.stream)
        return 0

    def _config_command(self) -> int:
        config = self.config
        if self.args.init:
            if config.create_example_config():
                self.stream.write(f"Created example configuration file at:\n  {config.config_file_path}\n")
                return 0
            self.stream.write("Failed to create configuration file.\n")
            return 1

        status = "found" if config.config_file_path.exists() else "not found (using defaults)"
        self.stream.write(f"Configuration file: {config.config_file_path} [{status}]\n")
        self.stream.write("Current settings:\n")
        self.stream.write(f"  default_bits: {config.default_bits}\n")
        self.stream.write(f"  default_method: {config.default_method}\n")
        self.stream.write(f"  default_workers: {config.default_workers}\n")
        self.stream.write(f"  max_image_pixels: {config.max_image_pixels:,}\n")
        self.stream.write(f"  verbose: {config.verbose}\n")
        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
