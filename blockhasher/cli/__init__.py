"""
CLI package for blockhasher.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- create_parser / parse_arguments: Argument parsing
- print_hash_results / print_comparison: Output formatting
"""

from __future__ import annotations

from typing import Optional

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_hash_results, print_comparison


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error, 2 for usage error)
    """
    orchestrator = CLIOrchestrator()
    return orchestrator.run(argv)


__all__ = [
    'main',
    'CLIOrchestrator',
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_hash_results',
    'print_comparison',
]
