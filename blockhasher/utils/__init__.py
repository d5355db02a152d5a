"""
Utilities package for blockhasher.

Provides:
- validators: Parameter and file validation for front ends
"""

from __future__ import annotations

from . import validators

from .validators import (
    validate_file_accessible,
    validate_bits,
    validate_method,
    validate_workers,
    validate_hash_params,
)

__all__ = [
    'validators',
    'validate_file_accessible',
    'validate_bits',
    'validate_method',
    'validate_workers',
    'validate_hash_params',
]
