"""
Input validation for blockhasher front ends.

Validators return (is_valid, error_message) tuples so callers can report
problems without exception handling; the hashing core raises InvalidInput
itself.
"""

from __future__ import annotations

import os

from ..models import HashMethod
from ..exceptions import InvalidInput


def validate_file_accessible(filepath: str) -> tuple[bool, str]:
    """
    Validate that a file exists and is readable.

    Args:
        filepath: Path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_file_accessible('/nonexistent/file.jpg')
        (False, 'File does not exist')
    """
    if not os.path.exists(filepath):
        return False, "File does not exist"

    if not os.path.isfile(filepath):
        return False, "Path is not a file"

    if not os.access(filepath, os.R_OK):
        return False, "File is not readable (permission denied)"

    return True, ""


def validate_bits(bits) -> tuple[bool, str]:
    """
    Validate a block grid size.

    Examples:
        >>> validate_bits(16)
        (True, '')
        >>> validate_bits(0)
        (False, 'Bits must be a positive integer')
    """
    if isinstance(bits, bool) or not isinstance(bits, int) or bits <= 0:
        return False, "Bits must be a positive integer"
    return True, ""


def validate_method(method) -> tuple[bool, str]:
    """
    Validate a hash method selector.

    Examples:
        >>> validate_method('precise')
        (True, '')
    """
    try:
        HashMethod.parse(method)
        return True, ""
    except InvalidInput as e:
        return False, str(e)


def validate_workers(workers) -> tuple[bool, str]:
    """Validate a worker count (1-32)."""
    try:
        workers = int(workers)
        if not 1 <= workers <= 32:
            return False, "Workers must be between 1 and 32"
        return True, ""
    except (ValueError, TypeError):
        return False, "Workers must be an integer"


def validate_hash_params(bits, method, workers=None) -> tuple[bool, str]:
    """
    Validate all hashing parameters.

    Returns:
        Tuple of (is_valid, error_message) for the first failing check
    """
    for is_valid, error in (validate_bits(bits), validate_method(method)):
        if not is_valid:
            return False, error

    if workers is not None:
        return validate_workers(workers)

    return True, ""


__all__ = [
    'validate_file_accessible',
    'validate_bits',
    'validate_method',
    'validate_workers',
    'validate_hash_params',
]
