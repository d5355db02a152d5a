"""
Dependency initialization for the engine package.

Handles the numpy import with a clear installation hint and provides the
module-level logger shared by the engine modules.
"""

from __future__ import annotations

import logging

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    import numpy as np
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install numpy"
    )


__all__ = [
    'np',
    '_logger',
]
