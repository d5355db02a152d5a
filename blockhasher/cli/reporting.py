"""
Result reporting for the blockhasher CLI.

Writes batch hash results as plain text, CSV or JSON.
"""

from __future__ import annotations

import csv
import json
import sys
from typing import Iterable, Optional, TextIO

from ..pipeline import HashResult


def print_hash_results(
    results: Iterable[HashResult],
    output_format: str = 'txt',
    stream: Optional[TextIO] = None,
) -> None:
    """
    Print hash results.

    Args:
        results: HashResult objects in display order
        output_format: 'txt', 'csv' or 'json'
        stream: Output stream (default: stdout)
    """
    stream = stream or sys.stdout
    results = list(results)

    if output_format == 'json':
        json.dump([r.to_dict() for r in results], stream, indent=2)
        stream.write('\n')
    elif output_format == 'csv':
        writer = csv.writer(stream)
        writer.writerow(['source', 'hash', 'bits', 'error'])
        for r in results:
            row = r.to_dict()
            writer.writerow([row['source'], row['hash'] or '', row['bits'] or '', row['error'] or ''])
    elif output_format == 'txt':
        for r in results:
            if r.ok:
                stream.write(f"{r.fingerprint.to_hex()}  {r.label}\n")
            else:
                stream.write(f"ERROR  {r.label}: {r.error}\n")
    else:
        raise ValueError(f"Unsupported output format: {output_format}. Use 'txt', 'csv' or 'json'.")


def print_comparison(distance: int, bit_count: int, stream: Optional[TextIO] = None) -> None:
    """Print a Hamming distance with its similarity percentage."""
    stream = stream or sys.stdout
    similarity = 100.0 if bit_count == 0 else (1 - distance / bit_count) * 100
    stream.write(f"distance: {distance}/{bit_count}\n")
    stream.write(f"similarity: {similarity:.1f}%\n")


__all__ = ['print_hash_results', 'print_comparison']
