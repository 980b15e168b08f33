"""
Input Loading Module

Reads line streams and segments them into units (single lines or
delimiter-separated blocks).
"""

from .segmenter import open_column, read_units, segment_lines

__all__ = [
    'open_column',
    'read_units',
    'segment_lines'
]
