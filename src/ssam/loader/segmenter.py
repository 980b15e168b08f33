"""
Unit segmentation of line-oriented input.
"""

import sys
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Optional

from tqdm import tqdm

from ..errors import InputError, ParseError

STDIN_NAME = "<stdin>"


def segment_lines(lines: Iterable[str], delimiter: Optional[str] = None) -> List[str]:
    """
    Group lines into units.

    Without a delimiter every line is a unit. With a delimiter, lines are
    collected until a line whose stripped content equals the delimiter
    (an empty delimiter means a blank line separates units). The last
    buffer is always flushed at the end of input, even when it is empty.
    Blank lines inside a unit, including leading ones, are kept.

    Args:
        lines: Lines without their trailing line break
        delimiter: Unit separator, or None for one unit per line

    Returns:
        List of units in input order
    """
    if delimiter is None:
        return list(lines)

    units = []
    buffer: List[str] = []
    for line in lines:
        if line.strip() == delimiter:
            units.append("\n".join(buffer))
            buffer = []
        else:
            buffer.append(line)

    units.append("\n".join(buffer))
    return units


def _decode_lines(stream: BinaryIO, source: str, encoding: str) -> Iterator[str]:
    """Decode a binary stream line by line, reporting the failing line number."""
    for line_number, raw in enumerate(stream, start=1):
        try:
            line = raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise ParseError(source, line_number, e.reason) from e
        yield line.rstrip("\r\n")


def read_units(stream: BinaryIO,
               delimiter: Optional[str] = None,
               encoding: str = "utf-8",
               source: str = STDIN_NAME,
               progress: bool = False) -> List[str]:
    """
    Read and segment a binary stream into units.

    Args:
        stream: Binary input stream
        delimiter: Unit separator, or None for one unit per line
        encoding: Text encoding of the stream
        source: Name used in error messages and progress bars
        progress: Show a tqdm progress bar on stderr

    Returns:
        List of units

    Raises:
        ParseError: If a line cannot be decoded
    """
    lines = _decode_lines(stream, source, encoding)
    if progress:
        lines = tqdm(lines, desc=f"Reading {source}", unit=" lines", file=sys.stderr)
    return segment_lines(lines, delimiter)


def open_column(path: Optional[str],
                delimiter: Optional[str] = None,
                encoding: str = "utf-8",
                progress: bool = False) -> List[str]:
    """
    Read one column of units from a file, or from stdin when path is None.

    Raises:
        InputError: If the file cannot be opened
        ParseError: If a line cannot be decoded
    """
    if path is None:
        return read_units(sys.stdin.buffer, delimiter, encoding, STDIN_NAME, progress)

    file_path = Path(path)
    try:
        with open(file_path, 'rb') as f:
            return read_units(f, delimiter, encoding, str(file_path), progress)
    except OSError as e:
        raise InputError(f"Unable to open file {file_path}: {e.strerror or e}") from e
