"""
Emission of assigned units to their destinations.

Destinations form a flat list indexed by ``column * num_sets + set``. When
there is a single column and a single set the list holds one sink wrapping
the default output stream.
"""

import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO

from ..errors import ConfigError, InputError, InternalError
from .sampler import Assignment

STDIN_STEM = "out"


class Sink:
    """A writable destination that separates consecutive units with the delimiter."""

    def __init__(self, stream: TextIO, name: str, delimiter: Optional[str] = None):
        self.stream = stream
        self.name = name
        self.delimiter = delimiter
        self.units_written = 0

    def write(self, unit: str) -> None:
        if self.delimiter is not None and self.units_written > 0:
            self.stream.write(self.delimiter + "\n")
        self.stream.write(unit + "\n")
        self.units_written += 1


def output_prefixes(input_paths: Sequence[Optional[str]], output_dir: Optional[str] = None) -> List[str]:
    """
    Prefix for the output files of each column: <output-dir>/<input-stem>.

    Inputs sharing a stem (corpus.en, corpus.de) use their full file name instead.

    Raises:
        ConfigError: If two inputs would still write to the same files
    """
    stems = [Path(path).stem if path is not None else STDIN_STEM for path in input_paths]
    if len(set(stems)) != len(stems):
        stems = [Path(path).name if path is not None else STDIN_STEM for path in input_paths]
        if len(set(stems)) != len(stems):
            raise ConfigError(f"Input files share a file name, output files would collide: {', '.join(stems)}")

    if output_dir:
        return [str(Path(output_dir) / stem) for stem in stems]
    return stems


def destination_name(prefix: str, set_name: str, extension: str) -> str:
    return f"{prefix}.{set_name}.{extension}"


def open_destinations(stack: ExitStack,
                      prefixes: Sequence[str],
                      set_names: Sequence[str],
                      extension: str = "txt",
                      delimiter: Optional[str] = None,
                      encoding: str = "utf-8",
                      default_stream: Optional[TextIO] = None) -> List[Sink]:
    """
    Open one sink per (column, set) pair.

    With exactly one column and one set, the single sink writes to
    default_stream (stdout unless given) and no file is created.

    Args:
        stack: Exit stack that closes the opened files
        prefixes: Output prefix per column
        set_names: Names of the sets, in declaration order
        extension: File extension of the output files
        delimiter: Unit delimiter to re-insert between units
        encoding: Output encoding
        default_stream: Stream for the single-stream case

    Returns:
        Sinks indexed by column * len(set_names) + set

    Raises:
        InputError: If a file cannot be created
    """
    if len(prefixes) == 1 and len(set_names) == 1:
        stream = default_stream if default_stream is not None else sys.stdout
        return [Sink(stream, "<stdout>", delimiter)]

    sinks = []
    for prefix in prefixes:
        for set_name in set_names:
            filename = destination_name(prefix, set_name, extension)
            try:
                Path(filename).parent.mkdir(parents=True, exist_ok=True)
                stream = stack.enter_context(open(filename, 'w', encoding=encoding, newline='\n'))
            except OSError as e:
                raise InputError(f"Unable to write file {filename}: {e.strerror or e}") from e
            print(f"Writing to {filename}", file=sys.stderr)
            sinks.append(Sink(stream, filename, delimiter))
    return sinks


class EmissionWriter:
    """Writes every assigned unit of every column to the sink of its set."""

    def __init__(self, sinks: List[Sink], num_sets: int):
        self.sinks = sinks
        self.num_sets = num_sets

    def write(self,
              columns: Sequence[Sequence[str]],
              assignment: Assignment,
              order: Sequence[int]) -> Dict[str, int]:
        """
        Write all columns.

        Args:
            columns: Aligned data columns
            assignment: Set assignment per row
            order: Row order in which units are emitted

        Returns:
            Number of units written per destination name

        Raises:
            InternalError: If an assignment has no matching sink
        """
        for column_index, column in enumerate(columns):
            offset = column_index * self.num_sets
            for row in order:
                for set_index in assignment.sets_of(row):
                    sink_index = offset + set_index
                    if sink_index >= len(self.sinks):
                        raise InternalError(
                            f"Destination not found for set {set_index} (offset {offset})"
                        )
                    self.sinks[sink_index].write(column[row])

        counts = {}
        for sink in self.sinks:
            counts[sink.name] = sink.units_written
            print(f"Wrote {sink.units_written} units to {sink.name}", file=sys.stderr)
        return counts
