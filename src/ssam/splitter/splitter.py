"""
Split sampler: reads aligned columns, excludes reference units, samples sets
and writes them out.
"""

import sys
from contextlib import ExitStack
from typing import Any, Dict, List, Optional, TextIO

import numpy as np
import pandas as pd

from ..errors import ConfigError, ConsistencyError
from ..loader.segmenter import STDIN_NAME, open_column
from .config import SamplerConfig
from .contamination import ExclusionFilter, FingerprintIndex
from .registry import policy_registry
from .sampler import Assignment, SetSampler, create_rng, emission_order
from .sizes import SetPlan
from .writer import EmissionWriter, open_destinations, output_prefixes


class SplitSampler:
    """
    Splits one or more dependent input columns into named sets using random
    sampling, following a SamplerConfig.
    """

    def __init__(self, config: SamplerConfig, rng: Optional[np.random.Generator] = None):
        """
        Initialize the SplitSampler.

        Args:
            config: Options of this run
            rng: Random generator; created from config.seed when omitted
        """
        self.config = config
        self.plan = SetPlan.from_options(config.sizes, config.names)
        self.rng = rng if rng is not None else create_rng(config.seed)
        self.prefixes = output_prefixes(self.sources, config.output)

        if policy_registry.get_policy(config.exclusion_policy) is None:
            raise ConfigError(f"Exclusion policy '{config.exclusion_policy}' not found. "
                              f"Available policies: {list(policy_registry.list_policies().keys())}")

        self.columns: List[List[str]] = []
        self.exclusion_filter: Optional[ExclusionFilter] = None
        self.assignment: Optional[Assignment] = None
        self.targets: List[int] = []
        self.destinations: List[str] = []
        self.write_counts: Dict[str, int] = {}

    @property
    def sources(self) -> List[Optional[str]]:
        """Input files, or a single None entry for stdin."""
        return list(self.config.files) if self.config.files else [None]

    @property
    def column_names(self) -> List[str]:
        return [source if source is not None else STDIN_NAME for source in self.sources]

    def load_columns(self) -> List[List[str]]:
        """
        Read and segment every input.

        Raises:
            ConsistencyError: If the data is empty or the columns differ in length
        """
        self.columns = [
            open_column(source, self.config.delimiter, self.config.encoding, self.config.progress)
            for source in self.sources
        ]
        self._check_consistency()
        return self.columns

    def set_columns(self, columns: List[List[str]]) -> None:
        """Use already segmented columns instead of reading the inputs."""
        self.columns = [list(column) for column in columns]
        self._check_consistency()

    def _check_consistency(self) -> None:
        if not self.columns or not self.columns[0]:
            raise ConsistencyError("Data is empty")

        for i in range(1, len(self.columns)):
            if len(self.columns[i - 1]) != len(self.columns[i]):
                raise ConsistencyError(
                    f"Input files are assumed dependent but do not match: "
                    f"file {i} contains {len(self.columns[i - 1])} units, "
                    f"and file {i + 1} contains {len(self.columns[i])}"
                )

    def apply_exclusions(self) -> int:
        """
        Remove rows whose units occur in the exclude reference files.

        Returns:
            Number of rows removed

        Raises:
            ConfigError: If the number of exclude files differs from the number of columns
            ConsistencyError: If no data remains
        """
        if not self.config.exclude:
            return 0

        if len(self.config.exclude) != len(self.columns):
            raise ConfigError(
                f"Exclusion needs one reference file per input column: "
                f"got {len(self.config.exclude)} exclude file(s) for {len(self.columns)} column(s)"
            )

        indexes = [
            FingerprintIndex(
                open_column(path, self.config.delimiter, self.config.encoding, self.config.progress),
                source=path
            )
            for path in self.config.exclude
        ]
        self.exclusion_filter = ExclusionFilter(indexes, self.config.exclusion_policy)
        self.columns, removed = self.exclusion_filter.filter(self.columns, self.column_names)

        if not self.columns[0]:
            raise ConsistencyError("Data is empty after exclusion")
        return len(removed)

    @property
    def datasize(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    def assign(self) -> Assignment:
        """
        Resolve set sizes and assign every unit.

        Raises:
            CapacityError: If the sizes exceed the data without replacement
        """
        self.targets = self.plan.check_capacity(self.datasize, self.config.replace)
        sampler = SetSampler(self.plan, self.rng, self.config.replace)
        self.assignment = sampler.sample(self.datasize, self.targets)
        return self.assignment

    def emit(self, default_stream: Optional[TextIO] = None) -> Dict[str, int]:
        """
        Write the assigned units to their destinations.

        Args:
            default_stream: Stream for single column, single set runs (stdout by default)

        Returns:
            Number of units written per destination
        """
        if self.assignment is None:
            self.assign()

        order = emission_order(self.datasize, self.rng if self.config.shuffle else None)

        with ExitStack() as stack:
            sinks = open_destinations(
                stack,
                self.prefixes,
                self.plan.names,
                extension=self.config.extension,
                delimiter=self.config.delimiter,
                encoding=self.config.encoding,
                default_stream=default_stream
            )
            self.destinations = [sink.name for sink in sinks]
            writer = EmissionWriter(sinks, len(self.plan))
            self.write_counts = writer.write(self.columns, self.assignment, order)

        return self.write_counts

    def run_sampling(self, default_stream: Optional[TextIO] = None) -> Dict[str, int]:
        """Main method to run the whole sampling process."""
        if not self.columns:
            self.load_columns()
        self.apply_exclusions()
        self.assign()
        return self.emit(default_stream)

    def get_split_info(self) -> Dict[str, Dict[str, Any]]:
        """Get information about the configured sets."""
        info = {}
        for i, sample_set in enumerate(self.plan):
            info[sample_set.name] = {
                'size': str(sample_set.spec),
                'remainder': sample_set.is_remainder,
                'target': self.targets[i] if self.targets else None
            }
        return info

    def generate_split_report(self) -> pd.DataFrame:
        """
        Generate a report of the written sets.

        Returns:
            DataFrame with one row per (column, set) destination
        """
        report_data = []
        if self.assignment is None:
            return pd.DataFrame(report_data)

        set_sizes = self.assignment.set_sizes()
        single_stream = len(self.destinations) == 1

        for column_index, column_name in enumerate(self.column_names):
            for set_index, sample_set in enumerate(self.plan):
                if single_stream:
                    destination = self.destinations[0]
                else:
                    destination = self.destinations[column_index * len(self.plan) + set_index]
                units = set_sizes[set_index]
                report_data.append({
                    'column': column_name,
                    'set': sample_set.name,
                    'destination': destination,
                    'units': units,
                    'percentage': f"{units / self.datasize:.2%}" if self.datasize > 0 else "0.00%"
                })

        return pd.DataFrame(report_data)


def print_report(report: pd.DataFrame, title: str, stream: Optional[TextIO] = None) -> None:
    """Print a report table to the diagnostics stream (stderr by default)."""
    stream = stream if stream is not None else sys.stderr
    if len(report) == 0:
        return
    print("\n" + "=" * 60, file=stream)
    print(title, file=stream)
    print("=" * 60, file=stream)
    print(report.to_string(index=False), file=stream)
