"""
Exclusion of units that occur in reference files.

Units are compared by a 64-bit fingerprint of their exact text. Two different
units with the same fingerprint are treated as equal; with a 64-bit hash the
chance of a false exclusion is negligible for any realistic corpus size, and
no exact-text verification is done on a match.
"""

import hashlib
import sys
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import pandas as pd

from ..errors import ConfigError
from .policies import *  # Import all policies to register them
from .registry import policy_registry


def fingerprint(unit: str) -> int:
    """Return the 64-bit fingerprint of a unit's text."""
    digest = hashlib.md5(unit.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big')


class FingerprintIndex:
    """Set of unit fingerprints built from one reference column."""

    def __init__(self, units: Optional[Iterable[str]] = None, source: str = ""):
        self.source = source
        self._hashes: Set[int] = set()
        if units is not None:
            self.update(units)

    def update(self, units: Iterable[str]) -> None:
        for unit in units:
            self._hashes.add(fingerprint(unit))

    def __contains__(self, unit: str) -> bool:
        return fingerprint(unit) in self._hashes

    def __len__(self) -> int:
        return len(self._hashes)

    def match_rows(self, column: List[str]) -> Set[int]:
        """Return the row positions of the units in column found in this index."""
        return {row for row, unit in enumerate(column) if fingerprint(unit) in self._hashes}


class ExclusionFilter:
    """Removes rows from aligned columns whose units occur in reference columns."""

    def __init__(self, indexes: List[FingerprintIndex], policy: str = "any"):
        """
        Initialize the exclusion filter.

        Args:
            indexes: One fingerprint index per data column, aligned by column position
            policy: Name of the registered exclusion policy

        Raises:
            ConfigError: If the policy is unknown
        """
        self.indexes = indexes
        self.policy_name = policy
        self.policy = policy_registry.get_policy(policy)
        if self.policy is None:
            raise ConfigError(f"Exclusion policy '{policy}' not found. "
                              f"Available policies: {list(policy_registry.list_policies().keys())}")
        self.exclusion_stats: Dict[str, Dict[str, Any]] = {}

    def filter(self,
               columns: List[List[str]],
               names: Optional[List[str]] = None) -> Tuple[List[List[str]], Set[int]]:
        """
        Remove excluded rows from all columns.

        Matching is done per column against that column's own index; the
        policy then decides which rows are removed, and those rows are removed
        from every column.

        Args:
            columns: Aligned data columns
            names: Column names for the statistics (defaults to column1, column2, ...)

        Returns:
            Tuple of (filtered columns, removed row positions)

        Raises:
            ConfigError: If the number of reference columns differs from the data columns
        """
        if len(self.indexes) != len(columns):
            raise ConfigError(
                f"Exclusion needs one reference file per input column: "
                f"got {len(self.indexes)} reference file(s) for {len(columns)} column(s)"
            )
        if names is None:
            names = [f"column{i + 1}" for i in range(len(columns))]

        num_rows = len(columns[0]) if columns else 0
        matches = [index.match_rows(column) for index, column in zip(self.indexes, columns)]

        removed = policy_registry.validate_policy_output(
            set(self.policy(matches, num_rows)), matches, num_rows, self.policy_name
        )

        filtered = [
            [unit for row, unit in enumerate(column) if row not in removed]
            for column in columns
        ]

        for name, index, column_matches in zip(names, self.indexes, matches):
            self.exclusion_stats[name] = {
                'reference': index.source,
                'reference_size': len(index),
                'matches': len(column_matches),
                'removed': len(removed),
                'exclusion_rate': len(removed) / num_rows if num_rows > 0 else 0
            }

        print(f"Excluded {len(removed)} of {num_rows} units "
              f"(policy: {self.policy_name})", file=sys.stderr)

        return filtered, removed

    def generate_exclusion_report(self) -> pd.DataFrame:
        """
        Generate an exclusion report DataFrame.

        Returns:
            DataFrame with one row per data column
        """
        report_data = []

        for name, stats in self.exclusion_stats.items():
            report_data.append({
                'column': name,
                'reference': stats['reference'],
                'reference_size': stats['reference_size'],
                'matches': stats['matches'],
                'removed': stats['removed'],
                'exclusion_rate': f"{stats['exclusion_rate']:.2%}"
            })

        return pd.DataFrame(report_data)
