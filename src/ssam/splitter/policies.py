"""
Exclusion Policies

Each policy receives one set of matched row positions per column and returns
the rows to remove. The same rows are removed from every column, so columns
stay aligned whatever the policy.
"""

from typing import List, Set

from .registry import register_policy


@register_policy("any", "Remove a row from all columns if its unit matched in any column")
def remove_any_match(matches: List[Set[int]], num_rows: int) -> Set[int]:
    removed: Set[int] = set()
    for column_matches in matches:
        removed.update(column_matches)
    return removed


@register_policy("all", "Remove a row only if the units of every column matched")
def remove_full_match(matches: List[Set[int]], num_rows: int) -> Set[int]:
    if not matches:
        return set()
    removed = set(matches[0])
    for column_matches in matches[1:]:
        removed &= column_matches
    return removed
