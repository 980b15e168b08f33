"""
Random assignment of units to sets.

The random number generator is passed in explicitly so a seeded generator
reproduces the same assignment. Draws happen in a fixed order: without
replacement a single shuffle of the index pool, with replacement one batch
of indices per non-remainder set in declaration order.
"""

import sys
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .sizes import SetPlan


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the run's generator: seeded PCG64, or seeded from OS entropy when seed is None."""
    return np.random.default_rng(seed)


class Assignment:
    """
    Mapping from unit index to the ordered list of sets it was assigned to.

    With replacement a unit may be assigned to several sets, or several
    times to the same set.
    """

    def __init__(self, datasize: int, num_sets: int):
        self.num_sets = num_sets
        self._sets: List[List[int]] = [[] for _ in range(datasize)]

    def assign(self, index: int, set_index: int) -> None:
        self._sets[index].append(set_index)

    def sets_of(self, index: int) -> List[int]:
        return self._sets[index]

    def unassigned(self) -> List[int]:
        return [i for i, sets in enumerate(self._sets) if not sets]

    def set_sizes(self) -> List[int]:
        """Number of assignments per set, counting repeats."""
        sizes = [0] * self.num_sets
        for sets in self._sets:
            for set_index in sets:
                sizes[set_index] += 1
        return sizes

    def members(self, set_index: int) -> List[int]:
        """Unit indices assigned to a set, in unit order, with repeats."""
        return [i for i, sets in enumerate(self._sets) for s in sets if s == set_index]

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[List[int]]:
        return iter(self._sets)


class SetSampler:
    """Draws units into the sets of a plan."""

    def __init__(self, plan: SetPlan, rng: np.random.Generator, replace: bool = False):
        self.plan = plan
        self.rng = rng
        self.replace = replace

    def sample(self, datasize: int, targets: Optional[Sequence[int]] = None) -> Assignment:
        """
        Assign units to sets.

        Args:
            datasize: Number of units available
            targets: Resolved target count per set; resolved from the plan when omitted

        Returns:
            The assignment of every unit
        """
        if targets is None:
            targets = self.plan.check_capacity(datasize, self.replace)

        assignment = Assignment(datasize, len(self.plan))

        if self.replace:
            self._sample_with_replacement(assignment, datasize, targets)
        else:
            self._sample_without_replacement(assignment, datasize, targets)

        self._assign_remainder(assignment)
        return assignment

    def _sample_without_replacement(self, assignment: Assignment, datasize: int, targets: Sequence[int]) -> None:
        pool = np.arange(datasize)
        self.rng.shuffle(pool)
        pool = pool.tolist()

        for set_index, target in enumerate(targets):
            if set_index == self.plan.remainder_index:
                continue
            for _ in range(target):
                assignment.assign(pool.pop(), set_index)

    def _sample_with_replacement(self, assignment: Assignment, datasize: int, targets: Sequence[int]) -> None:
        for set_index, target in enumerate(targets):
            if set_index == self.plan.remainder_index or target == 0:
                continue
            for index in self.rng.integers(0, datasize, size=target).tolist():
                assignment.assign(index, set_index)

    def _assign_remainder(self, assignment: Assignment) -> None:
        unassigned = assignment.unassigned()
        if self.plan.remainder_index is not None:
            for index in unassigned:
                assignment.assign(index, self.plan.remainder_index)
        elif unassigned:
            print(f"NOTICE: There are {len(unassigned)} units not covered by any of the output sets",
                  file=sys.stderr)


def emission_order(datasize: int, rng: Optional[np.random.Generator] = None) -> List[int]:
    """Row order for output: original order, or a fresh permutation when rng is given."""
    if rng is None:
        return list(range(datasize))
    return rng.permutation(datasize).tolist()
