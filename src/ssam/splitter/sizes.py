"""
Set sizes: parsing of size specifications and resolution to unit counts.
"""

import math
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from ..errors import CapacityError, ConfigError

REMAINDER_TOKEN = "*"


@dataclass(frozen=True)
class Absolute:
    """A fixed number of units."""
    count: int

    def resolve(self, datasize: int) -> int:
        return self.count

    def __str__(self) -> str:
        return str(self.count)


@dataclass(frozen=True)
class Relative:
    """A fraction of the available units, rounded down."""
    fraction: float

    def resolve(self, datasize: int) -> int:
        return math.floor(self.fraction * datasize)

    def __str__(self) -> str:
        return str(self.fraction)


@dataclass(frozen=True)
class Remainder:
    """All units not assigned to any other set."""

    def resolve(self, datasize: int) -> int:
        return 0

    def __str__(self) -> str:
        return REMAINDER_TOKEN


SetSpec = Union[Absolute, Relative, Remainder]


def parse_size(token: str) -> SetSpec:
    """
    Parse a single size token.

    An asterisk is the remainder, an integer is an absolute count and any
    other number (e.g. 0.1) is a fraction of the data.

    Raises:
        ConfigError: If the token is not a valid size
    """
    token = token.strip()
    if token == REMAINDER_TOKEN:
        return Remainder()

    try:
        count = int(token)
    except ValueError:
        pass
    else:
        if count < 0:
            raise ConfigError(f"Set size must not be negative: {token}")
        return Absolute(count)

    try:
        fraction = float(token)
    except ValueError:
        raise ConfigError(f"Expected an integer, a fraction or '{REMAINDER_TOKEN}' for set size, got '{token}'")
    if not math.isfinite(fraction) or fraction < 0:
        raise ConfigError(f"Relative set size must be a non-negative number: {token}")
    return Relative(fraction)


@dataclass(frozen=True)
class SampleSet:
    """A named output set with its size specification."""
    name: str
    spec: SetSpec

    @property
    def is_remainder(self) -> bool:
        return isinstance(self.spec, Remainder)


class SetPlan:
    """
    Ordered list of output sets.

    Declaration order matters: without replacement, sets declared earlier
    draw from the shuffled pool first.
    """

    def __init__(self, sets: Sequence[SampleSet]):
        if not sets:
            raise ConfigError("At least one set size must be specified")

        remainders = [i for i, s in enumerate(sets) if s.is_remainder]
        if len(remainders) > 1:
            raise ConfigError(f"You can only set one set's size to remainder ({REMAINDER_TOKEN})")

        self.sets = list(sets)
        self.remainder_index: Optional[int] = remainders[0] if remainders else None

    @classmethod
    def from_options(cls, sizes: Iterable[Union[str, int, float]], names: Iterable[str] = ()) -> 'SetPlan':
        """
        Build a plan from size tokens and set names.

        Missing names are generated as set1, set2, ...; names without a
        matching size are reported and ignored.
        """
        specs = [parse_size(str(size)) for size in sizes]
        names = [name.strip() for name in names]

        if len(names) > len(specs):
            print(f"Warning: you specified more set names than set sizes, "
                  f"ignoring {', '.join(names[len(specs):])}", file=sys.stderr)
            names = names[:len(specs)]
        while len(names) < len(specs):
            names.append(f"set{len(names) + 1}")

        if len(set(names)) != len(names):
            raise ConfigError(f"Set names must be unique: {', '.join(names)}")

        return cls([SampleSet(name, spec) for name, spec in zip(names, specs)])

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.sets]

    def __len__(self) -> int:
        return len(self.sets)

    def __iter__(self):
        return iter(self.sets)

    def resolve(self, datasize: int) -> List[int]:
        """Target unit count per set; the remainder set counts as 0."""
        return [s.spec.resolve(datasize) for s in self.sets]

    def check_capacity(self, datasize: int, replace: bool = False) -> List[int]:
        """
        Resolve target counts and verify they fit in the data.

        Raises:
            CapacityError: If sampling without replacement asks for more units than available
        """
        targets = self.resolve(datasize)
        total = sum(targets)
        if total > datasize and not replace:
            raise CapacityError(
                f"Sum of requested sample sizes exceeds the available data ({total} vs {datasize})"
            )
        return targets
