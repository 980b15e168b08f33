"""
Error types raised by the sampling pipeline.

Every error carries the process exit status the command line runner
should terminate with.
"""

from typing import Optional


class SamplerError(Exception):
    """Base class for all fatal sampling errors."""

    exit_code = 1


class ConfigError(SamplerError, ValueError):
    """Malformed or contradictory options."""


class ParseError(SamplerError, ValueError):
    """A line of input could not be decoded."""

    def __init__(self, source: str, line_number: int, reason: Optional[str] = None):
        self.source = source
        self.line_number = line_number
        message = f"Error parsing line {line_number} of {source}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InputError(SamplerError, OSError):
    """A file could not be opened for reading or writing."""


class ConsistencyError(SamplerError):
    """Input columns are empty or not aligned."""


class CapacityError(SamplerError):
    """Requested set sizes exceed the available units."""


class InternalError(SamplerError):
    """An assignment refers to a destination that does not exist."""

    exit_code = 2
