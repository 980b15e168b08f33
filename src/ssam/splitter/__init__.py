"""
Split Sampling Module

Assigns the units of one or more aligned columns to named sets by random
sampling, with optional exclusion of units found in reference files.
"""

from .config import SamplerConfig, load_config
from .contamination import ExclusionFilter, FingerprintIndex, fingerprint
from .registry import policy_registry, register_policy
from .sampler import Assignment, SetSampler, create_rng
from .sizes import Absolute, Relative, Remainder, SetPlan, parse_size
from .splitter import SplitSampler
from .writer import EmissionWriter, Sink

__all__ = [
    'Absolute',
    'Assignment',
    'EmissionWriter',
    'ExclusionFilter',
    'FingerprintIndex',
    'Relative',
    'Remainder',
    'SamplerConfig',
    'SetPlan',
    'SetSampler',
    'Sink',
    'SplitSampler',
    'create_rng',
    'fingerprint',
    'load_config',
    'parse_size',
    'policy_registry',
    'register_policy'
]
