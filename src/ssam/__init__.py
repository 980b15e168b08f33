"""
ssam - split sampler

Splits one or more aligned input files into named sets (train/test/dev, ...)
using random sampling, optionally excluding units found in reference files.
"""

__version__ = "0.2.0"
