"""
Sampler configuration.

Options can come from a YAML file and from the command line; values given
on the command line take precedence.
"""

import codecs
import dataclasses
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..errors import ConfigError

MAX_SEED = 2 ** 64


def split_list(value: Union[None, str, int, float, List[Any]]) -> List[str]:
    """Turn a comma separated string (or a YAML list) into a list of strings."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value]
    text = str(value)
    if text == "":
        return []
    return [item.strip() for item in text.split(",")]


@dataclass
class SamplerConfig:
    """All options of a sampling run."""
    files: List[str] = field(default_factory=list)
    delimiter: Optional[str] = None
    names: List[str] = field(default_factory=list)
    sizes: List[str] = field(default_factory=lambda: ["*"])
    replace: bool = False
    shuffle: bool = False
    seed: Optional[int] = None
    exclude: List[str] = field(default_factory=list)
    output: Optional[str] = None
    extension: str = "txt"
    encoding: str = "utf-8"
    exclusion_policy: str = "any"
    progress: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check option values.

        Raises:
            ConfigError: If an option has an invalid value
        """
        if not self.sizes:
            raise ConfigError("At least one set size must be specified")
        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, int):
                raise ConfigError(f"Seed must be an integer value (64-bit), got {self.seed!r}")
            if not 0 <= self.seed < MAX_SEED:
                raise ConfigError(f"Seed must be an unsigned 64-bit integer, got {self.seed}")
        if not self.extension:
            raise ConfigError("Output extension must not be empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigError(f"Unknown encoding: {self.encoding}")

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> 'SamplerConfig':
        """
        Build a configuration from a mapping, as loaded from YAML.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ConfigError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")

        values = dict(options)
        for key in ('files', 'names', 'exclude'):
            if key in values:
                values[key] = split_list(values[key])
        if 'sizes' in values:
            values['sizes'] = split_list(values['sizes']) or ["*"]
        if values.get('seed') is not None and isinstance(values['seed'], str):
            values['seed'] = parse_seed(values['seed'])
        if values.get('delimiter') is not None:
            values['delimiter'] = str(values['delimiter'])

        return cls(**values)

    def override(self, **options: Any) -> 'SamplerConfig':
        """Return a copy with every option that is not None replaced."""
        changes = {key: value for key, value in options.items() if value is not None}
        return dataclasses.replace(self, **changes)


def parse_seed(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Seed must be an integer value (64-bit), got '{value}'")


def load_config(config_path: Union[str, Path]) -> SamplerConfig:
    """
    Load configuration from a YAML file.

    Raises:
        ConfigError: If the file is missing or does not hold a mapping of options
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping of options")

    return SamplerConfig.from_dict(config)
