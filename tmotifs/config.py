"""
Configuration schemas for tmotifs YAML-based runs.

Provides type-safe, validated configuration classes using dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, Union
from pathlib import Path
import yaml

INFINITE_DELTA = {"inf", "infinite", "infinity", "none", ""}


def parse_delta(value: Union[int, str, None]) -> Optional[int]:
    """
    Parse a time window value.

    Returns None (infinite) for None or ``"inf"``/``"infinite"``, otherwise a
    non-negative integer.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip().lower() in INFINITE_DELTA:
            return None
        try:
            value = int(value)
        except ValueError:
            raise ValueError(f"delta must be an integer or 'inf', got {value!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"delta must be an integer or 'inf', got {value!r}")
    if value < 0:
        raise ValueError(f"delta must be >= 0, got {value}")
    return value


@dataclass
class InputConfig:
    """Input network configuration."""
    path: str
    format: str = "text"
    directed: bool = True
    nodes_path: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        """Validate input configuration."""
        if not self.path:
            raise ValueError("Input path is required")
        valid_format = {"text", "csv"}
        if self.format not in valid_format:
            raise ValueError(f"format must be one of {valid_format}, got {self.format}")
        if self.nodes_path is not None and self.format != "csv":
            raise ValueError("nodes_path is only supported with format 'csv'")

    @property
    def network_name(self) -> str:
        """Name used in output file names (defaults to the file name)."""
        return self.name or Path(self.path).name


@dataclass
class SearchConfig:
    """Motif search configuration."""
    delta: Optional[Union[int, str]] = None
    max_nodes: int = 5
    max_edges: int = 5
    keep_occurrences: bool = False
    max_states: Optional[int] = None
    show_progress: bool = False

    def __post_init__(self):
        """Validate search configuration."""
        self.delta = parse_delta(self.delta)
        if self.max_nodes < 2:
            raise ValueError(f"max_nodes must be >= 2, got {self.max_nodes}")
        if self.max_edges < 1:
            raise ValueError(f"max_edges must be >= 1, got {self.max_edges}")
        if self.max_states is not None and self.max_states < 1:
            raise ValueError(f"max_states must be >= 1, got {self.max_states}")


@dataclass
class OutputConfig:
    """Output configuration."""
    directory: str = "out"
    format: str = "csv"
    dump_occurrences: bool = False

    def __post_init__(self):
        """Validate output configuration."""
        valid_format = {"csv", "json"}
        if self.format not in valid_format:
            raise ValueError(f"format must be one of {valid_format}, got {self.format}")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate logging configuration."""
        valid_level = {"DEBUG", "INFO", "WARNING", "ERROR"}
        self.level = self.level.upper()
        if self.level not in valid_level:
            raise ValueError(f"level must be one of {valid_level}, got {self.level}")


@dataclass
class RunConfig:
    """Complete run configuration."""
    input: InputConfig
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Keep occurrences whenever they are to be dumped."""
        if self.output.dump_occurrences:
            self.search.keep_occurrences = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RunConfig:
        """Create RunConfig from dictionary (e.g., from YAML)."""
        return cls(
            input=InputConfig(**data['input']),
            search=SearchConfig(**(data.get('search') or {})),
            output=OutputConfig(**(data.get('output') or {})),
            logging=LoggingConfig(**(data.get('logging') or {}))
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RunConfig:
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or 'input' not in data:
            raise ValueError("Missing required section: input")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)
