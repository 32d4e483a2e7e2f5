"""
Configuration and defaults for the geometry kernel.

Nothing in the kernel reads global state: spaces and law checks take a
Config explicitly, falling back to DEFAULT_CONFIG.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """
    Global configuration for the geometry kernel.

    integer_type is a NumberTraits name ("int", "int64", ...), resolved
    when a space is built from this config.
    """

    # Default space
    default_dimension: int = 3
    integer_type: str = "int"

    # Runtime ring-law sampling (see kernel.concepts.check_ring_laws)
    ring_law_samples: int = 64
    ring_law_bound: int = 1000
    ring_law_seed: int = 0

    log_level: str = "INFO"

    def __post_init__(self):
        if self.default_dimension < 1:
            raise ValueError(f"default_dimension must be >= 1, got {self.default_dimension}")
        if self.ring_law_samples < 1:
            raise ValueError(f"ring_law_samples must be >= 1, got {self.ring_law_samples}")
        if self.ring_law_bound < 1:
            raise ValueError(f"ring_law_bound must be >= 1, got {self.ring_law_bound}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "default_dimension": self.default_dimension,
            "integer_type": self.integer_type,
            "ring_law_samples": self.ring_law_samples,
            "ring_law_bound": self.ring_law_bound,
            "ring_law_seed": self.ring_law_seed,
            "log_level": self.log_level,
        }

    @classmethod
    def from_json(cls, path: Path) -> "Config":
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def setup_logging(config: Optional[Config] = None) -> None:
    """Configure root logging for scripts and interactive sessions."""
    config = config or DEFAULT_CONFIG
    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)


# Global default config
DEFAULT_CONFIG = Config()
