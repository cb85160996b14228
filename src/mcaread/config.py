"""Configuration for region decoding."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any
import json

DEFAULT_BIOME = "minecraft:ocean"
AIR_BLOCK = "minecraft:air"


@dataclass
class ReaderConfig:
    """Configuration for chunk queries."""
    # Biome reported where a chunk has no section or biome data
    default_biome: str = DEFAULT_BIOME

    # Block reported where a chunk has no block-state data
    air_block: str = AIR_BLOCK

    # Keep located sections per chunk instead of scanning on every query
    cache_sections: bool = False

    # Reject palette names without a namespace instead of reusing the name as id
    strict_names: bool = True

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If a field has the wrong type or a name is not
                ``namespace:id`` with both parts non-empty
        """
        for field in ("default_biome", "air_block"):
            value = getattr(self, field)
            if not isinstance(value, str):
                raise ValueError(f"{field} must be a string, got {type(value).__name__}")
            namespace, _, name = value.partition(":")
            if not namespace or not name:
                raise ValueError(f"{field} must be namespace:id: {value!r}")
        for field in ("cache_sections", "strict_names"):
            value = getattr(self, field)
            if not isinstance(value, bool):
                raise ValueError(f"{field} must be true or false, got {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "default_biome": self.default_biome,
            "air_block": self.air_block,
            "cache_sections": self.cache_sections,
            "strict_names": self.strict_names,
        }

    def save(self, filepath: Path) -> None:
        """Save configuration to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path) -> "ReaderConfig":
        """Load configuration from JSON file."""
        with open(filepath) as f:
            data = json.load(f)

        config = cls(
            default_biome=data.get("default_biome", DEFAULT_BIOME),
            air_block=data.get("air_block", AIR_BLOCK),
            cache_sections=data.get("cache_sections", False),
            strict_names=data.get("strict_names", True),
        )
        config.validate()
        return config


DEFAULT_CONFIG = ReaderConfig()
