"""
Configuration management for the Edge Similarity Engine.

Provides centralized configuration with sensible defaults, loadable
from JSON files and environment variables.
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


@dataclass
class SimilarityConfig:
    """Configuration for edge similarity computation."""

    # Node attribute holding the feature vectors
    source: str = "data"

    # Distance measure between two feature vectors
    distance_function: str = "Euclidian"

    # Transform applied to the distance (Reciprocal, Normalized, Exponential)
    similarity_function: str = "Reciprocal"

    # Scale used by the Exponential similarity only
    normalization_factor: float = 1.0

    # Edge attribute receiving the similarity
    result: str = "viewMetric"

    # Reject feature vectors of differing lengths instead of truncating
    strict_dimensions: bool = False

    def to_parameters(self) -> Dict[str, Any]:
        """Build the parameter mapping consumed by SimilarityComputer."""
        return {
            "source": self.source,
            "distance_function": self.distance_function,
            "similarity_function": self.similarity_function,
            "normalization_factor": self.normalization_factor,
            "result": self.result,
            "strict_dimensions": self.strict_dimensions,
        }


@dataclass
class StorageConfig:
    """Configuration for graph file serialization."""

    # Write gzip-compressed files when the output path ends in .gz
    enable_compression: bool = True

    # JSON indentation for written graphs (None for compact output)
    indent: Optional[int] = 2


@dataclass
class EngineConfig:
    """Master configuration combining all section configurations."""

    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Enable verbose logging
    verbose: bool = False


class Config:
    """
    Central configuration manager providing access to all settings.

    Supports loading from environment variables and configuration files.
    """

    _instance: Optional["Config"] = None
    _config: EngineConfig = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = EngineConfig()
        return cls._instance

    @classmethod
    def get(cls) -> EngineConfig:
        """Get the current engine configuration."""
        if cls._instance is None:
            cls()
        return cls._instance._config

    @classmethod
    def reset(cls) -> EngineConfig:
        """Restore the default configuration."""
        instance = cls()
        instance._config = EngineConfig()
        return instance._config

    @classmethod
    def load_from_file(cls, config_path: str) -> EngineConfig:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            Loaded EngineConfig instance.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r") as f:
            data = json.load(f)

        instance = cls()
        instance._config = cls._dict_to_config(data)
        return instance._config

    @classmethod
    def load_from_env(cls) -> EngineConfig:
        """
        Load configuration from environment variables.

        Variables are prefixed with EDGESIM_ and may also come from a
        .env file in the working directory.

        Returns:
            EngineConfig with environment overrides applied.
        """
        load_dotenv()

        instance = cls()
        config = instance._config

        if os.getenv("EDGESIM_SOURCE"):
            config.similarity.source = os.getenv("EDGESIM_SOURCE")

        if os.getenv("EDGESIM_DISTANCE_FUNCTION"):
            config.similarity.distance_function = os.getenv("EDGESIM_DISTANCE_FUNCTION")

        if os.getenv("EDGESIM_SIMILARITY_FUNCTION"):
            config.similarity.similarity_function = os.getenv("EDGESIM_SIMILARITY_FUNCTION")

        if os.getenv("EDGESIM_NORMALIZATION_FACTOR"):
            config.similarity.normalization_factor = float(
                os.getenv("EDGESIM_NORMALIZATION_FACTOR")
            )

        if os.getenv("EDGESIM_RESULT"):
            config.similarity.result = os.getenv("EDGESIM_RESULT")

        if os.getenv("EDGESIM_STRICT_DIMENSIONS"):
            config.similarity.strict_dimensions = (
                os.getenv("EDGESIM_STRICT_DIMENSIONS").lower() in ("true", "1", "yes")
            )

        if os.getenv("EDGESIM_VERBOSE"):
            config.verbose = os.getenv("EDGESIM_VERBOSE").lower() in ("true", "1", "yes")

        return config

    @staticmethod
    def _dict_to_config(data: dict) -> EngineConfig:
        """Convert a dictionary to EngineConfig."""
        config = EngineConfig()

        if "similarity" in data:
            config.similarity = SimilarityConfig(**data["similarity"])

        if "storage" in data:
            config.storage = StorageConfig(**data["storage"])

        if "verbose" in data:
            config.verbose = data["verbose"]

        return config

    @classmethod
    def save_to_file(cls, config_path: str, config: EngineConfig = None) -> None:
        """
        Save a configuration to a JSON file.

        Args:
            config_path: Path to save the configuration file.
            config: Configuration to save; defaults to the current one.
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config = config or cls.get()
        data = cls._config_to_dict(config)

        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def _config_to_dict(config: EngineConfig) -> dict:
        """Convert EngineConfig to a dictionary."""
        return {
            "similarity": {
                "source": config.similarity.source,
                "distance_function": config.similarity.distance_function,
                "similarity_function": config.similarity.similarity_function,
                "normalization_factor": config.similarity.normalization_factor,
                "result": config.similarity.result,
                "strict_dimensions": config.similarity.strict_dimensions,
            },
            "storage": {
                "enable_compression": config.storage.enable_compression,
                "indent": config.storage.indent,
            },
            "verbose": config.verbose,
        }
