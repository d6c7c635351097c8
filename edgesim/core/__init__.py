"""
Core module containing configuration and exceptions.
"""

from edgesim.core.config import Config, EngineConfig, SimilarityConfig, StorageConfig
from edgesim.core.exceptions import (
    EdgeSimilarityError,
    ConfigurationError,
    UnknownFunctionError,
    GraphLoadError,
)

__all__ = [
    "Config",
    "EngineConfig",
    "SimilarityConfig",
    "StorageConfig",
    "EdgeSimilarityError",
    "ConfigurationError",
    "UnknownFunctionError",
    "GraphLoadError",
]
