"""
Utility functions and helpers.
"""

from edgesim.utils.logging_config import setup_logging
from edgesim.utils.validation import validate_graph_path, validate_output_path

__all__ = [
    "setup_logging",
    "validate_graph_path",
    "validate_output_path",
]
