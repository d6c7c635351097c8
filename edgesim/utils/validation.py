"""
Input validation utilities.

Provides validation functions for graph file paths given on the
command line.
"""

import os
from pathlib import Path
from typing import Optional, Tuple

GRAPH_SUFFIXES = (".json", ".gz")


def validate_graph_path(path: str) -> Tuple[bool, Optional[str]]:
    """
    Validate an input graph file path.

    Args:
        path: Path to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not path:
        return False, "Path cannot be empty"

    path_obj = Path(path)

    if not path_obj.exists():
        return False, f"Path does not exist: {path}"

    if not path_obj.is_file():
        return False, f"Path is not a file: {path}"

    if not os.access(path_obj, os.R_OK):
        return False, f"Path is not readable: {path}"

    if path_obj.suffix not in GRAPH_SUFFIXES:
        return False, f"Unsupported graph file type: {path_obj.suffix or path}"

    return True, None


def validate_output_path(path: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a graph output path.

    Args:
        path: Destination path; missing parent directories are created later.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not path:
        return False, "Path cannot be empty"

    path_obj = Path(path)

    if path_obj.is_dir():
        return False, f"Output path is a directory: {path}"

    if path_obj.suffix not in GRAPH_SUFFIXES:
        return False, f"Unsupported graph file type: {path_obj.suffix or path}"

    return True, None
