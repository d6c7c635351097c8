"""
Custom exceptions for the Edge Similarity Engine.

Provides a small hierarchy of exceptions tagged with the stage
that raised them, so failures are reported with clear context.
"""


class EdgeSimilarityError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, stage: str = None, details: dict = None):
        super().__init__(message)
        self.stage = stage
        self.details = details or {}

    def __str__(self):
        base_msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {base_msg}"
        return base_msg


class ConfigurationError(EdgeSimilarityError):
    """Raised when similarity parameters fail validation."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, stage="Configuration", details=details)


class UnknownFunctionError(ConfigurationError):
    """Raised when a distance or similarity function name is not recognized."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"Unknown {field}: '{value}'.",
            details={"field": field, "value": value}
        )


class GraphLoadError(EdgeSimilarityError):
    """Raised when a graph file cannot be read or is malformed."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, stage="GraphLoad", details=details)
