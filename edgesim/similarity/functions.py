"""
Distance and similarity functions on feature vectors.

Function names given by the user are resolved once into the
enumerations below; the edge loop only ever branches on enum members.
"""

import math
from enum import Enum
from typing import List

import numpy as np

from edgesim.core.exceptions import UnknownFunctionError


class DistanceFunction(Enum):
    """Supported distance measures."""
    EUCLIDIAN = "Euclidian"

    @classmethod
    def from_name(cls, name: str) -> "DistanceFunction":
        """
        Resolve a distance function from its name.

        Raises:
            UnknownFunctionError: If the name is not recognized.
        """
        for member in cls:
            if member.value == name:
                return member
        raise UnknownFunctionError("distance function", name)

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]


class SimilarityFunction(Enum):
    """Supported similarity transforms."""
    RECIPROCAL = "Reciprocal"
    NORMALIZED = "Normalized"
    EXPONENTIAL = "Exponential"

    @classmethod
    def from_name(cls, name: str) -> "SimilarityFunction":
        """
        Resolve a similarity function from its name.

        Raises:
            UnknownFunctionError: If the name is not recognized.
        """
        for member in cls:
            if member.value == name:
                return member
        raise UnknownFunctionError("similarity function", name)

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """
    Euclidean distance between two feature vectors.

    Only the first min(len(a), len(b)) components are compared;
    trailing components of the longer vector are ignored.

    Args:
        a: First feature vector.
        b: Second feature vector.

    Returns:
        Non-negative distance.
    """
    n = min(len(a), len(b))
    diff = np.asarray(a[:n], dtype=float) - np.asarray(b[:n], dtype=float)
    return float(np.sqrt(np.dot(diff, diff)))


def reciprocal_similarity(d: float) -> float:
    """Similarity in (0, 1], equal to 1 for identical vectors."""
    return 1.0 / (d + 1.0)


def exponential_similarity(d: float, variance: float) -> float:
    """
    Gaussian-kernel similarity.

    Args:
        d: Distance between the two vectors.
        variance: Squared normalization factor.
    """
    return math.exp(-d * d / variance)


def normalized_similarity(d: float, d_max: float) -> float:
    """Rescale a distance against the largest distance of the graph."""
    return 1.0 - d / d_max


DISTANCES = {
    DistanceFunction.EUCLIDIAN: euclidean_distance,
}
