"""
Similarity computation between connected nodes.

Provides the distance and similarity functions and the computer
that annotates every edge of a graph with a similarity value.
"""

from edgesim.similarity.functions import (
    DistanceFunction,
    SimilarityFunction,
    euclidean_distance,
    reciprocal_similarity,
    exponential_similarity,
    normalized_similarity,
)
from edgesim.similarity.computer import (
    SimilarityComputer,
    SimilarityParameters,
    compute_similarity,
    resolve_parameters,
)

__all__ = [
    "DistanceFunction",
    "SimilarityFunction",
    "euclidean_distance",
    "reciprocal_similarity",
    "exponential_similarity",
    "normalized_similarity",
    "SimilarityComputer",
    "SimilarityParameters",
    "compute_similarity",
    "resolve_parameters",
]
