"""
Edge similarity computation.

Validates the similarity parameters against a graph, then walks its
edges, turning the distance between the feature vectors of each edge's
endpoints into a similarity value stored on the edge.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np

from edgesim.core.exceptions import ConfigurationError
from edgesim.graph.feature_graph import FeatureGraph
from edgesim.graph.properties import FeatureStore, ResultStore
from edgesim.similarity.functions import (
    DISTANCES,
    DistanceFunction,
    SimilarityFunction,
    exponential_similarity,
    normalized_similarity,
    reciprocal_similarity,
)

logger = logging.getLogger(__name__)

# Parameter keys and the labels used to report them
REQUIRED_PARAMETERS = (
    ("source", "source"),
    ("distance_function", "distance function"),
    ("similarity_function", "similarity function"),
    ("result", "result"),
)


@dataclass(frozen=True)
class SimilarityParameters:
    """Validated similarity parameters with function names resolved."""

    source: str
    distance: DistanceFunction
    similarity: SimilarityFunction
    result: str
    # Squared normalization factor, set for the Exponential similarity only
    variance: Optional[float] = None
    strict_dimensions: bool = False


def _require(parameters: Mapping[str, Any], key: str, label: str) -> Any:
    value = parameters.get(key)
    if value is None or value == "":
        raise ConfigurationError(
            f'No "{label}" property provided.', details={"field": label}
        )
    return value


def resolve_parameters(parameters: Optional[Mapping[str, Any]]) -> SimilarityParameters:
    """
    Validate raw parameters and resolve function names.

    Args:
        parameters: Mapping with source, distance_function,
            similarity_function, normalization_factor, result and
            optionally strict_dimensions.

    Returns:
        Resolved SimilarityParameters.

    Raises:
        ConfigurationError: If a parameter is missing or invalid.
    """
    if parameters is None:
        raise ConfigurationError("No parameters provided.")

    values = {key: _require(parameters, key, label) for key, label in REQUIRED_PARAMETERS}

    distance = DistanceFunction.from_name(values["distance_function"])
    similarity = SimilarityFunction.from_name(values["similarity_function"])

    variance = None
    if similarity is SimilarityFunction.EXPONENTIAL:
        factor = _require(parameters, "normalization_factor", "normalization factor")
        if not isinstance(factor, numbers.Real) or isinstance(factor, bool):
            raise ConfigurationError(
                'The "normalization factor" must be a number.',
                details={"field": "normalization factor", "value": factor},
            )
        variance = float(factor) * float(factor)
        # Factors below ~1e-162 square to 0.0
        if not factor > 0 or variance == 0.0:
            raise ConfigurationError(
                'The "normalization factor" must be strictly positive.',
                details={"field": "normalization factor", "value": factor},
            )
        if not math.isfinite(variance):
            raise ConfigurationError(
                'The "normalization factor" must be finite.',
                details={"field": "normalization factor", "value": factor},
            )

    return SimilarityParameters(
        source=values["source"],
        distance=distance,
        similarity=similarity,
        result=values["result"],
        variance=variance,
        strict_dimensions=bool(parameters.get("strict_dimensions", False)),
    )


class SimilarityComputer:
    """
    Computes the similarity of connected nodes from their feature vectors.

    Usage mirrors a two-step algorithm plugin: check() validates the
    parameters without touching the graph, run() writes one value per
    edge into the result property.

    The Normalized similarity needs the largest distance of the whole
    graph, so it stores raw distances in a first pass and rescales them
    in a second one.
    """

    def __init__(self, graph: FeatureGraph, parameters: Optional[Mapping[str, Any]] = None):
        self.graph = graph
        self.parameters = parameters
        self.resolved: Optional[SimilarityParameters] = None
        self.metrics: Dict[str, Any] = {}

    def check(self) -> Tuple[bool, Optional[str]]:
        """
        Validate the parameters against the graph.

        Returns:
            Tuple of (is_valid, error_message).
        """
        self.resolved = None
        try:
            resolved = resolve_parameters(self.parameters)
            self._check_graph(resolved)
        except ConfigurationError as e:
            logger.error(f"Invalid similarity parameters: {e.args[0]}")
            return False, e.args[0]

        self.resolved = resolved
        return True, None

    def _check_graph(self, params: SimilarityParameters) -> None:
        """Graph-dependent checks; reads the graph but never writes it."""
        if self.graph.edge_count == 0:
            return

        if not self.graph.has_node_property(params.source):
            raise ConfigurationError(
                f'No node carries the "{params.source}" property.',
                details={"field": "source", "value": params.source},
            )

        features = FeatureStore(self.graph, params.source)
        expected = None
        checked = set()
        for edge in self.graph.edges():
            for node in self.graph.endpoints(edge):
                if node in checked:
                    continue
                checked.add(node)

                try:
                    size = len(features.get(node))
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(
                        f'Node {node!r} has a non-numeric "{params.source}" '
                        f"feature vector: {e}",
                        details={"node": node},
                    ) from e

                if not params.strict_dimensions:
                    continue
                if not features.has(node):
                    raise ConfigurationError(
                        f'Node {node!r} has no "{params.source}" feature vector.',
                        details={"node": node},
                    )
                if expected is None:
                    expected = size
                elif size != expected:
                    raise ConfigurationError(
                        f"Feature vector of node {node!r} has length {size}, "
                        f"expected {expected}.",
                        details={"node": node, "length": size, "expected": expected},
                    )

    def run(self) -> bool:
        """
        Compute and store the similarity of every edge.

        Returns:
            True once every edge holds a similarity value.

        Raises:
            ConfigurationError: If the parameters do not pass check().
        """
        if self.resolved is None:
            is_valid, error = self.check()
            if not is_valid:
                raise ConfigurationError(error)

        params = self.resolved
        features = FeatureStore(self.graph, params.source)
        results = ResultStore(self.graph, params.result)

        d_max = self._first_pass(features, results, DISTANCES[params.distance], params)

        if params.similarity is SimilarityFunction.NORMALIZED:
            self._rescale(results, d_max)
            self.metrics["d_max"] = d_max

        logger.info(
            f"Computed {params.similarity.value} similarity on "
            f"{self.metrics['edges']} edges into '{params.result}'"
        )
        return True

    def _first_pass(
        self,
        features: FeatureStore,
        results: ResultStore,
        distance: Callable[[np.ndarray, np.ndarray], float],
        params: SimilarityParameters,
    ) -> float:
        """
        Write the per-edge value and return the largest distance seen.

        For the Normalized similarity the raw distance is stored; it is
        rescaled by _rescale() once every edge has been visited.
        """
        d_max = 0.0
        edges = 0
        truncated = 0

        for edge in self.graph.edges():
            u, v = self.graph.endpoints(edge)
            fu = features.get(u)
            fv = features.get(v)

            if len(fu) != len(fv):
                truncated += 1
                logger.debug(
                    f"Edge {edge!r}: feature lengths differ ({len(fu)} vs {len(fv)})"
                )

            d = distance(fu, fv)

            if params.similarity is SimilarityFunction.RECIPROCAL:
                results.set(edge, reciprocal_similarity(d))
            elif params.similarity is SimilarityFunction.NORMALIZED:
                if d > d_max:
                    d_max = d
                results.set(edge, d)
            elif params.similarity is SimilarityFunction.EXPONENTIAL:
                results.set(edge, exponential_similarity(d, params.variance))

            edges += 1

        if truncated:
            logger.warning(
                f"{truncated} edges compared feature vectors of different "
                f"lengths; distances use the shorter length"
            )

        self.metrics = {"edges": edges, "truncated_edges": truncated}
        return d_max

    def _rescale(self, results: ResultStore, d_max: float) -> None:
        """Turn stored raw distances into normalized similarities."""
        if d_max > 0:
            for edge in self.graph.edges():
                results.set(edge, normalized_similarity(results.get(edge), d_max))
        else:
            # Every distance is zero: all edges are maximally similar
            results.set_all(1.0)


def compute_similarity(graph: FeatureGraph, parameters: Mapping[str, Any]) -> bool:
    """
    Convenience function to validate parameters and annotate a graph.

    Args:
        graph: Graph whose nodes carry feature vectors.
        parameters: Similarity parameters, see resolve_parameters().

    Returns:
        True on success.

    Raises:
        ConfigurationError: If the parameters are invalid.
    """
    computer = SimilarityComputer(graph, parameters)
    return computer.run()
