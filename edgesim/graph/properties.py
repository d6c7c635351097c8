"""
Property views over a feature graph.

FeatureStore reads per-node feature vectors and ResultStore writes
per-edge values, each bound to a single named graph property.
"""

from typing import Hashable

import numpy as np

from edgesim.graph.feature_graph import Edge, FeatureGraph

EMPTY_VECTOR = np.zeros(0, dtype=float)


class FeatureStore:
    """Read-only node -> feature vector mapping."""

    def __init__(self, graph: FeatureGraph, name: str):
        self.graph = graph
        self.name = name

    def get(self, node: Hashable) -> np.ndarray:
        """
        Get the feature vector of a node.

        A node without the property yields the empty vector.
        """
        value = self.graph.get_node_value(node, self.name)
        if value is None:
            return EMPTY_VECTOR
        return np.asarray(value, dtype=float).reshape(-1)

    def has(self, node: Hashable) -> bool:
        """Check whether the node carries the property."""
        return self.graph.get_node_value(node, self.name) is not None


class ResultStore:
    """Edge -> real value mapping written into an edge property."""

    def __init__(self, graph: FeatureGraph, name: str):
        self.graph = graph
        self.name = name

    def get(self, edge: Edge) -> float:
        return self.graph.get_edge_value(edge, self.name, 0.0)

    def set(self, edge: Edge, value: float) -> None:
        self.graph.set_edge_value(edge, self.name, float(value))

    def set_all(self, value: float) -> None:
        self.graph.set_all_edge_value(self.name, float(value))
