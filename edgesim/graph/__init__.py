"""
Feature graph representation and property stores.
"""

from edgesim.graph.feature_graph import Edge, FeatureGraph
from edgesim.graph.properties import FeatureStore, ResultStore

__all__ = [
    "Edge",
    "FeatureGraph",
    "FeatureStore",
    "ResultStore",
]
