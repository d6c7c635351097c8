"""
Edge Similarity Engine.

Annotates the edges of a graph with the similarity of their endpoints,
computed from per-node feature vectors with a pluggable distance
function and similarity transform.
"""

__version__ = "1.0.0"
__author__ = "Edge Similarity Engine"
