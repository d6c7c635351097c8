"""
Feature graph data structure.

Defines the directed graph whose nodes carry feature vectors and
whose edges receive similarity values, with JSON persistence.
"""

import gzip
import json
import logging
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional, Set, Tuple

import networkx as nx
import numpy as np

from edgesim.core.exceptions import GraphLoadError

logger = logging.getLogger(__name__)

# (source, target, key); the key tells parallel edges apart
Edge = Tuple[Hashable, Hashable, int]

GZIP_MAGIC = b"\x1f\x8b"


class FeatureGraph:
    """
    Directed multigraph annotated with node and edge properties.

    Wraps a NetworkX MultiDiGraph. Node attributes hold feature
    vectors, edge attributes hold computed values; a "property" is
    simply an attribute name shared across nodes or edges.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._graph = nx.MultiDiGraph()

    @property
    def node_count(self) -> int:
        """Number of nodes in the graph."""
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Number of edges in the graph."""
        return self._graph.number_of_edges()

    def add_node(self, node_id: Hashable, attributes: Dict[str, Any] = None) -> None:
        """
        Add a node to the graph.

        Args:
            node_id: Identifier of the node.
            attributes: Node properties, e.g. {"data": [0.5, 1.0]}.
        """
        self._graph.add_node(node_id, **(attributes or {}))

    def add_edge(
        self,
        source_id: Hashable,
        target_id: Hashable,
        attributes: Dict[str, Any] = None,
        key: Optional[int] = None,
    ) -> Optional[Edge]:
        """
        Add a directed edge between two existing nodes.

        Args:
            source_id: Source node identifier.
            target_id: Target node identifier.
            attributes: Edge properties.
            key: Optional key distinguishing parallel edges.

        Returns:
            The edge identifier, or None if an endpoint is missing.
        """
        if source_id not in self._graph:
            logger.warning(f"Source node not found: {source_id}")
            return None
        if target_id not in self._graph:
            logger.warning(f"Target node not found: {target_id}")
            return None

        key = self._graph.add_edge(source_id, target_id, key=key, **(attributes or {}))
        return (source_id, target_id, key)

    def nodes(self) -> Set[Hashable]:
        """Set of all node identifiers."""
        return set(self._graph.nodes())

    def edges(self) -> List[Edge]:
        """All edges as (source, target, key) identifiers."""
        return list(self._graph.edges(keys=True))

    def endpoints(self, edge: Edge) -> Tuple[Hashable, Hashable]:
        """Return the (source, target) nodes of an edge."""
        source_id, target_id, _ = edge
        return source_id, target_id

    def has_node_property(self, name: str) -> bool:
        """Check whether at least one node carries the named property."""
        return any(name in data for _, data in self._graph.nodes(data=True))

    def get_node_value(self, node_id: Hashable, name: str, default: Any = None) -> Any:
        """Get a node property value, or the default when unset."""
        return self._graph.nodes[node_id].get(name, default)

    def get_edge_value(self, edge: Edge, name: str, default: Any = None) -> Any:
        """Get an edge property value, or the default when unset."""
        return self._graph.edges[edge].get(name, default)

    def set_edge_value(self, edge: Edge, name: str, value: Any) -> None:
        """Set an edge property value."""
        self._graph.edges[edge][name] = value

    def set_all_edge_value(self, name: str, value: Any) -> None:
        """Set an edge property to the same value on every edge."""
        for _, _, data in self._graph.edges(data=True):
            data[name] = value

    def get_statistics(self) -> Dict[str, Any]:
        """Get graph statistics."""
        if self.node_count == 0:
            return {"node_count": 0, "edge_count": 0}

        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "density": nx.density(self._graph),
            "connected_components": nx.number_weakly_connected_components(self._graph),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert graph to dictionary for serialization."""
        return {
            "name": self.name,
            "nodes": [
                {"id": node_id, "attributes": dict(data)}
                for node_id, data in self._graph.nodes(data=True)
            ],
            "edges": [
                {
                    "source_id": source_id,
                    "target_id": target_id,
                    "key": key,
                    "attributes": dict(data),
                }
                for source_id, target_id, key, data in self._graph.edges(
                    keys=True, data=True
                )
            ],
        }

    def save(self, path: Path, compress: bool = True, indent: Optional[int] = 2) -> None:
        """
        Save graph to a JSON file.

        Args:
            path: Destination path. Written with gzip when it ends in
                ".gz" and compression is enabled.
            compress: Whether ".gz" paths are compressed.
            indent: JSON indentation.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        content = json.dumps(self.to_dict(), indent=indent, default=_json_default)

        if compress and path.suffix == ".gz":
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write(content)
        else:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)

        logger.info(f"Graph saved to {path}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureGraph":
        """
        Build a graph from its dictionary form.

        Raises:
            GraphLoadError: If a node or edge entry is malformed.
        """
        graph = cls(name=data.get("name", ""))

        try:
            for node_data in data.get("nodes", []):
                graph.add_node(node_data["id"], node_data.get("attributes", {}))

            for edge_data in data.get("edges", []):
                edge = graph.add_edge(
                    edge_data["source_id"],
                    edge_data["target_id"],
                    edge_data.get("attributes", {}),
                    key=edge_data.get("key"),
                )
                if edge is None:
                    raise GraphLoadError(
                        "Edge references an unknown node",
                        details={"edge": edge_data},
                    )
        except (KeyError, TypeError) as e:
            raise GraphLoadError(f"Malformed graph data: {e}") from e

        return graph

    @classmethod
    def load(cls, path: Path) -> "FeatureGraph":
        """
        Load graph from a JSON file, plain or gzip-compressed.

        Compression is detected from the file content, not its name.

        Args:
            path: Path to the graph file.

        Returns:
            Loaded FeatureGraph.

        Raises:
            GraphLoadError: If the file is missing or not valid graph JSON.
        """
        path = Path(path)
        if not path.exists():
            raise GraphLoadError(f"Graph file not found: {path}")

        try:
            with open(path, "rb") as f:
                compressed = f.read(2) == GZIP_MAGIC

            if compressed:
                with gzip.open(path, "rt", encoding="utf-8") as f:
                    data = json.load(f)
            else:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise GraphLoadError(f"Could not read graph file {path}: {e}") from e

        if not isinstance(data, dict):
            raise GraphLoadError(f"Graph file {path} does not contain a JSON object")

        graph = cls.from_dict(data)
        logger.info(f"Graph loaded from {path}")
        return graph


def _json_default(value: Any) -> Any:
    """Serialize numpy values written into node or edge properties."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return str(value)
