"""
Base topology formatter for topoviz.

This module provides the abstract base class that all output formats
inherit from, plus the edge collection helpers they share. Formatters
first compute ordered node and edge lists from the immutable Topology and
then turn them into lines; they keep no state between calls.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..topology import NodeType, Topology

_INVALID_ID_CHARS = re.compile(r'[^A-Za-z0-9_]')

# Topics and stores get their own id namespace so they never merge with a
# processor node of the same name
ID_PREFIXES = {
    NodeType.TOPIC: "topic_",
    NodeType.STATE_STORE: "store_",
}


class EdgeKind(Enum):
    """Kinds of edges drawn by the formatters."""
    FLOW = "flow"              # Processor successor edge
    TOPIC_READ = "topic_read"  # Topic -> source
    TOPIC_WRITE = "topic_write"  # Sink -> topic
    STORE = "store"            # Processor -> state store
    CONNECTION = "connection"  # Sink -> source in another subtopology


# (source kind, target kind) for edges that touch a topic or a store
_ENDPOINT_TYPES = {
    EdgeKind.TOPIC_READ: (NodeType.TOPIC, None),
    EdgeKind.TOPIC_WRITE: (None, NodeType.TOPIC),
    EdgeKind.STORE: (None, NodeType.STATE_STORE),
}


def sanitize_node_id(name: str) -> str:
    """
    Turn a node name into an identifier valid in Mermaid and DOT.

    Characters outside ``[A-Za-z0-9_]`` become ``_``; a leading digit gets
    an ``n_`` prefix.
    """
    sanitized = _INVALID_ID_CHARS.sub("_", name)
    if sanitized and sanitized[0].isdigit():
        sanitized = "n_" + sanitized
    return sanitized


def diagram_node_id(name: str, node_type: Optional[NodeType] = None) -> str:
    """Diagram identifier of a node, prefixed for topics and state stores."""
    return sanitize_node_id(ID_PREFIXES.get(node_type, "") + name)


@dataclass(frozen=True)
class DiagramEdge:
    """A directed edge between two node names."""
    source: str
    target: str
    kind: EdgeKind = EdgeKind.FLOW
    label: str = ""

    @property
    def source_id(self) -> str:
        return diagram_node_id(self.source, _ENDPOINT_TYPES.get(self.kind, (None, None))[0])

    @property
    def target_id(self) -> str:
        return diagram_node_id(self.target, _ENDPOINT_TYPES.get(self.kind, (None, None))[1])


def flow_edges(topology: Topology, subtopology_id: int) -> List[DiagramEdge]:
    """Successor edges inside one subtopology, in node order."""
    subtopology = topology.subtopologies[subtopology_id]
    return [
        DiagramEdge(node.name, successor, EdgeKind.FLOW)
        for node in subtopology.nodes.values()
        for successor in sorted(node.successors)
    ]


def topic_edges(topology: Topology) -> List[DiagramEdge]:
    """Topic -> source and sink -> topic edges across all subtopologies."""
    edges: List[DiagramEdge] = []
    for _, node in topology.iter_nodes():
        if node.node_type is NodeType.SOURCE:
            edges.extend(
                DiagramEdge(topic, node.name, EdgeKind.TOPIC_READ)
                for topic in sorted(node.topics)
            )
        elif node.node_type is NodeType.SINK:
            edges.extend(
                DiagramEdge(node.name, topic, EdgeKind.TOPIC_WRITE)
                for topic in sorted(node.topics)
            )
    return edges


def store_edges(topology: Topology) -> List[DiagramEdge]:
    """Processor -> state store edges."""
    return [
        DiagramEdge(node.name, store, EdgeKind.STORE)
        for _, node in topology.iter_nodes()
        if node.node_type is NodeType.PROCESSOR
        for store in sorted(node.stores)
    ]


def connection_edges(topology: Topology) -> List[DiagramEdge]:
    """Sink -> source edges for every inter-subtopology connection."""
    return [
        DiagramEdge(
            connection.from_sink_node,
            connection.to_source_node,
            EdgeKind.CONNECTION,
            label=", ".join(sorted(connection.topics)),
        )
        for connection in topology.subtopology_connections
    ]


class BaseTopologyFormatter(ABC):
    """
    Abstract base class for topology formatters.

    Each format implementation must provide its name and a ``format``
    method that renders a whole Topology to a string.
    """

    @abstractmethod
    def get_format_name(self) -> str:
        """Return the format name (e.g., 'mermaid', 'dot')."""
        pass

    @abstractmethod
    def format(self, topology: Topology) -> str:
        """
        Render a topology.

        Args:
            topology: The frozen topology to render

        Returns:
            The diagram source text
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(format={self.get_format_name()!r})"
