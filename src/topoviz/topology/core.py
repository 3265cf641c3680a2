"""
Core type-safe classes for the topology model.

This module provides the frozen classes that form the canonical
representation of a parsed Kafka Streams topology. The text parser and the
builder produce these types; formatters only ever read them.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Tuple


class NodeType(Enum):
    """Types of nodes in the topology."""
    SOURCE = "source"            # Reads from one or more topics
    PROCESSOR = "processor"      # Transforms records, may use state stores
    SINK = "sink"                # Writes to a single topic
    TOPIC = "topic"              # Derived from source/sink topics
    STATE_STORE = "state_store"  # Derived from processor stores
    GLOBAL_STORE = "global_store"


def _freeze(values: Iterable[str]) -> FrozenSet[str]:
    if isinstance(values, str):
        raise TypeError("Expected a collection of names, got a single string")
    return frozenset(values)


@dataclass(frozen=True)
class TopologyNode:
    """A node in the topology graph."""
    name: str
    node_type: NodeType
    predecessors: FrozenSet[str] = frozenset()
    successors: FrozenSet[str] = frozenset()
    topics: FrozenSet[str] = frozenset()
    stores: FrozenSet[str] = frozenset()

    def __post_init__(self):
        """Validate node and freeze its name sets."""
        if not self.name:
            raise ValueError("Node name cannot be empty")

        node_type = self.node_type
        if isinstance(node_type, str):
            node_type = NodeType(node_type.lower())
        if not isinstance(node_type, NodeType):
            raise ValueError(f"Invalid node type: {self.node_type!r}")
        object.__setattr__(self, "node_type", node_type)

        for attr in ("predecessors", "successors", "topics", "stores"):
            object.__setattr__(self, attr, _freeze(getattr(self, attr)))

    def __str__(self) -> str:
        return f"TopologyNode({self.name}, type={self.node_type.value})"


@dataclass(frozen=True)
class Subtopology:
    """An independently scheduled group of nodes, keyed by name."""
    id: int
    nodes: Mapping[str, TopologyNode] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    def nodes_of_type(self, node_type: NodeType) -> Iterator[TopologyNode]:
        """Yield this subtopology's nodes of one kind, in declaration order."""
        return (node for node in self.nodes.values() if node.node_type is node_type)

    def __str__(self) -> str:
        return f"Subtopology({self.id}, nodes={len(self.nodes)})"


@dataclass(frozen=True)
class SubtopologyConnection:
    """
    A sink in one subtopology writing a topic that a source in a different
    subtopology reads.
    """
    from_subtopology_id: int
    from_sink_node: str
    to_subtopology_id: int
    to_source_node: str
    topics: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "topics", _freeze(self.topics))

    def __str__(self) -> str:
        topics = ", ".join(sorted(self.topics))
        return (
            f"{self.from_subtopology_id}/{self.from_sink_node} -> "
            f"{self.to_subtopology_id}/{self.to_source_node} [{topics}]"
        )


@dataclass(frozen=True)
class Topology:
    """
    The complete, immutable topology.

    Subtopologies keep the order in which they were opened in the text.
    Topics and state stores are derived by TopologyBuilder.build() and keep
    first-seen order.
    """
    subtopologies: Mapping[int, Subtopology] = field(default_factory=dict)
    global_stores: Mapping[str, TopologyNode] = field(default_factory=dict)
    topics: Mapping[str, TopologyNode] = field(default_factory=dict)
    state_stores: Mapping[str, TopologyNode] = field(default_factory=dict)
    subtopology_connections: Tuple[SubtopologyConnection, ...] = ()

    def __post_init__(self):
        for attr in ("subtopologies", "global_stores", "topics", "state_stores"):
            object.__setattr__(self, attr, MappingProxyType(dict(getattr(self, attr))))
        object.__setattr__(
            self, "subtopology_connections", tuple(self.subtopology_connections)
        )

    def get_subtopology(self, subtopology_id: int) -> Subtopology:
        return self.subtopologies[subtopology_id]

    def iter_nodes(self) -> Iterator[Tuple[int, TopologyNode]]:
        """Yield (subtopology id, node) for every node in every subtopology."""
        for subtopology_id, subtopology in self.subtopologies.items():
            for node in subtopology.nodes.values():
                yield subtopology_id, node

    def summary(self) -> Dict[str, int]:
        """Counts used for logging and the CLI's verbose output."""
        return {
            "subtopologies": len(self.subtopologies),
            "nodes": sum(len(s.nodes) for s in self.subtopologies.values()),
            "global_stores": len(self.global_stores),
            "topics": len(self.topics),
            "state_stores": len(self.state_stores),
            "connections": len(self.subtopology_connections),
        }

    def __str__(self) -> str:
        parts = ", ".join(f"{key}={value}" for key, value in self.summary().items())
        return f"Topology({parts})"
