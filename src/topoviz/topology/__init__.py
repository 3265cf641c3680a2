"""
Topology model and text parser.

This package turns the text form of a Kafka Streams topology into an
immutable graph: subtopologies of source, processor and sink nodes, global
stores, and the derived topics, state stores and inter-subtopology
connections.
"""

from .core import (
    NodeType,
    Subtopology,
    SubtopologyConnection,
    Topology,
    TopologyNode,
)
from .builder import NodeDraft, TopologyBuilder
from .derivation import (
    detect_subtopology_connections,
    extract_state_stores,
    extract_topics,
)
from .parser import TopologyTextParser, parse_topology, parse_topology_file

__all__ = [
    # Core types
    "NodeType",
    "TopologyNode",
    "Subtopology",
    "SubtopologyConnection",
    "Topology",
    # Builders
    "NodeDraft",
    "TopologyBuilder",
    # Derivation passes
    "extract_topics",
    "extract_state_stores",
    "detect_subtopology_connections",
    # Parser
    "TopologyTextParser",
    "parse_topology",
    "parse_topology_file",
]
