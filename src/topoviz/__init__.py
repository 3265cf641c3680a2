"""
topoviz - Kafka Streams topology visualizer.

Parses the text form of a Kafka Streams topology into an immutable graph
model and renders it as a Mermaid flowchart or a GraphViz DOT digraph.
"""

from .converter import TopologyConverter
from .exceptions import ParseError, TopologyError, TopovizError, UnsupportedFormatError
from .formats import get_format, list_formats, register_format
from .topology import (
    NodeType,
    Subtopology,
    SubtopologyConnection,
    Topology,
    TopologyBuilder,
    TopologyNode,
    TopologyTextParser,
    parse_topology,
    parse_topology_file,
)

__version__ = "0.1.0"

__all__ = [
    "TopologyConverter",
    "TopovizError",
    "ParseError",
    "TopologyError",
    "UnsupportedFormatError",
    "get_format",
    "list_formats",
    "register_format",
    "NodeType",
    "Subtopology",
    "SubtopologyConnection",
    "Topology",
    "TopologyBuilder",
    "TopologyNode",
    "TopologyTextParser",
    "parse_topology",
    "parse_topology_file",
]
