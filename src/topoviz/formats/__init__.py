"""
Output formats for topoviz.

Formatters are pure functions of a frozen Topology. Built-in formats are
Mermaid flowcharts and GraphViz DOT; further formats can be added with
``register_format``.

Usage:
    from topoviz.formats import get_format

    print(get_format("dot").format(topology))
"""

from .base import (
    BaseTopologyFormatter,
    DiagramEdge,
    EdgeKind,
    diagram_node_id,
    sanitize_node_id,
)
from .mermaid import MermaidFormatter
from .dot import DotFormatter
from .registry import (
    DEFAULT_FORMAT,
    get_format,
    is_format_registered,
    list_formats,
    register_format,
)

__all__ = [
    "BaseTopologyFormatter",
    "DiagramEdge",
    "EdgeKind",
    "diagram_node_id",
    "sanitize_node_id",
    "MermaidFormatter",
    "DotFormatter",
    "DEFAULT_FORMAT",
    "get_format",
    "is_format_registered",
    "list_formats",
    "register_format",
]
