"""
GraphViz DOT formatter.

Each subtopology becomes a dashed ``cluster_<id>`` subgraph. Topics, state
stores and global stores sit outside the clusters.
"""

from typing import Dict, List

from ..topology import NodeType, Topology, TopologyNode
from .base import (
    BaseTopologyFormatter,
    DiagramEdge,
    EdgeKind,
    connection_edges,
    diagram_node_id,
    flow_edges,
    store_edges,
    topic_edges,
)

INDENT = "    "

HEADER = [
    "digraph KafkaStreamsTopology {",
    f"{INDENT}// Graph settings",
    f"{INDENT}rankdir=TB;",
    f"{INDENT}node [shape=box, style=filled];",
    f'{INDENT}graph [fontname="Helvetica", fontsize=12];',
    f'{INDENT}node [fontname="Helvetica", fontsize=11];',
    f'{INDENT}edge [fontname="Helvetica", fontsize=10];',
]

NODE_STYLES: Dict[NodeType, str] = {
    NodeType.SOURCE: 'shape=ellipse, fillcolor="#90EE90", color="#2F4F2F", penwidth=2',
    NodeType.PROCESSOR: 'shape=box, fillcolor="#87CEEB", color="#4682B4", penwidth=2',
    NodeType.SINK: 'shape=ellipse, fillcolor="#FFB6C1", color="#8B4513", penwidth=2',
    NodeType.TOPIC: 'shape=parallelogram, fillcolor="#DDA0DD", color="#8B008B", penwidth=2',
    NodeType.STATE_STORE: 'shape=cylinder, fillcolor="#FFA500", color="#FF6347", penwidth=2',
    NodeType.GLOBAL_STORE: (
        'shape=hexagon, fillcolor="#FFD700", color="#FF8C00", penwidth=3, style="filled,dashed"'
    ),
}

EDGE_STYLES = {
    EdgeKind.FLOW: "",
    EdgeKind.TOPIC_READ: "",
    EdgeKind.TOPIC_WRITE: "",
    EdgeKind.STORE: "style=dashed, color=orange, penwidth=2",
    EdgeKind.CONNECTION: "style=dashed, color=purple",
}


def escape_label(label: str) -> str:
    # Backslash first, then quotes, then newlines
    return label.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def node_definition(node: TopologyNode, indent: str = INDENT) -> str:
    return (
        f'{indent}{diagram_node_id(node.name, node.node_type)} '
        f'[label="{escape_label(node.name)}", {NODE_STYLES[node.node_type]}];'
    )


def edge_line(edge: DiagramEdge) -> str:
    attributes = [EDGE_STYLES[edge.kind]] if EDGE_STYLES[edge.kind] else []
    if edge.label:
        attributes.insert(0, f'label="{escape_label(edge.label)}"')
    suffix = f" [{', '.join(attributes)}]" if attributes else ""
    return f"{INDENT}{edge.source_id} -> {edge.target_id}{suffix};"


class DotFormatter(BaseTopologyFormatter):
    """Formats a topology as a GraphViz DOT digraph."""

    def get_format_name(self) -> str:
        return "dot"

    def format(self, topology: Topology) -> str:
        lines: List[str] = list(HEADER)
        lines.append("")

        for subtopology_id, subtopology in topology.subtopologies.items():
            lines.append(f"{INDENT}subgraph cluster_{subtopology_id} {{")
            lines.append(f'{INDENT * 2}label="Sub-topology {subtopology_id}";')
            lines.append(f"{INDENT * 2}style=dashed;")
            lines.append(f"{INDENT * 2}color=gray;")
            lines.append("")
            lines.extend(
                node_definition(node, INDENT * 2) for node in subtopology.nodes.values()
            )
            lines.append(f"{INDENT}}}")
            lines.append("")

        sections = [
            ("Topics", topology.topics),
            ("State Stores", topology.state_stores),
            ("Global Stores", topology.global_stores),
        ]
        for title, nodes in sections:
            if nodes:
                lines.append(f"{INDENT}// {title}")
                lines.extend(node_definition(node) for node in nodes.values())
                lines.append("")

        lines.append(f"{INDENT}// Edges")
        for subtopology_id in topology.subtopologies:
            lines.extend(edge_line(edge) for edge in flow_edges(topology, subtopology_id))

        edge_sections = [
            ("Topic Connections", topic_edges(topology)),
            ("Processor to State Store Connections", store_edges(topology)),
            ("Inter-Subtopology Connections", connection_edges(topology)),
        ]
        for title, edges in edge_sections:
            if edges:
                lines.append("")
                lines.append(f"{INDENT}// {title}")
                lines.extend(edge_line(edge) for edge in edges)

        lines.append("}")
        return "\n".join(lines) + "\n"
