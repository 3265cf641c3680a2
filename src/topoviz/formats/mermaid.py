"""
Mermaid flowchart formatter.

Subtopologies are rendered as commented sections of one ``flowchart TD``;
topics, state stores and global stores follow as separate sections, and
every node gets a style class for its kind.
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

# (prefix, suffix) around the label, per node kind
NODE_SHAPES: Dict[NodeType, tuple] = {
    NodeType.SOURCE: ("([", "])"),
    NodeType.PROCESSOR: ("[", "]"),
    NodeType.SINK: ("([", "])"),
    NodeType.TOPIC: ("[/", "/]"),
    NodeType.STATE_STORE: ("[(", ")]"),
    NodeType.GLOBAL_STORE: ("{{", "}}"),
}

STYLE_CLASSES: Dict[NodeType, str] = {
    NodeType.SOURCE: "sourceStyle",
    NodeType.PROCESSOR: "processorStyle",
    NodeType.SINK: "sinkStyle",
    NodeType.TOPIC: "topicStyle",
    NodeType.STATE_STORE: "stateStoreStyle",
    NodeType.GLOBAL_STORE: "globalStoreStyle",
}

CLASS_DEFS = [
    "classDef sourceStyle fill:#90EE90,stroke:#2F4F2F,stroke-width:2px",
    "classDef processorStyle fill:#87CEEB,stroke:#4682B4,stroke-width:2px",
    "classDef sinkStyle fill:#FFB6C1,stroke:#8B4513,stroke-width:2px",
    "classDef topicStyle fill:#DDA0DD,stroke:#8B008B,stroke-width:2px",
    "classDef stateStoreStyle fill:#FFA500,stroke:#FF6347,stroke-width:2px",
    "classDef globalStoreStyle fill:#FFD700,stroke:#FF8C00,stroke-width:3px,stroke-dasharray: 5 5",
]

ARROWS = {
    EdgeKind.FLOW: "-->",
    EdgeKind.TOPIC_READ: "-->",
    EdgeKind.TOPIC_WRITE: "-->",
    EdgeKind.STORE: "-.->",
    EdgeKind.CONNECTION: "-.->",
}


def node_definition(node: TopologyNode) -> str:
    prefix, suffix = NODE_SHAPES[node.node_type]
    return f"{INDENT}{diagram_node_id(node.name, node.node_type)}{prefix}{node.name}{suffix}"


def edge_line(edge: DiagramEdge) -> str:
    arrow = ARROWS[edge.kind]
    if edge.label:
        arrow = f"{arrow}|{edge.label}|"
    return f"{INDENT}{edge.source_id} {arrow} {edge.target_id}"


def class_line(node: TopologyNode) -> str:
    return f"{INDENT}class {diagram_node_id(node.name, node.node_type)} {STYLE_CLASSES[node.node_type]}"


class MermaidFormatter(BaseTopologyFormatter):
    """Formats a topology as a Mermaid flowchart."""

    def get_format_name(self) -> str:
        return "mermaid"

    def format(self, topology: Topology) -> str:
        lines: List[str] = ["flowchart TD"]

        for subtopology_id, subtopology in topology.subtopologies.items():
            lines.append("")
            lines.append(f"{INDENT}%% Subtopology {subtopology_id}")
            lines.extend(node_definition(node) for node in subtopology.nodes.values())
            lines.extend(edge_line(edge) for edge in flow_edges(topology, subtopology_id))

        if topology.topics:
            lines.append("")
            lines.append(f"{INDENT}%% Topics")
            lines.extend(node_definition(node) for node in topology.topics.values())
            lines.extend(edge_line(edge) for edge in topic_edges(topology))

        if topology.state_stores:
            lines.append("")
            lines.append(f"{INDENT}%% State Stores")
            lines.extend(node_definition(node) for node in topology.state_stores.values())
            lines.extend(edge_line(edge) for edge in store_edges(topology))

        if topology.global_stores:
            lines.append("")
            lines.append(f"{INDENT}%% Global Stores")
            lines.extend(node_definition(node) for node in topology.global_stores.values())

        if topology.subtopology_connections:
            lines.append("")
            lines.append(f"{INDENT}%% Inter-Subtopology Connections")
            lines.extend(edge_line(edge) for edge in connection_edges(topology))

        lines.append("")
        lines.append(f"{INDENT}%% Styling")
        lines.extend(f"{INDENT}{class_def}" for class_def in CLASS_DEFS)

        lines.append("")
        styled_nodes = [node for _, node in topology.iter_nodes()]
        styled_nodes.extend(topology.topics.values())
        styled_nodes.extend(topology.state_stores.values())
        styled_nodes.extend(topology.global_stores.values())
        lines.extend(class_line(node) for node in styled_nodes)

        return "\n".join(lines) + "\n"
