"""
Derivation passes run once when a topology is built.

Each pass is a pure function over the finished subtopologies and global
stores. Iteration follows subtopology order, then node order within a
subtopology, then (for topics) global stores; names inside a single node
are visited in sorted order so the derived maps are reproducible.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping
import logging

from .core import NodeType, Subtopology, SubtopologyConnection, TopologyNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SourceRef:
    subtopology_id: int
    node_name: str


def extract_topics(
    subtopologies: Mapping[int, Subtopology],
    global_stores: Mapping[str, TopologyNode],
) -> Dict[str, TopologyNode]:
    """Create one TOPIC node per distinct topic read or written anywhere."""
    topics: Dict[str, TopologyNode] = {}

    def _add(topic_names):
        for topic_name in sorted(topic_names):
            if topic_name not in topics:
                topics[topic_name] = TopologyNode(topic_name, NodeType.TOPIC)

    for subtopology in subtopologies.values():
        for node in subtopology.nodes.values():
            if node.node_type in (NodeType.SOURCE, NodeType.SINK) and node.topics:
                _add(node.topics)

    for global_store in global_stores.values():
        _add(global_store.topics)

    logger.debug(f"Extracted {len(topics)} topics")
    return topics


def extract_state_stores(
    subtopologies: Mapping[int, Subtopology],
) -> Dict[str, TopologyNode]:
    """Create one STATE_STORE node per distinct store used by a processor."""
    state_stores: Dict[str, TopologyNode] = {}

    for subtopology in subtopologies.values():
        for node in subtopology.nodes_of_type(NodeType.PROCESSOR):
            for store_name in sorted(node.stores):
                if store_name not in state_stores:
                    state_stores[store_name] = TopologyNode(store_name, NodeType.STATE_STORE)

    logger.debug(f"Extracted {len(state_stores)} state stores")
    return state_stores


def detect_subtopology_connections(
    subtopologies: Mapping[int, Subtopology],
) -> List[SubtopologyConnection]:
    """
    Find sinks that write a topic read by a source in another subtopology.

    One connection is emitted per (sink, source, topic) triple. A topic read
    by several sources fans out into several connections, including when
    those sources live in the same subtopology.
    """
    # Map topics to every source reading them
    topic_to_sources: Dict[str, List[_SourceRef]] = {}
    for subtopology_id, subtopology in subtopologies.items():
        for node in subtopology.nodes_of_type(NodeType.SOURCE):
            for topic in sorted(node.topics):
                topic_to_sources.setdefault(topic, []).append(
                    _SourceRef(subtopology_id, node.name)
                )

    connections: List[SubtopologyConnection] = []
    for from_subtopology_id, subtopology in subtopologies.items():
        for sink in subtopology.nodes_of_type(NodeType.SINK):
            for topic in sorted(sink.topics):
                for source in topic_to_sources.get(topic, []):
                    if source.subtopology_id == from_subtopology_id:
                        continue
                    connection = SubtopologyConnection(
                        from_subtopology_id=from_subtopology_id,
                        from_sink_node=sink.name,
                        to_subtopology_id=source.subtopology_id,
                        to_source_node=source.node_name,
                        topics=frozenset({topic}),
                    )
                    logger.debug(f"Detected subtopology connection {connection}")
                    connections.append(connection)

    return connections
