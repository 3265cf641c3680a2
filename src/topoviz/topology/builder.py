"""
Mutable builders for the topology model.

NodeDraft accumulates what the parser learns about one node while its
block is open. TopologyBuilder collects finished subtopologies and global
stores and runs the derivation passes exactly once in build().
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Set
import logging

from ..exceptions import TopologyError
from .core import NodeType, Subtopology, Topology, TopologyNode
from .derivation import (
    detect_subtopology_connections,
    extract_state_stores,
    extract_topics,
)

logger = logging.getLogger(__name__)


@dataclass
class NodeDraft:
    """
    Everything known so far about one node of the open block.

    A draft created only because another node listed it as a successor is a
    placeholder: it is a PROCESSOR until its own line says otherwise.
    """
    name: str
    node_type: NodeType = NodeType.PROCESSOR
    placeholder: bool = False
    predecessors: Set[str] = field(default_factory=set)
    successors: Set[str] = field(default_factory=set)
    topics: Set[str] = field(default_factory=set)
    stores: Set[str] = field(default_factory=set)

    @classmethod
    def placeholder_for(cls, name: str) -> "NodeDraft":
        return cls(name=name, node_type=NodeType.PROCESSOR, placeholder=True)

    def define(
        self,
        node_type: NodeType,
        topics: Iterable[str] = (),
        stores: Iterable[str] = (),
    ) -> None:
        """
        Apply a node's own declaration line.

        Kind, topics and stores come from the declaration; edges recorded
        earlier are kept.
        """
        if self.placeholder and node_type is not NodeType.PROCESSOR:
            logger.debug(
                f"Placeholder '{self.name}' redefined as {node_type.value}, "
                f"keeping {len(self.predecessors)} predecessors"
            )
        self.node_type = node_type
        self.topics = set(topics)
        self.stores = set(stores)
        self.placeholder = False

    def add_successors(self, names: Iterable[str]) -> None:
        self.successors.update(names)

    def add_predecessors(self, names: Iterable[str]) -> None:
        self.predecessors.update(names)

    def build(self, node_type: Optional[NodeType] = None) -> TopologyNode:
        return TopologyNode(
            name=self.name,
            node_type=node_type or self.node_type,
            predecessors=frozenset(self.predecessors),
            successors=frozenset(self.successors),
            topics=frozenset(self.topics),
            stores=frozenset(self.stores),
        )


class TopologyBuilder:
    """Collects subtopologies and global stores, then freezes them."""

    def __init__(self):
        self._subtopologies: Dict[int, Subtopology] = {}
        self._global_stores: Dict[str, TopologyNode] = {}
        self._built = False

    def add_subtopology(self, subtopology: Subtopology) -> "TopologyBuilder":
        """Register a finished subtopology under its id."""
        self._check_open()
        if subtopology.id < 0:
            raise TopologyError(
                f"Subtopology id must be non-negative, got {subtopology.id}",
                topology_issue="negative_subtopology_id",
            )
        if subtopology.id in self._subtopologies:
            logger.warning(
                f"Subtopology {subtopology.id} declared more than once; "
                f"the later declaration replaces the earlier one"
            )
        self._subtopologies[subtopology.id] = subtopology
        return self

    def add_subtopology_nodes(
        self, subtopology_id: int, drafts: Mapping[str, NodeDraft]
    ) -> "TopologyBuilder":
        """Freeze an open block's drafts into a Subtopology."""
        nodes = {name: draft.build() for name, draft in drafts.items()}
        return self.add_subtopology(Subtopology(subtopology_id, nodes))

    def add_global_store(self, global_store: TopologyNode) -> "TopologyBuilder":
        """Register a global store node."""
        self._check_open()
        if global_store.node_type is not NodeType.GLOBAL_STORE:
            raise TopologyError(
                f"Node '{global_store.name}' must be of type GLOBAL_STORE, "
                f"got {global_store.node_type.value}",
                topology_issue="wrong_global_store_type",
                affected_nodes=[global_store.name],
            )
        self._global_stores[global_store.name] = global_store
        return self

    def add_global_store_nodes(self, drafts: Mapping[str, NodeDraft]) -> "TopologyBuilder":
        """Register every draft of a global-store block as its own global store."""
        for draft in drafts.values():
            self.add_global_store(draft.build(NodeType.GLOBAL_STORE))
        return self

    def build(self) -> Topology:
        """Run the derivation passes and return the frozen topology."""
        self._check_open()
        self._built = True

        topics = extract_topics(self._subtopologies, self._global_stores)
        state_stores = extract_state_stores(self._subtopologies)
        connections = detect_subtopology_connections(self._subtopologies)

        topology = Topology(
            subtopologies=self._subtopologies,
            global_stores=self._global_stores,
            topics=topics,
            state_stores=state_stores,
            subtopology_connections=tuple(connections),
        )
        logger.info(f"Built {topology}")
        return topology

    def _check_open(self) -> None:
        if self._built:
            raise TopologyError(
                "TopologyBuilder.build() has already been called",
                topology_issue="builder_reused",
            )
