"""
Tests for the Mermaid formatter and the shared formatter helpers.
"""

import pytest

from topoviz.formats import DiagramEdge, EdgeKind, MermaidFormatter, diagram_node_id, sanitize_node_id
from topoviz.formats.base import connection_edges, flow_edges, store_edges, topic_edges
from topoviz.topology import NodeType, Topology, TopologyNode, parse_topology


SMALL_TOPOLOGY = """\
Sub-topology: 0
  Source: in (topics: [input])
    --> agg
  Processor: agg (stores: [counts])
    --> S0
    <-- in
  Sink: S0 (topic: mid)
    <-- agg
Sub-topology: 1
  Source: S1 (topics: [mid])
"""


@pytest.fixture
def small_topology():
    return parse_topology(SMALL_TOPOLOGY)


@pytest.fixture
def mermaid_lines(small_topology):
    return MermaidFormatter().format(small_topology).splitlines()


# =============================================================================
# Helper Tests
# =============================================================================

class TestSanitizeNodeId:
    """Tests for sanitize_node_id."""

    @pytest.mark.parametrize("name, expected", [
        ("KSTREAM-SOURCE-0000000000", "KSTREAM_SOURCE_0000000000"),
        ("a.b c", "a_b_c"),
        ("plain_name", "plain_name"),
        ("1st-topic", "n_1st_topic"),
    ])
    def test_sanitize(self, name, expected):
        assert sanitize_node_id(name) == expected


class TestDiagramNodeId:
    """Tests for per-kind diagram identifiers."""

    @pytest.mark.parametrize("node_type, expected", [
        (NodeType.SOURCE, "orders"),
        (NodeType.PROCESSOR, "orders"),
        (NodeType.TOPIC, "topic_orders"),
        (NodeType.STATE_STORE, "store_orders"),
        (NodeType.GLOBAL_STORE, "orders"),
    ])
    def test_prefix_per_kind(self, node_type, expected):
        assert diagram_node_id("orders", node_type) == expected

    def test_prefixed_id_needs_no_digit_guard(self):
        assert diagram_node_id("7days", NodeType.TOPIC) == "topic_7days"

    def test_edge_endpoints_follow_edge_kind(self):
        read = DiagramEdge("orders", "orders", EdgeKind.TOPIC_READ)
        store = DiagramEdge("agg", "agg", EdgeKind.STORE)

        assert (read.source_id, read.target_id) == ("topic_orders", "orders")
        assert (store.source_id, store.target_id) == ("agg", "store_agg")

    def test_edge_kind_is_enum(self):
        assert isinstance(EdgeKind.FLOW, EdgeKind)
        assert EdgeKind("store") is EdgeKind.STORE
        assert DiagramEdge("a", "b").kind is EdgeKind.FLOW


class TestEdgeCollection:
    """Tests for the ordered edge lists shared by formatters."""

    def test_flow_edges(self, small_topology):
        edges = flow_edges(small_topology, 0)

        assert [(e.source, e.target) for e in edges] == [("in", "agg"), ("agg", "S0")]
        assert all(e.kind == EdgeKind.FLOW for e in edges)

    def test_topic_edges(self, small_topology):
        edges = topic_edges(small_topology)

        assert [(e.source, e.target, e.kind) for e in edges] == [
            ("input", "in", EdgeKind.TOPIC_READ),
            ("S0", "mid", EdgeKind.TOPIC_WRITE),
            ("mid", "S1", EdgeKind.TOPIC_READ),
        ]

    def test_store_edges(self, small_topology):
        assert [(e.source, e.target) for e in store_edges(small_topology)] == [("agg", "counts")]

    def test_connection_edges_are_labelled(self, small_topology):
        (edge,) = connection_edges(small_topology)

        assert (edge.source, edge.target, edge.label) == ("S0", "S1", "mid")


# =============================================================================
# MermaidFormatter Tests
# =============================================================================

class TestMermaidFormatter:
    """Tests for MermaidFormatter."""

    def test_format_name(self):
        assert MermaidFormatter().get_format_name() == "mermaid"

    def test_header(self, mermaid_lines):
        assert mermaid_lines[0] == "flowchart TD"

    def test_subtopology_sections(self, mermaid_lines):
        assert "    %% Subtopology 0" in mermaid_lines
        assert "    %% Subtopology 1" in mermaid_lines

    def test_node_shapes(self, mermaid_lines):
        assert "    in([in])" in mermaid_lines
        assert "    agg[agg]" in mermaid_lines
        assert "    S0([S0])" in mermaid_lines
        assert "    topic_input[/input/]" in mermaid_lines
        assert "    store_counts[(counts)]" in mermaid_lines

    def test_edges(self, mermaid_lines):
        assert "    in --> agg" in mermaid_lines
        assert "    agg --> S0" in mermaid_lines
        assert "    topic_input --> in" in mermaid_lines
        assert "    S0 --> topic_mid" in mermaid_lines
        assert "    agg -.-> store_counts" in mermaid_lines

    def test_connection(self, mermaid_lines):
        assert "    %% Inter-Subtopology Connections" in mermaid_lines
        assert "    S0 -.->|mid| S1" in mermaid_lines

    def test_style_classes(self, mermaid_lines):
        assert "    class in sourceStyle" in mermaid_lines
        assert "    class agg processorStyle" in mermaid_lines
        assert "    class topic_mid topicStyle" in mermaid_lines
        assert "    class store_counts stateStoreStyle" in mermaid_lines

    def test_global_stores(self, global_store_topology):
        lines = MermaidFormatter().format(global_store_topology).splitlines()

        assert "    %% Global Stores" in lines
        assert "    KTABLE_SOURCE_0000000001{{KTABLE-SOURCE-0000000001}}" in lines
        assert "    class KTABLE_SOURCE_0000000001 globalStoreStyle" in lines

    def test_empty_sections_are_omitted(self):
        lines = MermaidFormatter().format(Topology()).splitlines()

        assert "    %% Topics" not in lines
        assert "    %% State Stores" not in lines
        assert "    %% Inter-Subtopology Connections" not in lines
        assert "    %% Styling" in lines

    def test_every_node_type_has_a_shape(self):
        formatter = MermaidFormatter()
        for node_type in NodeType:
            node = TopologyNode("n", node_type)
            topology = Topology(global_stores={"n": node}) if node_type is NodeType.GLOBAL_STORE \
                else Topology(topics={"n": node})
            assert formatter.format(topology)

    def test_is_stateless(self, small_topology):
        formatter = MermaidFormatter()

        assert formatter.format(small_topology) == formatter.format(small_topology)

    def test_source_named_like_its_topic_stays_distinct(self):
        lines = MermaidFormatter().format(
            parse_topology("Sub-topology: 0\nSource: orders (topics: [orders])\n")
        ).splitlines()

        assert "    orders([orders])" in lines
        assert "    topic_orders[/orders/]" in lines
        assert "    topic_orders --> orders" in lines
        assert "    orders --> orders" not in lines
