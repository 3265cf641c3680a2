"""
Parser for the text form of a Kafka Streams topology.

Reads the output of ``TopologyDescription.toString()`` line by line and
builds the immutable Topology model. The parser only ever looks at the
current line and the block that is currently open.
"""

from pathlib import Path
from typing import IO, Dict, Iterable, Iterator, Optional, Union
import io
import logging

from ..exceptions import ParseError
from .builder import NodeDraft, TopologyBuilder
from .core import NodeType, Topology
from .parsing import (
    is_node_declaration,
    match_global_store_header,
    match_predecessors,
    match_processor,
    match_sink,
    match_source,
    match_subtopology_header,
    match_successors,
)

logger = logging.getLogger(__name__)

TopologyText = Union[str, bytes, IO[str]]


class TopologyTextParser:
    """
    Single-pass, line-oriented state machine over the topology grammar.

    A parser instance may be reused; every call to parse() starts from a
    clean state.
    """

    # Block id used while a global-store block is open
    GLOBAL_STORE_BLOCK = -1

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self._builder = TopologyBuilder()
        self._current_block_id: Optional[int] = None
        self._current_nodes: Dict[str, NodeDraft] = {}
        self._current_node_name: Optional[str] = None
        self._in_global_store_block = False

    def parse(self, text: TopologyText) -> Topology:
        """
        Parse a topology description into the Topology model.

        Args:
            text: The description as a string, UTF-8 bytes, or a readable
                text stream

        Returns:
            The frozen Topology

        Raises:
            ParseError: If the input cannot be read or decoded
        """
        self._reset()
        line_count = 0
        for line_count, raw_line in enumerate(_read_lines(text), start=1):
            self._consume(raw_line.strip())
        self._flush_block()

        topology = self._builder.build()
        logger.info(f"Parsed {line_count} lines into {topology}")
        self._reset()
        return topology

    def _consume(self, line: str) -> None:
        if not line:
            return

        subtopology_id = match_subtopology_header(line)
        if subtopology_id is not None:
            self._open_block(subtopology_id, global_store=False)
            return

        global_store_name = match_global_store_header(line)
        if global_store_name is not None:
            logger.debug(f"Opening global store block '{global_store_name}'")
            self._open_block(self.GLOBAL_STORE_BLOCK, global_store=True)
            return

        source = match_source(line)
        if source is not None:
            name, topics = source
            self._define_node(name, NodeType.SOURCE, topics=topics)
            return

        processor = match_processor(line)
        if processor is not None:
            name, stores = processor
            self._define_node(name, NodeType.PROCESSOR, stores=stores)
            return

        sink = match_sink(line)
        if sink is not None:
            name, topics = sink
            self._define_node(name, NodeType.SINK, topics=topics)
            return

        successors = match_successors(line)
        if successors is not None:
            self._link_successors(successors)
            return

        predecessors = match_predecessors(line)
        if predecessors is not None:
            self._link_predecessors(predecessors)
            return

        if is_node_declaration(line):
            # Arrows below an unsupported declaration belong to that node, not the previous one
            self._current_node_name = None
            logger.debug(f"Skipping unsupported node declaration: {line!r}")
            return

        logger.debug(f"Skipping unrecognized line: {line!r}")

    def _open_block(self, block_id: int, global_store: bool) -> None:
        self._flush_block()
        self._current_block_id = block_id
        self._current_nodes = {}
        self._current_node_name = None
        self._in_global_store_block = global_store

    def _flush_block(self) -> None:
        if self._current_block_id is None or not self._current_nodes:
            return

        if self._in_global_store_block:
            self._builder.add_global_store_nodes(self._current_nodes)
        else:
            self._builder.add_subtopology_nodes(self._current_block_id, self._current_nodes)

        logger.debug(
            f"Flushed {'global store' if self._in_global_store_block else 'subtopology'} "
            f"block {self._current_block_id} with {len(self._current_nodes)} nodes"
        )
        self._current_nodes = {}

    def _define_node(
        self,
        name: str,
        node_type: NodeType,
        topics: Iterable[str] = (),
        stores: Iterable[str] = (),
    ) -> None:
        if self._current_block_id is None:
            logger.debug(f"Ignoring {node_type.value} '{name}' declared outside any sub-topology")
            return

        draft = self._current_nodes.get(name)
        if draft is None:
            draft = NodeDraft(name=name)
            self._current_nodes[name] = draft
        draft.define(node_type, topics=topics, stores=stores)
        self._current_node_name = name

    def _current_draft(self) -> Optional[NodeDraft]:
        if self._current_node_name is None:
            return None
        return self._current_nodes.get(self._current_node_name)

    def _link_successors(self, names: Iterable[str]) -> None:
        current = self._current_draft()
        if current is None:
            logger.debug("Ignoring successor line without a current node")
            return

        names = set(names)
        current.add_successors(names)
        for successor_name in names:
            successor = self._current_nodes.get(successor_name)
            if successor is None:
                successor = NodeDraft.placeholder_for(successor_name)
                self._current_nodes[successor_name] = successor
            successor.add_predecessors({current.name})

    def _link_predecessors(self, names: Iterable[str]) -> None:
        current = self._current_draft()
        if current is None:
            logger.debug("Ignoring predecessor line without a current node")
            return
        current.add_predecessors(names)


def _read_lines(text: TopologyText) -> Iterator[str]:
    """Yield the lines of the input, turning I/O failures into ParseError."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Topology text is not valid UTF-8: {e}") from e

    if isinstance(text, str):
        yield from io.StringIO(text)
        return

    source = getattr(text, "name", None)
    try:
        for line in text:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            yield line
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Failed to read topology text: {e}", source=source) from e


def parse_topology(text: TopologyText) -> Topology:
    """Parse topology text with a fresh parser."""
    return TopologyTextParser().parse(text)


def parse_topology_file(path: Union[str, Path]) -> Topology:
    """Read a topology description from a UTF-8 file and parse it."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read topology file {path}: {e}", source=str(path)) from e
    return parse_topology(text)
