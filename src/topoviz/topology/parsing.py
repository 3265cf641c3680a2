"""
Line grammar of the Kafka Streams topology description.

The patterns are matched against one trimmed line at a time and are
compiled once at import. Each ``match_*`` helper returns the parsed
fields, or None when the line is not of that shape (malformed content
inside a known keyword counts as no match).
"""

import re
from typing import FrozenSet, Optional, Tuple

# Literal Kafka prints when a node has no successors/predecessors
NO_NODE = "none"

# Keyword that opens a node declaration, whatever its field list
NODE_KEYWORD = re.compile(r'^(?:Source|Processor|Sink):')

LINE_PATTERNS = {
    'subtopology': re.compile(r'^Sub-topology:\s*(\d+)\b(?!\s+for\s+global\s+store)'),
    'global_store': re.compile(r'^Sub-topology:\s*(.+?)\s+for\s+global\s+store\b'),
    'source': re.compile(r'^Source:\s+(\S+)\s+\(topics:\s*\[([^\]]*)\]\)'),
    'processor': re.compile(r'^Processor:\s+(\S+)\s+\(stores:\s*\[([^\]]*)\]\)'),
    'sink': re.compile(r'^Sink:\s+(\S+)\s+\(topic:\s+([^\s()]+)\)'),
    'successors': re.compile(r'^-->\s*(.+)$'),
    'predecessors': re.compile(r'^<--\s*(.+)$'),
}


def parse_name_list(names: Optional[str]) -> FrozenSet[str]:
    """
    Split a comma-separated list into a set of trimmed, non-empty names.

    Duplicates merge silently and order is not kept.
    """
    if not names:
        return frozenset()
    return frozenset(token.strip() for token in names.split(',') if token.strip())


def parse_node_list(names: Optional[str]) -> FrozenSet[str]:
    """Like parse_name_list, minus Kafka's ``none`` marker."""
    return parse_name_list(names) - {NO_NODE}


def match_subtopology_header(line: str) -> Optional[int]:
    match = LINE_PATTERNS['subtopology'].match(line)
    return int(match.group(1)) if match else None


def match_global_store_header(line: str) -> Optional[str]:
    match = LINE_PATTERNS['global_store'].match(line)
    return match.group(1) if match else None


def match_source(line: str) -> Optional[Tuple[str, FrozenSet[str]]]:
    match = LINE_PATTERNS['source'].match(line)
    if not match:
        return None
    return match.group(1), parse_name_list(match.group(2))


def match_processor(line: str) -> Optional[Tuple[str, FrozenSet[str]]]:
    match = LINE_PATTERNS['processor'].match(line)
    if not match:
        return None
    return match.group(1), parse_name_list(match.group(2))


def match_sink(line: str) -> Optional[Tuple[str, FrozenSet[str]]]:
    match = LINE_PATTERNS['sink'].match(line)
    if not match:
        return None
    return match.group(1), frozenset({match.group(2)})


def match_successors(line: str) -> Optional[FrozenSet[str]]:
    match = LINE_PATTERNS['successors'].match(line)
    return parse_node_list(match.group(1)) if match else None


def match_predecessors(line: str) -> Optional[FrozenSet[str]]:
    match = LINE_PATTERNS['predecessors'].match(line)
    return parse_node_list(match.group(1)) if match else None


def is_node_declaration(line: str) -> bool:
    """True for any Source/Processor/Sink line, including ones the matchers reject."""
    return NODE_KEYWORD.match(line) is not None
