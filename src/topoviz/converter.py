"""
Main API for converting Kafka Streams topology text to diagrams.
"""

from typing import Dict, List
import logging

from .exceptions import UnsupportedFormatError
from .formats import BaseTopologyFormatter, get_format, is_format_registered, list_formats
from .topology import Topology, TopologyTextParser
from .topology.parser import TopologyText

logger = logging.getLogger(__name__)


class TopologyConverter:
    """
    Parses topology text and renders it with a named formatter.

    Formats come from the global registry; ``register_formatter`` adds
    formatters visible to this converter only.
    """

    def __init__(self):
        self._parser = TopologyTextParser()
        self._extra_formatters: Dict[str, BaseTopologyFormatter] = {}

    def register_formatter(self, formatter: BaseTopologyFormatter) -> "TopologyConverter":
        self._extra_formatters[formatter.get_format_name().lower()] = formatter
        return self

    def available_formats(self) -> List[str]:
        return sorted(set(list_formats()) | set(self._extra_formatters))

    def parse_text(self, topology_text: TopologyText) -> Topology:
        """Parse topology text into the Topology model."""
        return self._parser.parse(topology_text)

    def get_formatter(self, output_format: str) -> BaseTopologyFormatter:
        """
        Resolve a format name to a formatter.

        Raises:
            UnsupportedFormatError: If neither this converter nor the registry
                knows the format
        """
        format_name = output_format.lower()
        if format_name in self._extra_formatters:
            return self._extra_formatters[format_name]
        if is_format_registered(format_name):
            return get_format(format_name)
        raise UnsupportedFormatError(output_format, self.available_formats())

    def format_topology(self, topology: Topology, output_format: str) -> str:
        formatter = self.get_formatter(output_format)
        logger.debug(f"Rendering {topology} with {formatter!r}")
        return formatter.format(topology)

    def convert_from_text(self, topology_text: TopologyText, output_format: str) -> str:
        """Parse topology text and render it in the given format."""
        topology = self.parse_text(topology_text)
        return self.format_topology(topology, output_format)

    def to_mermaid_from_text(self, topology_text: TopologyText) -> str:
        return self.convert_from_text(topology_text, "mermaid")

    def to_dot_from_text(self, topology_text: TopologyText) -> str:
        return self.convert_from_text(topology_text, "dot")
