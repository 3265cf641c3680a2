"""
Registry for topology output formats.

This module provides a centralized registry of formatter classes, allowing
runtime selection of the output format by name. Names are matched
case-insensitively.
"""

from typing import Dict, List, Type

from ..exceptions import UnsupportedFormatError
from .base import BaseTopologyFormatter


# Global registry of formatter classes
_FORMAT_REGISTRY: Dict[str, Type[BaseTopologyFormatter]] = {}

# Default format
DEFAULT_FORMAT = "mermaid"


def register_format(name: str, formatter_class: Type[BaseTopologyFormatter]) -> None:
    """
    Register a topology formatter.

    Args:
        name: Format name (e.g., 'mermaid', 'dot')
        formatter_class: Formatter class (not instance)

    Example:
        register_format("mermaid", MermaidFormatter)
    """
    _FORMAT_REGISTRY[name.lower()] = formatter_class


def get_format(name: str = DEFAULT_FORMAT) -> BaseTopologyFormatter:
    """
    Get a formatter instance.

    Args:
        name: Format name

    Returns:
        Formatter instance

    Raises:
        UnsupportedFormatError: If the format is not registered
    """
    format_name = name.lower()
    if format_name not in _FORMAT_REGISTRY:
        raise UnsupportedFormatError(name, list_formats())
    return _FORMAT_REGISTRY[format_name]()


def list_formats() -> List[str]:
    """List all registered format names, sorted."""
    return sorted(_FORMAT_REGISTRY)


def is_format_registered(name: str) -> bool:
    return name.lower() in _FORMAT_REGISTRY


# Register built-in formats
from .mermaid import MermaidFormatter  # noqa: E402
from .dot import DotFormatter  # noqa: E402

register_format("mermaid", MermaidFormatter)
register_format("dot", DotFormatter)
