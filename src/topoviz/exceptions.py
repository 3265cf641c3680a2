"""
topoviz Exception Hierarchy

This module defines the exception types raised by the topology parser, the
graph model and the output formatters. Every error carries a stable error
code, optional context, a user-facing message and a suggested fix so the
CLI can report failures without inspecting exception internals.

Categories:
1. Input errors (ParseError) - the topology text could not be read
2. Output errors (UnsupportedFormatError) - the requested format is unknown
3. Model errors (TopologyError) - an internal invariant was violated
"""

import time
from typing import Any, Dict, List, Optional


class TopovizError(Exception):
    """
    Base exception class for all topoviz errors.

    Attributes:
        error_code: Unique error code for programmatic handling
        timestamp: When the error occurred
        context: Additional context information
        user_message: User-friendly error message
        developer_message: Detailed technical error message
        suggestion: Suggested fix or next steps (if applicable)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "TOPOVIZ_ERROR",
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.timestamp = time.time()
        self.context = context or {}
        self.user_message = user_message or message
        self.developer_message = message
        self.suggestion = suggestion

    @property
    def message(self) -> str:
        return self.developer_message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.developer_message,
            "user_message": self.user_message,
            "timestamp": self.timestamp,
            "context": self.context,
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.developer_message}"


# =============================================================================
# INPUT ERRORS
# =============================================================================

class ParseError(TopovizError):
    """
    Raised when the topology text cannot be read.

    Only I/O-level failures end up here (unreadable file, failing stream,
    undecodable bytes). Lines that do not match the grammar are skipped by
    the parser and never raise.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        **kwargs
    ):
        self.source = source

        context = kwargs.pop("context", {})
        if source:
            context["source"] = source

        super().__init__(
            message,
            error_code=kwargs.pop("error_code", "PARSE_ERROR"),
            context=context,
            user_message=kwargs.pop("user_message", "The topology description could not be read."),
            suggestion=kwargs.pop(
                "suggestion",
                "Check that the input exists, is readable and is UTF-8 encoded.",
            ),
            **kwargs
        )


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class UnsupportedFormatError(TopovizError):
    """
    Raised when an output format name is not registered.

    The message names both the requested format and the formats that are
    available, so it can be shown to the user as-is.
    """

    def __init__(
        self,
        requested_format: str,
        available_formats: List[str],
        **kwargs
    ):
        self.requested_format = requested_format
        self.available_formats = list(available_formats)

        message = (
            f"Unsupported format: '{requested_format}'. "
            f"Available formats: {', '.join(self.available_formats)}"
        )
        context = kwargs.pop("context", {})
        context["requested_format"] = requested_format
        context["available_formats"] = self.available_formats

        super().__init__(
            message,
            error_code="UNSUPPORTED_FORMAT",
            context=context,
            user_message=message,
            suggestion="Run with --list-formats to see the supported output formats.",
            **kwargs
        )


# =============================================================================
# MODEL ERRORS
# =============================================================================

class TopologyError(TopovizError):
    """
    Raised when the topology model is assembled inconsistently.

    Examples:
    - A node of another kind registered as a global store
    - A subtopology registered with a negative id

    These are programming errors; the text parser never produces them.
    """

    def __init__(
        self,
        message: str,
        topology_issue: Optional[str] = None,
        affected_nodes: Optional[List[str]] = None,
        **kwargs
    ):
        self.topology_issue = topology_issue
        self.affected_nodes = affected_nodes

        context = kwargs.pop("context", {})
        if topology_issue:
            context["topology_issue"] = topology_issue
        if affected_nodes:
            context["affected_nodes"] = affected_nodes

        super().__init__(
            message,
            error_code="TOPOLOGY_ERROR",
            context=context,
            user_message="The topology model is inconsistent.",
            suggestion="This indicates a bug in the caller assembling the topology.",
            **kwargs
        )
