"""
Backends module.

Renders a built model graph to JSON or to a Mermaid class diagram.
"""

from __future__ import annotations

from ..config import OutputFormat
from .base import GraphBackend
from .json_backend import JsonBackend
from .mermaid_backend import MermaidBackend

BACKENDS: dict[OutputFormat, type[GraphBackend]] = {
    OutputFormat.JSON: JsonBackend,
    OutputFormat.MERMAID: MermaidBackend,
}

__all__ = [
    "BACKENDS",
    "GraphBackend",
    "JsonBackend",
    "MermaidBackend",
]
