"""
Model graph generator.

Chains the phases of a run:

1. Parser: read the declaration dump into in-memory declarations
2. Builder: register, classify and link models
3. Backend: render the graph as JSON or Mermaid
"""

from __future__ import annotations

import logging
from typing import Any

from . import __version__
from .analyzer import ModelGraph, ModelGraphBuilder
from .backends import BACKENDS
from .cli_utils import reconstruct_command_line
from .config import ModelGraphConfig, OutputFormat
from .introspection import DeclarationParser

logger = logging.getLogger(__name__)


class ModelGraphGenerator:
    """Builds and renders the model graph of a declaration dump."""

    def __init__(
        self,
        name: str,
        declarations: dict[str, Any],
        config: ModelGraphConfig | None = None,
        output_format: OutputFormat | str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            name: Name of the program being described (used in the generation comment)
            declarations: Decoded declaration dump
            config: Build and output configuration
            output_format: Overrides ``config.output.format`` when given
        """
        self.name = name
        self.declarations = declarations
        self.config = config or ModelGraphConfig()
        self.output_format = OutputFormat(output_format) if output_format is not None else self.config.output.format

    def build(self) -> ModelGraph:
        """Parse the dump and build the graph."""
        declaration_set = DeclarationParser().parse(self.declarations)
        return ModelGraphBuilder(self.config).build(declaration_set)

    def generate(self) -> str:
        """Build the graph and render it with the configured backend."""
        graph = self.build()
        backend_class = BACKENDS[self.output_format]
        backend = backend_class(self.config, self._generate_command_comment())
        logger.debug("Rendering %d models of %s as %s", len(graph), self.name, self.output_format.value)
        return backend.generate(graph)

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the rendered output"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from .ts_model_graph import ts_model_graph as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "ts_model_graph"

        return f"Generated by ts_model_graph v{__version__} from {self.name} : {command_line}"
