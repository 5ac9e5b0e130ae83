"""
Base class for graph output backends.

Defines the interface that all backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.model_nodes import ModelGraph
from ..config import ModelGraphConfig


class GraphBackend(ABC):
    """Abstract base class for output backends."""

    # Template directory name (empty = backend does not use templates)
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: ModelGraphConfig, generation_comment: str = ""):
        """
        Initialize the backend.

        Args:
            config: Build and output configuration
            generation_comment: Text of the generation comment, if enabled
        """
        self.config = config
        self.generation_comment = generation_comment if config.add_generation_comment else ""
        if self.TEMPLATE_LANG:
            self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )

    @abstractmethod
    def generate(self, graph: ModelGraph) -> str:
        """
        Render the graph.

        Args:
            graph: The built model graph

        Returns:
            Rendered output as a string
        """
