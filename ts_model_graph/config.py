"""
Configuration for the model graph builder and its outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputFormat(str, Enum):
    """Output format of the rendered graph."""

    JSON = "json"
    MERMAID = "mermaid"


@dataclass
class OutputConfig:
    """Configuration for output rendering.

    Attributes:
        format: Backend used to render the graph
        indent: JSON indentation (ignored by the Mermaid backend)
    """

    format: OutputFormat = OutputFormat.JSON
    indent: int = 2


@dataclass
class ModelGraphConfig:
    """Configuration options for building the model graph."""

    # Declarations never registered; references to them stay raw names
    ignore_declarations: list[str] = field(default_factory=list)

    # Register all categories before resolving any extends/implements clause
    resolve_inheritance_after_registration: bool = False

    # Threads used to classify declarations (1 = sequential)
    workers: int = 1

    # Add generation comment at top of rendered output
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> ModelGraphConfig:
        """Create a config from a dictionary."""
        config = ModelGraphConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                output_format = v.get("format", OutputFormat.JSON)
                if isinstance(output_format, str):
                    output_format = OutputFormat(output_format)
                config.output = OutputConfig(format=output_format, indent=v.get("indent", 2))
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "ignore_declarations": self.ignore_declarations,
            "resolve_inheritance_after_registration": self.resolve_inheritance_after_registration,
            "workers": self.workers,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "format": self.output.format.value,
                "indent": self.output.indent,
            },
        }
