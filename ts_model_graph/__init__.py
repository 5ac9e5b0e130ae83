"""TypeScript Model Graph

Builds a cross-referenced graph of structural models from introspected
TypeScript declarations (classes, interfaces, type aliases), and renders
it as JSON or as a Mermaid class diagram.
"""

__version__ = "1.0.0"

from .analyzer import ModelGraph, ModelGraphBuilder, build_models
from .config import ModelGraphConfig, OutputConfig, OutputFormat
from .errors import (
    DeclarationParseError,
    DuplicateDeclarationError,
    ModelGraphError,
    RegistryError,
    RegistryNotSealedError,
    RegistrySealedError,
)
from .generator import ModelGraphGenerator
from .introspection import DeclarationParser, DeclarationSet

__all__ = [
    "DeclarationParseError",
    "DeclarationParser",
    "DeclarationSet",
    "DuplicateDeclarationError",
    "ModelGraph",
    "ModelGraphBuilder",
    "ModelGraphConfig",
    "ModelGraphError",
    "ModelGraphGenerator",
    "OutputConfig",
    "OutputFormat",
    "RegistryError",
    "RegistryNotSealedError",
    "RegistrySealedError",
    "build_models",
]
