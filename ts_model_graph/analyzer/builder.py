"""
Model graph builder.

Runs the three passes with their ordering barriers:

1. Registry: register every declaration, then seal
2. Classifier: fill schemas and collect dependencies (optionally threaded)
3. Linker: store dependency edges on both ends
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from ..config import ModelGraphConfig
from ..introspection.protocols import TypeIntrospector
from .classifier import DependencySet, SchemaFieldClassifier
from .linker import DependencyLinker
from .model_nodes import Model, ModelGraph
from .registry import DeclarationRegistrar, ModelRegistry, RegisteredDeclaration

logger = logging.getLogger(__name__)


class ModelGraphBuilder:
    """Builds a ModelGraph from introspected declarations."""

    def __init__(self, config: ModelGraphConfig | None = None):
        """
        Initialize the builder.

        Args:
            config: Build configuration (defaults to ModelGraphConfig())
        """
        self.config = config or ModelGraphConfig()

    def build(self, introspector: TypeIntrospector) -> ModelGraph:
        """
        Build the model graph.

        Args:
            introspector: Source of declarations

        Returns:
            ModelGraph with every model, its schema and its edges
        """
        registry = ModelRegistry()

        # First pass: model stubs and heritage clauses
        items = DeclarationRegistrar(self.config).register_all(introspector, registry)

        # Second pass: schemas and dependency sets
        dependency_map = self._classify(items, registry)

        # Third pass: edges
        edges = DependencyLinker(registry).link(dependency_map)
        logger.debug("Linked %d models with %d edges", len(registry), len(edges))

        return ModelGraph(models=tuple(registry.models), edges=tuple(edges))

    def _classify(self, items: list[RegisteredDeclaration], registry: ModelRegistry) -> dict[str, DependencySet]:
        """Classify every declaration, keeping registration order in the result."""
        classifier = SchemaFieldClassifier(registry)

        if self.config.workers > 1 and len(items) > 1:
            logger.debug("Classifying %d declarations on %d workers", len(items), self.config.workers)
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                results = list(executor.map(classifier.classify, items))
        else:
            results = [classifier.classify(item) for item in items]

        return {item.model.id: dependencies for item, dependencies in zip(items, results)}


def build_models(introspector: TypeIntrospector, config: ModelGraphConfig | None = None) -> list[Model]:
    """Build the graph and return its models in registration order."""
    return list(ModelGraphBuilder(config).build(introspector).models)
