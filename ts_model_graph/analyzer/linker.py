"""
Dependency linker.

Pass 3 of the build: materialize every collected dependency as an edge
stored on both of its ends.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .classifier import DependencySet
from .registry import ModelRegistry

logger = logging.getLogger(__name__)


class DependencyLinker:
    """Links models to their dependencies and dependants."""

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def link(self, dependency_map: Mapping[str, DependencySet]) -> list[tuple[str, str]]:
        """
        Append each dependency to its declarer and the declarer to the dependency.

        The sets are already duplicate free, so nothing is deduplicated here.

        Args:
            dependency_map: Model id -> models it depends on

        Returns:
            The created edges as (declarer id, dependency id) pairs
        """
        edges: list[tuple[str, str]] = []
        for name, dependencies in dependency_map.items():
            model = self.registry.get(name)
            if model is None:
                logger.debug("Skipping dependencies of unregistered declaration %s", name)
                continue

            for dependency in dependencies:
                model.dependencies.append(dependency)
                dependency.dependants.append(model)
                edges.append((model.id, dependency.id))

        logger.debug("Created %d dependency edges", len(edges))
        return edges
