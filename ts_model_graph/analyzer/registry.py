"""
Declaration registry.

Pass 1 of the build: create one model stub per declaration, record its
generic parameters and resolve its heritage clauses against the models
registered so far.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..config import ModelGraphConfig
from ..errors import DuplicateDeclarationError, RegistrySealedError
from ..introspection.protocols import Declaration, DeclarationKind, TypeIntrospector
from .field_kinds import trim_import
from .model_nodes import ClassModel, InterfaceModel, Model, ModelRef, TypeAliasModel, TypeArgument

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Name -> model map shared by the three passes.

    Keys are written once during registration. After ``seal()`` the
    registry is read-only, which lets the classifier read it from several
    threads.
    """

    def __init__(self) -> None:
        self._models: dict[str, Model] = {}
        self._sealed = False

    def register(self, model: Model) -> None:
        """
        Add a model under its id.

        Raises:
            RegistrySealedError: If the registry is sealed
            DuplicateDeclarationError: If the id is already registered
        """
        if self._sealed:
            raise RegistrySealedError(model.id)
        if model.id in self._models:
            raise DuplicateDeclarationError(model.id)
        self._models[model.id] = model

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, name: str) -> Model | None:
        return self._models.get(name)

    def resolve(self, name: str) -> ModelRef:
        """The model registered under ``name``, or ``name`` itself when there is none."""
        model = self._models.get(name)
        return model if model is not None else name

    @property
    def models(self) -> list[Model]:
        """Registered models in registration order."""
        return list(self._models.values())

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[Model]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)


@dataclass
class RegisteredDeclaration:
    """A declaration paired with the model stub created for it."""

    declaration: Declaration
    model: Model
    # Later parts of a merged interface
    merged: list[Declaration] = field(default_factory=list)

    @property
    def parts(self) -> list[Declaration]:
        return [self.declaration, *self.merged]


class DeclarationRegistrar:
    """Registers declarations as model stubs."""

    def __init__(self, config: ModelGraphConfig):
        """
        Initialize the registrar.

        Args:
            config: Build configuration
        """
        self.config = config

    def register_all(self, introspector: TypeIntrospector, registry: ModelRegistry) -> list[RegisteredDeclaration]:
        """
        Register every declaration and seal the registry.

        Interfaces come first, then type aliases, then classes. By default a
        heritage clause only sees models registered before its declaration;
        with ``resolve_inheritance_after_registration`` every stub exists
        before the first clause is resolved.

        A name declared more than once keeps a single model. Interface
        declarations with the same name are merged into the first one; any
        other repeated name keeps the first declaration and logs a warning.

        Args:
            introspector: Source of declarations
            registry: The registry to fill

        Returns:
            Registered declarations in registration order
        """
        ignored = set(self.config.ignore_declarations)
        deferred = self.config.resolve_inheritance_after_registration

        items: dict[str, RegisteredDeclaration] = {}
        for declaration in [*introspector.interfaces, *introspector.type_aliases, *introspector.classes]:
            if declaration.name in ignored:
                logger.debug("Ignoring declaration %s", declaration.name)
                continue

            existing = items.get(declaration.name)
            if existing is not None:
                self._add_repeated(existing, declaration, registry, deferred)
                continue

            model = self._create_model(declaration)
            if not deferred:
                self._resolve_heritage(declaration, model, registry)
            registry.register(model)
            items[declaration.name] = RegisteredDeclaration(declaration=declaration, model=model)

        if deferred:
            for item in items.values():
                for part in item.parts:
                    self._resolve_heritage(part, item.model, registry)

        registry.seal()
        logger.debug("Registered %d models", len(registry))
        return list(items.values())

    def _add_repeated(
        self,
        item: RegisteredDeclaration,
        declaration: Declaration,
        registry: ModelRegistry,
        deferred: bool,
    ) -> None:
        """Fold a repeated declaration name into the model registered first."""
        first = item.declaration
        if first.kind == DeclarationKind.INTERFACE and declaration.kind == DeclarationKind.INTERFACE:
            item.merged.append(declaration)
            if not deferred:
                self._resolve_heritage(declaration, item.model, registry)
            logger.debug("Merged interface declaration %s", declaration.name)
            return

        logger.warning(
            "Duplicate declaration %s (%s) ignored, keeping the %s declaration",
            declaration.name,
            declaration.kind.value,
            first.kind.value,
        )

    def _create_model(self, declaration: Declaration) -> Model:
        """Create the model stub for a declaration."""
        name = declaration.name
        if declaration.kind == DeclarationKind.INTERFACE:
            model: Model = InterfaceModel(id=name, name=name)
        elif declaration.kind == DeclarationKind.TYPE_ALIAS:
            model = TypeAliasModel(id=name, name=name)
        elif declaration.kind == DeclarationKind.CLASS:
            model = ClassModel(id=name, name=name)
        else:
            raise TypeError(f"Unknown declaration kind: {declaration.kind}")

        for parameter in declaration.type_parameters:
            constraint = trim_import(parameter.constraint) if parameter.constraint else None
            model.arguments.append(TypeArgument(name=parameter.name, extends=constraint))

        return model

    def _resolve_heritage(self, declaration: Declaration, model: Model, registry: ModelRegistry) -> None:
        """Resolve extends/implements clauses, keeping unresolved names as strings."""
        if isinstance(model, InterfaceModel):
            for expression in declaration.extends:
                resolved = self._resolve(expression, model, registry)
                if resolved not in model.extends:
                    model.extends.append(resolved)
        elif isinstance(model, ClassModel):
            if declaration.extends:
                model.extends = self._resolve(declaration.extends[0], model, registry)
            for expression in declaration.implements:
                model.implements.append(self._resolve(expression, model, registry))

    def _resolve(self, expression: str, model: Model, registry: ModelRegistry) -> ModelRef:
        name = trim_import(expression)
        resolved = registry.resolve(name)
        if isinstance(resolved, str):
            logger.debug("%s: heritage clause %s is not registered yet", model.id, name)
        return resolved
