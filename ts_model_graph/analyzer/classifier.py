"""
Schema field classifier.

Pass 2 of the build: turn every member of a declaration into one schema
field and collect the models the declaration depends on.

Shapes are tried in priority order, the first match wins:

1. function  - exactly one call signature
2. array     - an array type with a known element type
3. reference - a named generic symbol with type arguments
4. default   - everything else
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from ..errors import RegistryNotSealedError
from ..introspection.protocols import Member
from .field_kinds import (
    array_element,
    authored_argument_name,
    declared_type_name,
    generic_parts,
    is_degenerate_alias,
    single_call_signature,
    syntactic_type_arguments,
    trim_import,
)
from .model_nodes import (
    ALIAS_SENTINEL,
    ArraySchemaField,
    ClassModel,
    DefaultSchemaField,
    FunctionArgument,
    FunctionSchemaField,
    InterfaceModel,
    Model,
    ModelRef,
    ReferenceSchemaField,
    TypeAliasModel,
)
from .registry import ModelRegistry, RegisteredDeclaration

logger = logging.getLogger(__name__)


class DependencySet:
    """Insertion-ordered set of models, keyed by model id."""

    def __init__(self) -> None:
        self._models: dict[str, Model] = {}

    def add(self, value: ModelRef | None) -> None:
        """Add a resolved reference; raw names and None are ignored."""
        if value is None or isinstance(value, str):
            return
        self._models.setdefault(value.id, value)

    def __contains__(self, model: object) -> bool:
        return any(existing is model for existing in self._models.values())

    def __iter__(self) -> Iterator[Model]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)


class SchemaFieldClassifier:
    """Classifies the members of one declaration at a time."""

    def __init__(self, registry: ModelRegistry):
        """
        Initialize the classifier.

        Args:
            registry: The sealed model registry

        Raises:
            RegistryNotSealedError: If registration is still in progress
        """
        if not registry.sealed:
            raise RegistryNotSealedError("Schema classification needs a sealed registry")
        self.registry = registry

    def classify(self, item: RegisteredDeclaration) -> DependencySet:
        """
        Fill the schema of a model and collect its dependencies.

        Args:
            item: A registered declaration and its model

        Returns:
            The models this declaration depends on
        """
        declaration = item.declaration
        model = item.model
        dependencies = DependencySet()

        if isinstance(model, TypeAliasModel):
            if is_degenerate_alias(declaration.aliased_type):
                model.schema = [DefaultSchemaField(name=ALIAS_SENTINEL, type=declaration.aliased_type.text)]
                logger.debug("%s is a type expression: %s", model.id, declaration.aliased_type.text)
                return dependencies
        elif isinstance(model, InterfaceModel):
            for part in item.parts:
                self._add_heritage(part.extends, dependencies)
        elif isinstance(model, ClassModel):
            self._add_heritage(declaration.extends, dependencies)
            self._add_heritage(declaration.implements, dependencies)
        else:
            raise TypeError(f"Unknown model: {type(model).__name__}")

        for part in item.parts:
            for member in part.members:
                self._classify_member(member, model, dependencies)

        return dependencies

    def _add_heritage(self, expressions: Sequence[str], dependencies: DependencySet) -> None:
        """Re-resolve heritage clauses against the complete registry."""
        for expression in expressions:
            dependencies.add(self.registry.get(trim_import(expression)))

    def _classify_member(self, member: Member, model: Model, dependencies: DependencySet) -> None:
        if self._add_function_field(member, model, dependencies):
            return
        if self._add_array_field(member, model, dependencies):
            return
        if self._add_reference_field(member, model, dependencies):
            return
        self._add_default_field(member, model, dependencies)

    def _resolve(self, name: str, dependencies: DependencySet) -> ModelRef:
        """Look a name up, registering a hit as a dependency."""
        resolved = self.registry.resolve(name)
        dependencies.add(resolved)
        return resolved

    def _add_function_field(self, member: Member, model: Model, dependencies: DependencySet) -> bool:
        """Add a function field when the member has exactly one call signature."""
        signature = single_call_signature(member.type)
        if signature is None:
            return False

        arguments = [
            FunctionArgument(name=parameter.name, type=self._resolve(trim_import(parameter.type.text), dependencies))
            for parameter in signature.parameters
        ]

        return_type = signature.return_type
        if return_type.is_array:
            element = return_type.element_type
            element_name = trim_import(element.text) if element is not None else ""
            resolved_return: ModelRef | list[ModelRef] = [self._resolve(element_name, dependencies)]
        else:
            resolved_return = self._resolve(trim_import(return_type.text), dependencies)

        model.schema.append(FunctionSchemaField(name=member.name, arguments=arguments, return_type=resolved_return))
        return True

    def _add_array_field(self, member: Member, model: Model, dependencies: DependencySet) -> bool:
        """Add an array field when the member is an array with a known element type."""
        element = array_element(member.type)
        if element is None:
            return False

        element_type = self._resolve(trim_import(element.text), dependencies)
        model.schema.append(ArraySchemaField(name=member.name, element_type=element_type))
        return True

    def _add_reference_field(self, member: Member, model: Model, dependencies: DependencySet) -> bool:
        """Add a reference field when the member instantiates a named generic."""
        symbol, type_arguments = generic_parts(member.type)
        if not symbol or not type_arguments:
            return False

        dependencies.add(self.registry.get(symbol))

        authored = syntactic_type_arguments(member)
        arguments = [self._resolve(authored_argument_name(argument, i, authored), dependencies) for i, argument in enumerate(type_arguments)]

        model.schema.append(ReferenceSchemaField(name=member.name, reference_name=symbol, arguments=arguments))
        return True

    def _add_default_field(self, member: Member, model: Model, dependencies: DependencySet) -> None:
        """Add a default field from the member's declared type name."""
        type_value = self._resolve(declared_type_name(member), dependencies)
        model.schema.append(DefaultSchemaField(name=member.name, type=type_value))
