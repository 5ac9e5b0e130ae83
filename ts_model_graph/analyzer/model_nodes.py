"""
Model graph node definitions.

A Model is the structural view of one declaration: its generic parameters,
its members classified as schema fields, and its place in the dependency
graph. Model references inside fields are either the Model itself (when the
name resolved) or the raw type name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class ModelKind(str, Enum):
    """Kind of declaration a model was built from."""

    CLASS = "class"
    INTERFACE = "interface"
    TYPE_ALIAS = "typeAlias"


class FieldKind(str, Enum):
    """Shape of a schema field."""

    DEFAULT = "default"  # atomic or opaque type
    ARRAY = "array"  # T[]
    REFERENCE = "reference"  # generic instantiation, Box<T>
    FUNCTION = "function"  # single call signature


# Name of the single field of a type alias that is a type expression, not a record
ALIAS_SENTINEL = "==>"


@dataclass
class TypeArgument:
    """A generic parameter of a declaration."""

    name: str = ""
    extends: str | None = None  # constraint text, e.g. "object"


@dataclass
class DefaultSchemaField:
    kind: ClassVar[FieldKind] = FieldKind.DEFAULT

    name: str = ""
    type: ModelRef = ""


@dataclass
class ArraySchemaField:
    kind: ClassVar[FieldKind] = FieldKind.ARRAY

    name: str = ""
    element_type: ModelRef = ""


@dataclass
class ReferenceSchemaField:
    kind: ClassVar[FieldKind] = FieldKind.REFERENCE

    name: str = ""
    reference_name: str = ""
    arguments: list[ModelRef] = field(default_factory=list)


@dataclass
class FunctionArgument:
    name: str = ""
    type: ModelRef = ""


@dataclass
class FunctionSchemaField:
    kind: ClassVar[FieldKind] = FieldKind.FUNCTION

    name: str = ""
    arguments: list[FunctionArgument] = field(default_factory=list)

    # Wrapped in a one-element list when the function returns an array
    return_type: ModelRef | list[ModelRef] = ""


@dataclass(eq=False)
class ModelBase:
    """Fields shared by every model.

    Models compare by identity and keep graph fields out of ``repr`` since
    the graph may contain cycles.
    """

    kind: ClassVar[ModelKind]

    id: str = ""
    name: str = ""
    arguments: list[TypeArgument] = field(default_factory=list)
    schema: list[SchemaField] = field(default_factory=list, repr=False)

    # Populated by the dependency linker
    dependencies: list[Model] = field(default_factory=list, repr=False)
    dependants: list[Model] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class InterfaceModel(ModelBase):
    kind: ClassVar[ModelKind] = ModelKind.INTERFACE

    extends: list[ModelRef] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class TypeAliasModel(ModelBase):
    kind: ClassVar[ModelKind] = ModelKind.TYPE_ALIAS


@dataclass(eq=False)
class ClassModel(ModelBase):
    kind: ClassVar[ModelKind] = ModelKind.CLASS

    extends: ModelRef | None = field(default=None, repr=False)
    implements: list[ModelRef] = field(default_factory=list, repr=False)


Model = InterfaceModel | TypeAliasModel | ClassModel
ModelRef = Model | str
SchemaField = DefaultSchemaField | ArraySchemaField | ReferenceSchemaField | FunctionSchemaField


def ref_name(value: ModelRef) -> str:
    """Name of a model reference, whether resolved or raw."""
    if isinstance(value, str):
        return value
    return value.id


def field_refs(schema_field: SchemaField) -> list[ModelRef]:
    """All model references held by a schema field, in field order."""
    if isinstance(schema_field, DefaultSchemaField):
        return [schema_field.type]
    if isinstance(schema_field, ArraySchemaField):
        return [schema_field.element_type]
    if isinstance(schema_field, ReferenceSchemaField):
        return list(schema_field.arguments)
    if isinstance(schema_field, FunctionSchemaField):
        refs = [argument.type for argument in schema_field.arguments]
        if isinstance(schema_field.return_type, list):
            refs.extend(schema_field.return_type)
        else:
            refs.append(schema_field.return_type)
        return refs
    raise TypeError(f"Unknown schema field: {type(schema_field).__name__}")


def heritage_refs(model: Model) -> tuple[list[ModelRef], list[ModelRef]]:
    """The (extends, implements) references of a model."""
    if isinstance(model, InterfaceModel):
        return list(model.extends), []
    if isinstance(model, ClassModel):
        extends = [model.extends] if model.extends is not None else []
        return extends, list(model.implements)
    if isinstance(model, TypeAliasModel):
        return [], []
    raise TypeError(f"Unknown model: {type(model).__name__}")


@dataclass(frozen=True)
class ModelGraph:
    """The result of a build.

    Models are kept in registration order and indexed by id; edges are
    ``(declarer_id, dependency_id)`` pairs in link order.
    """

    models: tuple[Model, ...] = ()
    edges: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {model.id: model for model in self.models})

    def __getitem__(self, name: str) -> Model:
        return self._by_id[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_id

    def __iter__(self) -> Iterator[Model]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    def get(self, name: str) -> Model | None:
        return self._by_id.get(name)

    @property
    def names(self) -> list[str]:
        return [model.id for model in self.models]
