"""
Protocols describing the Type Introspector.

The graph builder never talks to a compiler directly. It only asks the
questions below, so any engine (a TypeScript compiler bridge, a JSON dump,
hand-built test fixtures) can feed it.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Protocol, runtime_checkable


class TypeFlag(str, Enum):
    """Classification flags reported for a type expression."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    UNDEFINED = "undefined"
    NULL = "null"
    ANY = "any"
    UNKNOWN = "unknown"
    NEVER = "never"
    ENUM = "enum"
    ENUM_LITERAL = "enum_literal"
    LITERAL = "literal"
    UNION = "union"


class DeclarationKind(str, Enum):
    """Kind of a top-level declaration."""

    INTERFACE = "interface"
    TYPE_ALIAS = "typeAlias"
    CLASS = "class"


class MemberKind(str, Enum):
    """Syntactic kind of the declaration behind a member."""

    PROPERTY = "property"
    PROPERTY_SIGNATURE = "property_signature"
    METHOD = "method"
    METHOD_SIGNATURE = "method_signature"
    GET_ACCESSOR = "get_accessor"
    SET_ACCESSOR = "set_accessor"


@runtime_checkable
class TypeShape(Protocol):
    """A resolved type expression."""

    @property
    def text(self) -> str:
        """Textual spelling of the type as printed by the introspector."""
        ...

    @property
    def flags(self) -> frozenset[TypeFlag]: ...

    @property
    def is_array(self) -> bool: ...

    @property
    def element_type(self) -> TypeShape | None:
        """Element type when the type is an array, None otherwise."""
        ...

    @property
    def call_signatures(self) -> Sequence[CallSignature]: ...

    @property
    def symbol(self) -> str | None:
        """Name of the type's symbol; None when the type has no symbol."""
        ...

    @property
    def type_arguments(self) -> Sequence[TypeShape]: ...

    @property
    def alias_symbol(self) -> str | None:
        """Name of the alias symbol when the type is an alias application."""
        ...

    @property
    def alias_type_arguments(self) -> Sequence[TypeShape]: ...


class Parameter(Protocol):
    """A call signature parameter, typed at the member's declaration site."""

    @property
    def name(self) -> str: ...

    @property
    def type(self) -> TypeShape: ...


class CallSignature(Protocol):
    @property
    def parameters(self) -> Sequence[Parameter]: ...

    @property
    def return_type(self) -> TypeShape: ...


class TypeNode(Protocol):
    """The type annotation as the author wrote it."""

    @property
    def text(self) -> str: ...

    @property
    def is_type_reference(self) -> bool: ...

    @property
    def type_arguments(self) -> Sequence[TypeNode]: ...


class Member(Protocol):
    """A property, method or accessor of a declaration."""

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> MemberKind: ...

    @property
    def type(self) -> TypeShape: ...

    @property
    def type_node(self) -> TypeNode | None:
        """Authored annotation; None for members without one (methods, accessors)."""
        ...


class TypeParameter(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def constraint(self) -> str | None: ...


class Declaration(Protocol):
    """A class, interface or type alias.

    ``extends`` holds every heritage name for interfaces and at most one for
    classes. ``aliased_type`` is only meaningful for type aliases, whose
    ``members`` are the properties of the aliased type.
    """

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> DeclarationKind: ...

    @property
    def type_parameters(self) -> Sequence[TypeParameter]: ...

    @property
    def extends(self) -> Sequence[str]: ...

    @property
    def implements(self) -> Sequence[str]: ...

    @property
    def members(self) -> Sequence[Member]: ...

    @property
    def aliased_type(self) -> TypeShape | None: ...


@runtime_checkable
class TypeIntrospector(Protocol):
    """Source of declarations, grouped by category."""

    @property
    def interfaces(self) -> Sequence[Declaration]: ...

    @property
    def type_aliases(self) -> Sequence[Declaration]: ...

    @property
    def classes(self) -> Sequence[Declaration]: ...
