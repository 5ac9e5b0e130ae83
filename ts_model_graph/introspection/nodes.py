"""
In-memory declaration nodes.

Plain dataclass implementations of the introspection protocols. They are
produced by the dump parser and are handy for building fixtures by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .protocols import DeclarationKind, MemberKind, TypeFlag


@dataclass
class TypeShapeNode:
    """A resolved type expression."""

    text: str = ""
    flags: frozenset[TypeFlag] = frozenset()

    # Array shape
    is_array: bool = False
    element_type: TypeShapeNode | None = None

    # Invocable shape
    call_signatures: list[SignatureNode] = field(default_factory=list)

    # Generic shape
    symbol: str | None = None
    type_arguments: list[TypeShapeNode] = field(default_factory=list)
    alias_symbol: str | None = None
    alias_type_arguments: list[TypeShapeNode] = field(default_factory=list)


@dataclass
class ParameterNode:
    name: str = ""
    type: TypeShapeNode = field(default_factory=TypeShapeNode)


@dataclass
class SignatureNode:
    parameters: list[ParameterNode] = field(default_factory=list)
    return_type: TypeShapeNode = field(default_factory=TypeShapeNode)


@dataclass
class TypeNodeInfo:
    """Authored type annotation."""

    text: str = ""
    is_type_reference: bool = False
    type_arguments: list[TypeNodeInfo] = field(default_factory=list)


@dataclass
class MemberNode:
    name: str = ""
    kind: MemberKind = MemberKind.PROPERTY_SIGNATURE
    type: TypeShapeNode = field(default_factory=TypeShapeNode)
    type_node: TypeNodeInfo | None = None


@dataclass
class TypeParameterNode:
    name: str = ""
    constraint: str | None = None


@dataclass
class DeclarationNode:
    """A class, interface or type alias declaration."""

    name: str = ""
    kind: DeclarationKind = DeclarationKind.INTERFACE
    type_parameters: list[TypeParameterNode] = field(default_factory=list)

    # Heritage clauses (interfaces: any number of extends, classes: at most one)
    extends: list[str] = field(default_factory=list)
    implements: list[str] = field(default_factory=list)

    members: list[MemberNode] = field(default_factory=list)

    # Type aliases only
    aliased_type: TypeShapeNode | None = None

    # Original location in the dump (for error messages)
    source_path: str = ""


@dataclass
class DeclarationSet:
    """All declarations of a program, grouped by category."""

    interfaces: list[DeclarationNode] = field(default_factory=list)
    type_aliases: list[DeclarationNode] = field(default_factory=list)
    classes: list[DeclarationNode] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.interfaces) + len(self.type_aliases) + len(self.classes)
