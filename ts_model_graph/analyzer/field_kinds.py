"""
Helpers that discriminate between overlapping type shapes.

A member type can look invocable, array-like and generic at the same time.
These predicates answer one question each; the classifier decides the
priority between them.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..introspection.protocols import CallSignature, Member, MemberKind, TypeFlag, TypeNode, TypeShape

# Import qualifiers printed by the compiler, e.g. import("/source").Item
_IMPORT_PATTERN = re.compile(r"import\([\"'][^\"']*[\"']\)\.")

# A type alias flagged with any of these is a type expression, not a record
DEGENERATE_ALIAS_FLAGS = frozenset(
    {
        TypeFlag.NUMBER,
        TypeFlag.STRING,
        TypeFlag.BOOLEAN,
        TypeFlag.UNDEFINED,
        TypeFlag.NULL,
        TypeFlag.ANY,
        TypeFlag.UNKNOWN,
        TypeFlag.NEVER,
        TypeFlag.ENUM,
        TypeFlag.ENUM_LITERAL,
        TypeFlag.LITERAL,
        TypeFlag.UNION,
    }
)


def trim_import(text: str) -> str:
    """Remove every import qualifier from a printed type name, whatever its module."""
    return _IMPORT_PATTERN.sub("", text)


def is_degenerate_alias(aliased_type: TypeShape | None) -> bool:
    """Whether an aliased type is primitive, literal, union or enum-like."""
    if aliased_type is None:
        return False
    return not DEGENERATE_ALIAS_FLAGS.isdisjoint(aliased_type.flags)


def single_call_signature(type_shape: TypeShape) -> CallSignature | None:
    """The call signature of a type, when it has exactly one.

    Overloaded members (several signatures) and non-invocable ones both
    return None.
    """
    signatures = type_shape.call_signatures
    if len(signatures) != 1:
        return None
    return signatures[0]


def array_element(type_shape: TypeShape) -> TypeShape | None:
    """Element type of an array type, None for anything else."""
    if not type_shape.is_array:
        return None
    return type_shape.element_type


def generic_parts(type_shape: TypeShape) -> tuple[str | None, Sequence[TypeShape]]:
    """
    Symbol name and type arguments of a generic type.

    An alias application (``type Box<T> = ...; Box<Item>``) reports the
    alias symbol with the alias arguments; anything else reports its own
    symbol and arguments.

    Returns:
        (symbol name or None when the type has no symbol, type arguments)
    """
    if type_shape.alias_symbol is not None:
        return type_shape.alias_symbol, type_shape.alias_type_arguments
    return type_shape.symbol, type_shape.type_arguments


def syntactic_type_arguments(member: Member) -> Sequence[TypeNode]:
    """Type arguments as written in the member's annotation, if it is a type reference."""
    type_node = member.type_node
    if type_node is None or not type_node.is_type_reference:
        return []
    return type_node.type_arguments


def authored_argument_name(type_argument: TypeShape, index: int, authored: Sequence[TypeNode]) -> str:
    """
    Name of a generic type argument.

    The authored spelling wins when the annotation names the argument as a
    type reference, so aliases are not replaced by their expansion.
    """
    if index < len(authored) and authored[index].is_type_reference:
        return trim_import(authored[index].text)
    return trim_import(type_argument.text)


def declared_type_name(member: Member) -> str:
    """
    Type name of a member for the default field shape.

    Property signatures keep the annotation they were written with; the
    introspector may otherwise report a type substituted at the point of use.
    """
    type_name = trim_import(member.type.text)
    if member.kind == MemberKind.PROPERTY_SIGNATURE and member.type_node is not None and member.type_node.text:
        type_name = trim_import(member.type_node.text)
    return type_name
