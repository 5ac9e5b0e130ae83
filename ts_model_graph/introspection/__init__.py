"""
Introspection module.

Contains the Type Introspector protocols, their in-memory node
implementation and the declaration dump parser.
"""

from __future__ import annotations

from .nodes import (
    DeclarationNode,
    DeclarationSet,
    MemberNode,
    ParameterNode,
    SignatureNode,
    TypeNodeInfo,
    TypeParameterNode,
    TypeShapeNode,
)
from .parser import DeclarationParser
from .protocols import (
    CallSignature,
    Declaration,
    DeclarationKind,
    Member,
    MemberKind,
    Parameter,
    TypeFlag,
    TypeIntrospector,
    TypeNode,
    TypeParameter,
    TypeShape,
)

__all__ = [
    "CallSignature",
    "Declaration",
    "DeclarationKind",
    "DeclarationNode",
    "DeclarationParser",
    "DeclarationSet",
    "Member",
    "MemberKind",
    "MemberNode",
    "Parameter",
    "ParameterNode",
    "SignatureNode",
    "TypeFlag",
    "TypeIntrospector",
    "TypeNode",
    "TypeNodeInfo",
    "TypeParameter",
    "TypeParameterNode",
    "TypeShape",
    "TypeShapeNode",
]
