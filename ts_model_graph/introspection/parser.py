"""
Declaration dump parser.

Reads the JSON dump of an introspected program into in-memory declaration
nodes. The dump is produced by whatever engine ran the type checker; the
parser only validates its structure, it never infers types.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import DeclarationParseError
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
from .protocols import DeclarationKind, MemberKind, TypeFlag

logger = logging.getLogger(__name__)


class DeclarationParser:
    """Parses a declaration dump into a DeclarationSet."""

    # Keywords whose flag is implied by the string shorthand
    KEYWORD_FLAGS = {
        "string": TypeFlag.STRING,
        "number": TypeFlag.NUMBER,
        "boolean": TypeFlag.BOOLEAN,
        "any": TypeFlag.ANY,
        "unknown": TypeFlag.UNKNOWN,
        "never": TypeFlag.NEVER,
        "null": TypeFlag.NULL,
        "undefined": TypeFlag.UNDEFINED,
    }

    # Top-level key -> declaration kind, in registration order
    CATEGORIES = (
        ("interfaces", DeclarationKind.INTERFACE),
        ("type_aliases", DeclarationKind.TYPE_ALIAS),
        ("classes", DeclarationKind.CLASS),
    )

    def parse(self, data: dict[str, Any]) -> DeclarationSet:
        """
        Parse a declaration dump.

        Args:
            data: The decoded JSON dump

        Returns:
            DeclarationSet with interfaces, type aliases and classes

        Raises:
            DeclarationParseError: If the dump is malformed
        """
        if not isinstance(data, dict):
            raise DeclarationParseError("Expected a JSON object", "#")

        declarations = DeclarationSet()
        for key, kind in self.CATEGORIES:
            entries = data.get(key)
            if entries is None:
                continue
            if not isinstance(entries, list):
                raise DeclarationParseError(f"Expected a list of {key}", f"#/{key}")

            target = getattr(declarations, key)
            for i, entry in enumerate(entries):
                target.append(self._parse_declaration(entry, kind, f"#/{key}/{i}"))

        logger.debug(
            "Parsed %d interfaces, %d type aliases, %d classes",
            len(declarations.interfaces),
            len(declarations.type_aliases),
            len(declarations.classes),
        )
        return declarations

    def parse_file(self, path: str | Path) -> DeclarationSet:
        """Read and parse a dump file."""
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise DeclarationParseError(f"Invalid JSON: {e}", "#") from e
        return self.parse(data)

    def _parse_declaration(self, entry: Any, kind: DeclarationKind, path: str) -> DeclarationNode:
        """Parse one declaration entry."""
        if not isinstance(entry, dict):
            raise DeclarationParseError("Expected a declaration object", path)

        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise DeclarationParseError("Declaration has no name", path)

        node = DeclarationNode(
            name=name,
            kind=kind,
            type_parameters=[
                self._parse_type_parameter(p, f"{path}/type_parameters/{i}")
                for i, p in enumerate(self._parse_list(entry.get("type_parameters"), f"{path}/type_parameters"))
            ],
            members=[
                self._parse_member(m, f"{path}/members/{i}") for i, m in enumerate(self._parse_list(entry.get("members"), f"{path}/members"))
            ],
            source_path=path,
        )

        if kind == DeclarationKind.INTERFACE:
            node.extends = self._parse_names(entry.get("extends"), f"{path}/extends")
        elif kind == DeclarationKind.CLASS:
            # A class extends at most one base
            extends = entry.get("extends")
            if extends is not None:
                if not isinstance(extends, str):
                    raise DeclarationParseError("Class extends must be a string", f"{path}/extends")
                node.extends = [extends]
            node.implements = self._parse_names(entry.get("implements"), f"{path}/implements")
        else:
            if "type" not in entry:
                raise DeclarationParseError("Type alias has no type", path)
            node.aliased_type = self._parse_type(entry["type"], f"{path}/type")

        return node

    def _parse_list(self, value: Any, path: str) -> list[Any]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DeclarationParseError("Expected a list", path)
        return value

    def _parse_optional_string(self, value: Any, path: str) -> str | None:
        if value is not None and not isinstance(value, str):
            raise DeclarationParseError("Expected a string", path)
        return value

    def _parse_names(self, value: Any, path: str) -> list[str]:
        """Parse a list of heritage clause names."""
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise DeclarationParseError("Expected a list of names", path)
        return list(value)

    def _parse_type_parameter(self, value: Any, path: str) -> TypeParameterNode:
        if isinstance(value, str):
            return TypeParameterNode(name=value)
        if not isinstance(value, dict) or not isinstance(value.get("name"), str):
            raise DeclarationParseError("Expected a type parameter", path)
        return TypeParameterNode(
            name=value["name"],
            constraint=self._parse_optional_string(value.get("constraint"), f"{path}/constraint"),
        )

    def _parse_member(self, value: Any, path: str) -> MemberNode:
        """Parse a member (property, method or accessor)."""
        if not isinstance(value, dict) or not isinstance(value.get("name"), str):
            raise DeclarationParseError("Expected a member with a name", path)
        if "type" not in value:
            raise DeclarationParseError(f"Member '{value['name']}' has no type", path)

        kind_value = value.get("kind", MemberKind.PROPERTY_SIGNATURE.value)
        try:
            kind = MemberKind(kind_value)
        except ValueError as e:
            raise DeclarationParseError(f"Unknown member kind '{kind_value}'", f"{path}/kind") from e

        type_node = None
        if value.get("type_node") is not None:
            type_node = self._parse_type_node(value["type_node"], f"{path}/type_node")

        return MemberNode(
            name=value["name"],
            kind=kind,
            type=self._parse_type(value["type"], f"{path}/type"),
            type_node=type_node,
        )

    def _parse_type(self, value: Any, path: str) -> TypeShapeNode:
        """
        Parse a type expression.

        A bare string is shorthand for a type with that text; the TypeScript
        keyword types also get their flag.
        """
        if isinstance(value, str):
            flag = self.KEYWORD_FLAGS.get(value)
            return TypeShapeNode(text=value, flags=frozenset([flag]) if flag else frozenset())

        if not isinstance(value, dict) or not isinstance(value.get("text"), str):
            raise DeclarationParseError("Expected a type", path)

        try:
            flags = frozenset(TypeFlag(f) for f in self._parse_list(value.get("flags"), f"{path}/flags"))
        except ValueError as e:
            raise DeclarationParseError(str(e), f"{path}/flags") from e

        node = TypeShapeNode(
            text=value["text"],
            flags=flags,
            symbol=self._parse_optional_string(value.get("symbol"), f"{path}/symbol"),
            alias_symbol=self._parse_optional_string(value.get("alias_symbol"), f"{path}/alias_symbol"),
        )

        if value.get("element_type") is not None:
            node.is_array = True
            node.element_type = self._parse_type(value["element_type"], f"{path}/element_type")

        for i, signature in enumerate(self._parse_list(value.get("call_signatures"), f"{path}/call_signatures")):
            node.call_signatures.append(self._parse_signature(signature, f"{path}/call_signatures/{i}"))

        for i, argument in enumerate(self._parse_list(value.get("type_arguments"), f"{path}/type_arguments")):
            node.type_arguments.append(self._parse_type(argument, f"{path}/type_arguments/{i}"))

        for i, argument in enumerate(self._parse_list(value.get("alias_type_arguments"), f"{path}/alias_type_arguments")):
            node.alias_type_arguments.append(self._parse_type(argument, f"{path}/alias_type_arguments/{i}"))

        return node

    def _parse_signature(self, value: Any, path: str) -> SignatureNode:
        if not isinstance(value, dict):
            raise DeclarationParseError("Expected a call signature", path)

        parameters = []
        for i, parameter in enumerate(self._parse_list(value.get("parameters"), f"{path}/parameters")):
            parameter_path = f"{path}/parameters/{i}"
            if not isinstance(parameter, dict) or not isinstance(parameter.get("name"), str):
                raise DeclarationParseError("Expected a parameter with a name", parameter_path)
            parameters.append(
                ParameterNode(
                    name=parameter["name"],
                    type=self._parse_type(parameter.get("type", "any"), f"{parameter_path}/type"),
                )
            )

        return SignatureNode(
            parameters=parameters,
            return_type=self._parse_type(value.get("return_type", "void"), f"{path}/return_type"),
        )

    def _parse_type_node(self, value: Any, path: str) -> TypeNodeInfo:
        """Parse an authored type annotation."""
        if isinstance(value, str):
            return TypeNodeInfo(text=value)

        if not isinstance(value, dict) or not isinstance(value.get("text"), str):
            raise DeclarationParseError("Expected a type node", path)

        type_arguments = self._parse_list(value.get("type_arguments"), f"{path}/type_arguments")
        return TypeNodeInfo(
            text=value["text"],
            is_type_reference=value.get("kind") == "type_reference",
            type_arguments=[self._parse_type_node(a, f"{path}/type_arguments/{i}") for i, a in enumerate(type_arguments)],
        )
