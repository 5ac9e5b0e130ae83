"""
JSON backend.

Serializes the model graph. Resolved references are written as
``{"ref": "<model id>"}`` and unresolved ones as their raw name, so the
graph can be rebuilt by id without nesting models into each other.
"""

from __future__ import annotations

import json
from typing import Any

from ..analyzer.model_nodes import (
    ArraySchemaField,
    ClassModel,
    DefaultSchemaField,
    FunctionSchemaField,
    InterfaceModel,
    Model,
    ModelGraph,
    ModelRef,
    ReferenceSchemaField,
    SchemaField,
    TypeAliasModel,
)
from .base import GraphBackend


def encode_ref(value: ModelRef) -> Any:
    if isinstance(value, str):
        return value
    return {"ref": value.id}


def encode_field(schema_field: SchemaField) -> dict[str, Any]:
    """Encode a schema field with its ``type`` discriminator."""
    if isinstance(schema_field, DefaultSchemaField):
        return {"name": schema_field.name, "type": encode_ref(schema_field.type)}
    if isinstance(schema_field, ArraySchemaField):
        return {"name": schema_field.name, "type": "array", "elementType": encode_ref(schema_field.element_type)}
    if isinstance(schema_field, ReferenceSchemaField):
        return {
            "name": schema_field.name,
            "type": "reference",
            "referenceName": schema_field.reference_name,
            "arguments": [encode_ref(argument) for argument in schema_field.arguments],
        }
    if isinstance(schema_field, FunctionSchemaField):
        if isinstance(schema_field.return_type, list):
            return_type: Any = [encode_ref(value) for value in schema_field.return_type]
        else:
            return_type = encode_ref(schema_field.return_type)
        return {
            "name": schema_field.name,
            "type": "function",
            "arguments": [{"name": argument.name, "type": encode_ref(argument.type)} for argument in schema_field.arguments],
            "returnType": return_type,
        }
    raise TypeError(f"Unknown schema field: {type(schema_field).__name__}")


def encode_model(model: Model) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": model.id,
        "name": model.name,
        "type": model.kind.value,
        "arguments": [{"name": argument.name, "extends": argument.extends} for argument in model.arguments],
        "schema": [encode_field(schema_field) for schema_field in model.schema],
    }

    if isinstance(model, InterfaceModel):
        data["extends"] = [encode_ref(value) for value in model.extends]
    elif isinstance(model, ClassModel):
        data["extends"] = encode_ref(model.extends) if model.extends is not None else None
        data["implements"] = [encode_ref(value) for value in model.implements]
    elif not isinstance(model, TypeAliasModel):
        raise TypeError(f"Unknown model: {type(model).__name__}")

    data["dependencies"] = [dependency.id for dependency in model.dependencies]
    data["dependants"] = [dependant.id for dependant in model.dependants]
    return data


class JsonBackend(GraphBackend):
    """Renders the graph as a JSON document."""

    FILE_EXTENSION = "json"

    def to_dict(self, graph: ModelGraph) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.generation_comment:
            data["$comment"] = self.generation_comment
        data["models"] = [encode_model(model) for model in graph]
        data["edges"] = [list(edge) for edge in graph.edges]
        return data

    def generate(self, graph: ModelGraph) -> str:
        indent = self.config.output.indent or None
        return json.dumps(self.to_dict(graph), indent=indent) + "\n"
