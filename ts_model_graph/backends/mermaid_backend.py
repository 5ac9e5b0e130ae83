"""
Mermaid backend.

Renders the model graph as a Mermaid class diagram.
"""

from __future__ import annotations

from typing import Any

from ..analyzer.model_nodes import (
    ArraySchemaField,
    DefaultSchemaField,
    FunctionSchemaField,
    Model,
    ModelGraph,
    ModelKind,
    ModelRef,
    ReferenceSchemaField,
    SchemaField,
    heritage_refs,
    ref_name,
)
from .base import GraphBackend

# Stereotype shown inside the class box
ANNOTATIONS = {
    ModelKind.INTERFACE: "interface",
    ModelKind.TYPE_ALIAS: "typeAlias",
    ModelKind.CLASS: "",
}


class MermaidBackend(GraphBackend):
    """Renders the graph as a Mermaid classDiagram."""

    TEMPLATE_LANG = "mermaid"
    FILE_EXTENSION = "mmd"

    def generate(self, graph: ModelGraph) -> str:
        template = self.jinja_env.get_template("class_diagram.mmd.jinja2")
        return template.render(
            generation_comment=self.generation_comment,
            models=[self._prepare_model_context(model) for model in graph],
            relations=self._relations(graph),
        )

    def _prepare_model_context(self, model: Model) -> dict[str, Any]:
        """
        Prepare the template context for a model.

        Args:
            model: The model

        Returns:
            Dictionary of template variables
        """
        return {
            "id": model.id,
            "generics": ",".join(argument.name for argument in model.arguments),
            "annotation": ANNOTATIONS[model.kind],
            "fields": [self.format_field(schema_field) for schema_field in model.schema],
        }

    def format_field(self, schema_field: SchemaField) -> str:
        """Format a schema field as a class member line."""
        if isinstance(schema_field, DefaultSchemaField):
            return f"{schema_field.name} {self._type_text(schema_field.type)}"
        if isinstance(schema_field, ArraySchemaField):
            return f"{schema_field.name} {self._type_text(schema_field.element_type)}[]"
        if isinstance(schema_field, ReferenceSchemaField):
            arguments = ",".join(self._type_text(argument) for argument in schema_field.arguments)
            return f"{schema_field.name} {schema_field.reference_name}~{arguments}~"
        if isinstance(schema_field, FunctionSchemaField):
            arguments = ", ".join(f"{argument.name}: {self._type_text(argument.type)}" for argument in schema_field.arguments)
            if isinstance(schema_field.return_type, list):
                return_text = "".join(f"{self._type_text(value)}[]" for value in schema_field.return_type)
            else:
                return_text = self._type_text(schema_field.return_type)
            return f"{schema_field.name}({arguments}) {return_text}"
        raise TypeError(f"Unknown schema field: {type(schema_field).__name__}")

    def _type_text(self, value: ModelRef) -> str:
        # Mermaid uses ~ for generics
        return ref_name(value).replace("<", "~").replace(">", "~")

    def _relations(self, graph: ModelGraph) -> list[str]:
        """Heritage arrows first, then plain dependency arrows."""
        relations = []
        for model in graph:
            extends, implements = heritage_refs(model)
            heritage_ids = set()
            for value in extends:
                if not isinstance(value, str):
                    relations.append(f"{value.id} <|-- {model.id}")
                    heritage_ids.add(value.id)
            for value in implements:
                if not isinstance(value, str):
                    relations.append(f"{value.id} <|.. {model.id}")
                    heritage_ids.add(value.id)
            for dependency in model.dependencies:
                if dependency.id not in heritage_ids:
                    relations.append(f"{model.id} ..> {dependency.id}")
        return relations
