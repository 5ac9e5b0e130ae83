"""
Analyzer module.

Contains the declaration registry, the schema field classifier, the
dependency linker and the model graph they build.
"""

from __future__ import annotations

from .builder import ModelGraphBuilder, build_models
from .classifier import DependencySet, SchemaFieldClassifier
from .linker import DependencyLinker
from .model_nodes import (
    ALIAS_SENTINEL,
    ArraySchemaField,
    ClassModel,
    DefaultSchemaField,
    FieldKind,
    FunctionArgument,
    FunctionSchemaField,
    InterfaceModel,
    Model,
    ModelGraph,
    ModelKind,
    ModelRef,
    ReferenceSchemaField,
    SchemaField,
    TypeAliasModel,
    TypeArgument,
)
from .registry import DeclarationRegistrar, ModelRegistry, RegisteredDeclaration

__all__ = [
    "ALIAS_SENTINEL",
    "ArraySchemaField",
    "ClassModel",
    "DeclarationRegistrar",
    "DefaultSchemaField",
    "DependencyLinker",
    "DependencySet",
    "FieldKind",
    "FunctionArgument",
    "FunctionSchemaField",
    "InterfaceModel",
    "Model",
    "ModelGraph",
    "ModelGraphBuilder",
    "ModelKind",
    "ModelRef",
    "ModelRegistry",
    "ReferenceSchemaField",
    "RegisteredDeclaration",
    "SchemaField",
    "SchemaFieldClassifier",
    "TypeAliasModel",
    "TypeArgument",
    "build_models",
]
