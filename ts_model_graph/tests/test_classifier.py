"""
Tests for member classification and dependency collection.
"""

from __future__ import annotations

import pytest

from ts_model_graph.analyzer import (
    ALIAS_SENTINEL,
    ArraySchemaField,
    ClassModel,
    DefaultSchemaField,
    FunctionArgument,
    FunctionSchemaField,
    InterfaceModel,
    ModelRegistry,
    ReferenceSchemaField,
    RegisteredDeclaration,
    SchemaFieldClassifier,
    TypeAliasModel,
)
from ts_model_graph.analyzer.field_kinds import trim_import
from ts_model_graph.errors import RegistryNotSealedError
from ts_model_graph.introspection import (
    DeclarationKind,
    DeclarationNode,
    MemberKind,
    MemberNode,
    ParameterNode,
    SignatureNode,
    TypeFlag,
    TypeNodeInfo,
    TypeShapeNode,
)


def t(text, **kwargs):
    return TypeShapeNode(text=text, **kwargs)


def signature(return_type, *parameters):
    return SignatureNode(
        parameters=[ParameterNode(name=name, type=type_shape) for name, type_shape in parameters],
        return_type=return_type,
    )


@pytest.fixture
def registry():
    registry = ModelRegistry()
    for name in ("Item", "Tag", "Box", "Owner"):
        registry.register(InterfaceModel(id=name, name=name))
    registry.register(TypeAliasModel(id="Alias", name="Alias"))
    registry.register(ClassModel(id="Holder", name="Holder"))
    registry.seal()
    return registry


@pytest.fixture
def classify(registry):
    """Classify members as the body of the Holder class."""
    classifier = SchemaFieldClassifier(registry)

    def _classify(*members, extends=(), implements=()):
        model = registry.get("Holder")
        model.schema = []
        declaration = DeclarationNode(
            name="Holder",
            kind=DeclarationKind.CLASS,
            extends=list(extends),
            implements=list(implements),
            members=list(members),
        )
        dependencies = classifier.classify(RegisteredDeclaration(declaration=declaration, model=model))
        return model.schema, [dependency.id for dependency in dependencies]

    return _classify


class TestFunctionFields:
    def test_single_signature(self, classify, registry):
        member = MemberNode(
            name="load",
            kind=MemberKind.METHOD,
            type=t("(tag: Tag, limit: number) => Item", call_signatures=[signature(t("Item"), ("tag", t("Tag")), ("limit", t("number")))]),
        )
        schema, dependencies = classify(member)

        assert schema == [
            FunctionSchemaField(
                name="load",
                arguments=[FunctionArgument("tag", registry.get("Tag")), FunctionArgument("limit", "number")],
                return_type=registry.get("Item"),
            )
        ]
        assert dependencies == ["Tag", "Item"]

    def test_array_return_is_wrapped(self, classify, registry):
        member = MemberNode(
            name="list",
            kind=MemberKind.METHOD,
            type=t("() => Item[]", call_signatures=[signature(t("Item[]", is_array=True, element_type=t("Item")))]),
        )
        schema, dependencies = classify(member)

        assert schema[0].return_type == [registry.get("Item")]
        assert dependencies == ["Item"]

    def test_function_beats_array_and_generic(self, classify):
        # A callable that also reports array and generic shapes
        member = MemberNode(
            name="odd",
            type=t(
                "Odd",
                call_signatures=[signature(t("void"))],
                is_array=True,
                element_type=t("Item"),
                symbol="Box",
                type_arguments=[t("Item")],
            ),
        )
        schema, _ = classify(member)
        assert isinstance(schema[0], FunctionSchemaField)

    def test_overloads_fall_through_to_default(self, classify):
        member = MemberNode(
            name="parse",
            kind=MemberKind.METHOD,
            type=t(
                "{ (text: string): Item; (raw: number): Item; }",
                call_signatures=[signature(t("Item"), ("text", t("string"))), signature(t("Item"), ("raw", t("number")))],
            ),
        )
        schema, dependencies = classify(member)

        assert schema == [DefaultSchemaField(name="parse", type="{ (text: string): Item; (raw: number): Item; }")]
        assert dependencies == []


class TestArrayFields:
    def test_resolved_element(self, classify, registry):
        member = MemberNode(name="items", type=t("Item[]", is_array=True, element_type=t("Item")))
        schema, dependencies = classify(member)

        assert schema == [ArraySchemaField(name="items", element_type=registry.get("Item"))]
        assert dependencies == ["Item"]

    def test_unresolved_element_keeps_text(self, classify):
        member = MemberNode(name="names", type=t("string[]", is_array=True, element_type=t("string")))
        schema, dependencies = classify(member)

        assert schema == [ArraySchemaField(name="names", element_type="string")]
        assert dependencies == []

    def test_array_beats_generic_element(self, classify):
        member = MemberNode(
            name="boxes",
            type=t("Box<Item>[]", is_array=True, element_type=t("Box<Item>", symbol="Box", type_arguments=[t("Item")])),
        )
        schema, _ = classify(member)
        assert schema == [ArraySchemaField(name="boxes", element_type="Box<Item>")]

    def test_array_without_element_falls_through(self, classify):
        member = MemberNode(name="raw", type=t("unknown[]", is_array=True))
        schema, _ = classify(member)
        assert schema == [DefaultSchemaField(name="raw", type="unknown[]")]


class TestReferenceFields:
    def test_generic_instantiation(self, classify, registry):
        member = MemberNode(name="box", kind=MemberKind.PROPERTY, type=t("Box<Item>", symbol="Box", type_arguments=[t("Item")]))
        schema, dependencies = classify(member)

        assert schema == [ReferenceSchemaField(name="box", reference_name="Box", arguments=[registry.get("Item")])]
        assert dependencies == ["Box", "Item"]

    def test_unregistered_symbol_keeps_name(self, classify, registry):
        member = MemberNode(name="lookup", type=t("Map<string, Tag>", symbol="Map", type_arguments=[t("string"), t("Tag")]))
        schema, dependencies = classify(member)

        assert schema == [ReferenceSchemaField(name="lookup", reference_name="Map", arguments=["string", registry.get("Tag")])]
        assert dependencies == ["Tag"]

    def test_alias_symbol_takes_precedence(self, classify, registry):
        member = MemberNode(
            name="wrapped",
            type=t(
                "Alias<Owner>",
                symbol="__type",
                type_arguments=[t("Item")],
                alias_symbol="Alias",
                alias_type_arguments=[t("Owner")],
            ),
        )
        schema, dependencies = classify(member)

        assert schema == [ReferenceSchemaField(name="wrapped", reference_name="Alias", arguments=[registry.get("Owner")])]
        assert dependencies == ["Alias", "Owner"]

    def test_authored_argument_spelling_wins(self, classify, registry):
        # The introspector expands the alias argument; the annotation names it
        member = MemberNode(
            name="boxed",
            type=t("Box<{ id: string; }>", symbol="Box", type_arguments=[t("{ id: string; }")]),
            type_node=TypeNodeInfo(
                text="Box<Item>",
                is_type_reference=True,
                type_arguments=[TypeNodeInfo(text="Item", is_type_reference=True)],
            ),
        )
        schema, _ = classify(member)
        assert schema[0].arguments == [registry.get("Item")]

    def test_non_reference_annotation_argument_is_ignored(self, classify):
        member = MemberNode(
            name="boxed",
            type=t("Box<string>", symbol="Box", type_arguments=[t("string")]),
            type_node=TypeNodeInfo(
                text="Box<string>",
                is_type_reference=True,
                type_arguments=[TypeNodeInfo(text="string")],
            ),
        )
        schema, _ = classify(member)
        assert schema[0].arguments == ["string"]

    def test_empty_symbol_falls_through_to_default(self, classify):
        member = MemberNode(name="anon", kind=MemberKind.PROPERTY, type=t("Anon<Item>", symbol="", type_arguments=[t("Item")]))
        schema, _ = classify(member)
        assert schema == [DefaultSchemaField(name="anon", type="Anon<Item>")]

    def test_symbol_without_arguments_is_default(self, classify, registry):
        member = MemberNode(name="tag", kind=MemberKind.PROPERTY, type=t("Tag", symbol="Tag"))
        schema, dependencies = classify(member)
        assert schema == [DefaultSchemaField(name="tag", type=registry.get("Tag"))]
        assert dependencies == ["Tag"]


class TestDefaultFields:
    def test_property_signature_prefers_annotation(self, classify, registry):
        # Substituted at the point of use, written as Owner
        member = MemberNode(
            name="owner",
            kind=MemberKind.PROPERTY_SIGNATURE,
            type=t("{ name: string; }"),
            type_node=TypeNodeInfo(text="Owner", is_type_reference=True),
        )
        schema, dependencies = classify(member)

        assert schema == [DefaultSchemaField(name="owner", type=registry.get("Owner"))]
        assert dependencies == ["Owner"]

    def test_class_property_uses_resolved_type(self, classify):
        member = MemberNode(
            name="owner",
            kind=MemberKind.PROPERTY,
            type=t("{ name: string; }"),
            type_node=TypeNodeInfo(text="Owner", is_type_reference=True),
        )
        schema, _ = classify(member)
        assert schema == [DefaultSchemaField(name="owner", type="{ name: string; }")]

    def test_accessors(self, classify, registry):
        getter = MemberNode(name="current", kind=MemberKind.GET_ACCESSOR, type=t("Item"))
        setter = MemberNode(name="current", kind=MemberKind.SET_ACCESSOR, type=t("Item"))
        schema, dependencies = classify(getter, setter)

        assert [field.type for field in schema] == [registry.get("Item"), registry.get("Item")]
        assert dependencies == ["Item"]


class TestDeclarationLevel:
    def test_heritage_dependencies_come_first(self, classify):
        member = MemberNode(name="tag", type=t("Tag"))
        _, dependencies = classify(member, extends=["Item"], implements=["Owner", "Unknown"])
        assert dependencies == ["Item", "Owner", "Tag"]

    def test_member_order_is_kept(self, classify):
        members = [MemberNode(name=name, type=t("string")) for name in ("c", "a", "b")]
        schema, _ = classify(*members)
        assert [field.name for field in schema] == ["c", "a", "b"]

    @pytest.mark.parametrize(
        "flag,text",
        [
            (TypeFlag.UNION, '"a" | "b"'),
            (TypeFlag.STRING, "string"),
            (TypeFlag.LITERAL, "42"),
            (TypeFlag.ENUM, "Color"),
            (TypeFlag.NEVER, "never"),
        ],
    )
    def test_degenerate_alias(self, registry, flag, text):
        model = registry.get("Alias")
        declaration = DeclarationNode(
            name="Alias",
            kind=DeclarationKind.TYPE_ALIAS,
            aliased_type=t(text, flags=frozenset([flag])),
            members=[MemberNode(name="length", type=t("number"))],
        )
        dependencies = SchemaFieldClassifier(registry).classify(RegisteredDeclaration(declaration=declaration, model=model))

        assert model.schema == [DefaultSchemaField(name=ALIAS_SENTINEL, type=text)]
        assert len(dependencies) == 0

    def test_object_alias_members_are_classified(self, registry):
        model = registry.get("Alias")
        model.schema = []
        declaration = DeclarationNode(
            name="Alias",
            kind=DeclarationKind.TYPE_ALIAS,
            aliased_type=t("{ item: Item; }"),
            members=[MemberNode(name="item", type=t("Item"))],
        )
        dependencies = SchemaFieldClassifier(registry).classify(RegisteredDeclaration(declaration=declaration, model=model))

        assert model.schema == [DefaultSchemaField(name="item", type=registry.get("Item"))]
        assert list(dependencies) == [registry.get("Item")]

    def test_unsealed_registry_is_rejected(self):
        with pytest.raises(RegistryNotSealedError):
            SchemaFieldClassifier(ModelRegistry())


class TestImportQualifiers:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ('import("/source").Item', "Item"),
            ("import('/source').Item", "Item"),
            ('Map<import("/a").A, import("/b").B>', "Map<A, B>"),
            ("Item", "Item"),
        ],
    )
    def test_trim_import(self, text, expected):
        assert trim_import(text) == expected

    def test_qualified_generic_arguments_resolve(self, classify, registry):
        member = MemberNode(
            name="pairs",
            type=t(
                'Map<import("/a").Item, import("/b").Tag>',
                symbol="Map",
                type_arguments=[t('import("/a").Item'), t('import("/b").Tag')],
            ),
        )
        schema, dependencies = classify(member)

        assert schema[0].arguments == [registry.get("Item"), registry.get("Tag")]
        assert dependencies == ["Item", "Tag"]
