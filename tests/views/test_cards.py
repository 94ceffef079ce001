# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for card descriptions."""

from tsmodels.compiler.registry import parse
from tsmodels.model.entities import Model, ModelKind
from tsmodels.model.types import (
    ArrayTypeRef,
    FunctionArgument,
    FunctionTypeRef,
    GenericParamTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    ModelTypeRef,
    PrimitiveTypeRef,
)
from tsmodels.views.cards import TypeFragment, build_card, describe_type

_B = Model("B", ModelKind.INTERFACE)
_STRING = PrimitiveTypeRef(name="string")

# ###############
# describe_type
# ###############


class TestDescribeType:
    def test_primitive(self) -> None:
        assert describe_type(_STRING) == TypeFragment("string")

    def test_primitive_naming_a_model(self) -> None:
        ref = PrimitiveTypeRef(name="B | null", references=(ModelTypeRef(model=_B),))
        assert describe_type(ref) == TypeFragment("B | null", is_model=True)

    def test_generic_param(self) -> None:
        assert describe_type(GenericParamTypeRef(name="T")) == TypeFragment("T")

    def test_model(self) -> None:
        assert describe_type(ModelTypeRef(model=_B)) == TypeFragment("B", is_model=True)

    def test_array_of_model(self) -> None:
        assert describe_type(ArrayTypeRef(element_type=ModelTypeRef(model=_B))) == TypeFragment("B[]", is_model=True)

    def test_keyed_collection_of_model(self) -> None:
        ref = KeyedCollectionTypeRef(key_type=_STRING, value_type=ModelTypeRef(model=_B))
        assert describe_type(ref) == TypeFragment("Map<string, B>", is_model=True)

    def test_keyed_collection_of_primitive(self) -> None:
        ref = KeyedCollectionTypeRef(key_type=_STRING, value_type=PrimitiveTypeRef(name="number"))
        assert describe_type(ref) == TypeFragment("Map<string, number>")

    def test_generic(self) -> None:
        ref = GenericTypeRef(reference_name="Promise", arguments=(ModelTypeRef(model=_B), _STRING))
        assert describe_type(ref) == TypeFragment("Promise<B, string>", is_model=True)

    def test_generic_with_model_target(self) -> None:
        box = Model("Box", ModelKind.INTERFACE)
        ref = GenericTypeRef(reference_name="Box", arguments=(_STRING,), model=box)
        assert describe_type(ref).is_model

    def test_function(self) -> None:
        ref = FunctionTypeRef(
            arguments=(
                FunctionArgument(name="a", type=_STRING),
                FunctionArgument(name="b", type=ModelTypeRef(model=_B), optional=True),
            ),
            return_type=PrimitiveTypeRef(name="void"),
        )
        assert describe_type(ref) == TypeFragment("(a: string, b?: B) => void")

    def test_array_of_function_is_parenthesized(self) -> None:
        ref = ArrayTypeRef(element_type=FunctionTypeRef(return_type=_STRING))
        assert describe_type(ref).text == "(() => string)[]"


# ###############
# build_card
# ###############


class TestBuildCard:
    def test_rows_follow_schema(self) -> None:
        graph = parse("interface A { b?: B; bs: B[]; n: number } interface B {}")
        card = build_card(graph["A"])
        assert card.title == "A"
        assert card.kind == "interface"
        assert [(r.name, r.type.text, r.type.is_model, r.optional) for r in card.rows] == [
            ("b", "B", True, True),
            ("bs", "B[]", True, False),
            ("n", "number", False, False),
        ]

    def test_alias_card(self) -> None:
        card = build_card(parse("type Ids = string[];")["Ids"])
        assert card.kind == "alias"
        assert [(r.name, r.type.text) for r in card.rows] == [("==>", "string[]")]

    def test_empty_model(self) -> None:
        assert build_card(parse("class Empty {}")["Empty"]).rows == []
