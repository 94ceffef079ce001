# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for type resolution before linking."""

import pytest

from tsmodels.compiler.collector import collect
from tsmodels.compiler.resolver import UNANNOTATED, TypeDepthError, TypeResolver
from tsmodels.model.entities import Model
from tsmodels.model.types import (
    ALIAS_FIELD_NAME,
    ArrayTypeRef,
    FunctionTypeRef,
    GenericParamTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    PendingModelRef,
    PrimitiveTypeRef,
    TypeRef,
)
from tsmodels.syntax.source import read_declarations

# ###############
# Test Helpers
# ###############


def _resolve_models(source: str, max_depth: int = 64) -> list[Model]:
    """Collect and resolve, without linking."""
    groups = collect(read_declarations(source))
    resolver = TypeResolver([g.name for g in groups], max_depth=max_depth)
    return [resolver.resolve_group(g) for g in groups]


def _field_type(source: str, field: str = "f") -> TypeRef:
    model = _resolve_models(source)[0]
    found = model.get_field(field)
    assert found is not None, f"field {field!r} not found in {model!r}"
    return found.type


# ###############
# Precedence
# ###############


class TestNames:
    def test_declared_name_is_pending(self) -> None:
        assert _field_type("interface A { f: B } interface B {}") == PendingModelRef(name="B")

    def test_undeclared_name_is_primitive(self) -> None:
        assert _field_type("interface A { f: Date }") == PrimitiveTypeRef(name="Date")

    def test_predefined_type_is_primitive(self) -> None:
        assert _field_type("interface A { f: number }") == PrimitiveTypeRef(name="number")

    def test_type_parameter_is_generic_param(self) -> None:
        assert _field_type("interface A<T> { f: T }") == GenericParamTypeRef(name="T")

    def test_missing_annotation_is_any(self) -> None:
        assert _field_type("class A { f = 1 }") == UNANNOTATED

    def test_qualified_name_is_kept_verbatim(self) -> None:
        assert _field_type("interface A { f: ns.Thing }") == PrimitiveTypeRef(name="ns.Thing")

    def test_parentheses_are_transparent(self) -> None:
        assert _field_type("interface A { f: (B) } interface B {}") == PendingModelRef(name="B")


class TestShapes:
    def test_array_of_pending_model(self) -> None:
        assert _field_type("interface A { f: B[] } interface B {}") == ArrayTypeRef(
            element_type=PendingModelRef(name="B")
        )

    def test_nested_arrays(self) -> None:
        assert _field_type("interface A { f: string[][] }") == ArrayTypeRef(
            element_type=ArrayTypeRef(element_type=PrimitiveTypeRef(name="string"))
        )

    def test_index_signature_object_is_keyed_collection(self) -> None:
        assert _field_type("interface A { f: { [id: string]: B } } interface B {}") == KeyedCollectionTypeRef(
            key_type=PrimitiveTypeRef(name="string"),
            value_type=PendingModelRef(name="B"),
        )

    def test_other_object_literal_is_primitive(self) -> None:
        assert _field_type("interface A { f: { x: number } }") == PrimitiveTypeRef(name="{ x: number }")

    def test_generic_instantiation_keeps_argument_order(self) -> None:
        assert _field_type("interface A { f: Promise<B> } interface B {}") == GenericTypeRef(
            reference_name="Promise",
            arguments=(PendingModelRef(name="B"),),
        )

    def test_array_reference_with_two_arguments_is_generic(self) -> None:
        result = _field_type("interface A { f: Array<string, number> }")
        assert isinstance(result, GenericTypeRef)
        assert result.reference_name == "Array"

    def test_function_type_with_own_type_parameter(self) -> None:
        result = _field_type("interface A { f: <T>(x: T, y?: B) => T[] } interface B {}")
        assert isinstance(result, FunctionTypeRef)
        assert result.arguments[0].type == GenericParamTypeRef(name="T")
        assert result.arguments[1].type == PendingModelRef(name="B")
        assert result.arguments[1].optional
        assert result.return_type == ArrayTypeRef(element_type=GenericParamTypeRef(name="T"))

    def test_union_is_primitive_text(self) -> None:
        assert _field_type("interface A { f: string | null }") == PrimitiveTypeRef(name="string | null")

    def test_union_keeps_declared_names_as_references(self) -> None:
        assert _field_type("interface A { f: B | null } interface B {}") == PrimitiveTypeRef(
            name="B | null",
            references=(PendingModelRef(name="B"),),
        )

    def test_qualified_name_is_not_a_reference(self) -> None:
        assert _field_type("interface A { f: ns.B | null } interface B {}") == PrimitiveTypeRef(name="ns.B | null")

    def test_shadowed_name_is_not_a_reference(self) -> None:
        assert _field_type("interface A<B> { f: B | null } interface B {}") == PrimitiveTypeRef(name="B | null")


class TestDeclarationShapes:
    def test_alias_value_field(self) -> None:
        model = _resolve_models("type A = B[]; interface B {}")[0]
        assert [f.name for f in model.schema] == [ALIAS_FIELD_NAME]
        assert model.schema[0].type == ArrayTypeRef(element_type=PendingModelRef(name="B"))

    def test_index_member_becomes_keyed_field(self) -> None:
        model = _resolve_models("interface A { [key: string]: number }")[0]
        assert model.schema[0].name == "[key]"
        assert model.schema[0].type == KeyedCollectionTypeRef(
            key_type=PrimitiveTypeRef(name="string"),
            value_type=PrimitiveTypeRef(name="number"),
        )

    def test_heritage_with_type_arguments(self) -> None:
        model = _resolve_models("interface A extends Base<B> {} interface Base<T> {} interface B {}")[0]
        assert model.heritage == (GenericTypeRef(reference_name="Base", arguments=(PendingModelRef(name="B"),)),)


# ###############
# Depth Limit
# ###############


class TestDepthLimit:
    def test_nesting_beyond_limit_raises(self) -> None:
        with pytest.raises(TypeDepthError) as exc_info:
            _resolve_models("interface A { f: string[][][][] }", max_depth=2)
        assert exc_info.value.max_depth == 2
        assert exc_info.value.line == 1

    def test_nesting_at_limit_is_accepted(self) -> None:
        models = _resolve_models("interface A { f: string[][] }", max_depth=2)
        assert models[0].schema[0].type == ArrayTypeRef(
            element_type=ArrayTypeRef(element_type=PrimitiveTypeRef(name="string"))
        )
