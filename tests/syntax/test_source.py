# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the tree-sitter backed declaration reader."""

import pytest

from tsmodels.model.entities import ModelKind
from tsmodels.syntax.source import MemberKind, ParseError, node_text, read_declarations

# ###############
# Declarations
# ###############


class TestDeclarationKinds:
    def test_reads_three_kinds_in_source_order(self) -> None:
        decls = read_declarations("""
            class C { c: string }
            interface I { i: string }
            type T = { t: string };
        """)
        assert [(d.kind, d.name) for d in decls] == [
            (ModelKind.CLASS, "C"),
            (ModelKind.INTERFACE, "I"),
            (ModelKind.ALIAS, "T"),
        ]

    def test_line_numbers_are_one_based(self) -> None:
        decls = read_declarations("\ninterface A { a: string }\n\ninterface B { b: string }")
        assert [d.line for d in decls] == [2, 4]

    def test_abstract_class(self) -> None:
        decls = read_declarations("abstract class Shape { abstract area(): number; name: string }")
        assert decls[0].kind is ModelKind.CLASS
        assert [m.name for m in decls[0].members] == ["area", "name"]

    def test_unnamed_default_export_is_skipped(self) -> None:
        decls = read_declarations("export default class { x: string }")
        assert decls == []

    def test_object_alias_exposes_members(self) -> None:
        decl = read_declarations("type A = { a: string; b?: number };")[0]
        assert decl.value is None
        assert [(m.name, m.optional) for m in decl.members] == [("a", False), ("b", True)]

    def test_non_object_alias_exposes_value(self) -> None:
        decl = read_declarations("type A = string | number;")[0]
        assert decl.members == []
        assert decl.value is not None
        assert node_text(decl.value) == "string | number"


class TestMembers:
    def test_member_shapes(self) -> None:
        decl = read_declarations("""
            interface A {
                name: string;
                run(x: number, y?: string): void;
                [key: string]: unknown;
            }
        """)[0]
        assert [(m.name, m.kind) for m in decl.members] == [
            ("name", MemberKind.PROPERTY),
            ("run", MemberKind.METHOD),
            ("[key]", MemberKind.INDEX),
        ]
        run = decl.members[1]
        assert [(p.name, p.optional) for p in run.parameters] == [("x", False), ("y", True)]
        assert run.return_type is not None and node_text(run.return_type) == "void"
        index = decl.members[2]
        assert index.key_type is not None and node_text(index.key_type) == "string"
        assert index.type is not None and node_text(index.type) == "unknown"

    def test_quoted_property_names_are_unquoted(self) -> None:
        decl = read_declarations("interface A { 'content-type': string }")[0]
        assert decl.members[0].name == "content-type"

    def test_unannotated_property_has_no_type(self) -> None:
        decl = read_declarations("class A { count = 0; }")[0]
        assert decl.members[0].name == "count"
        assert decl.members[0].type is None

    def test_call_signatures_are_skipped(self) -> None:
        decl = read_declarations("interface Fn { (x: number): string; new (x: number): Fn; label: string }")[0]
        assert [m.name for m in decl.members] == ["label"]


class TestTypeParametersAndHeritage:
    def test_type_parameters(self) -> None:
        decl = read_declarations("interface A<T, U extends string = 'x'> { a: T }")[0]
        assert [p.name for p in decl.type_parameters] == ["T", "U"]
        assert decl.type_parameters[0].constraint is None
        u = decl.type_parameters[1]
        assert u.constraint is not None and node_text(u.constraint) == "string"
        assert u.default is not None and node_text(u.default) == "'x'"

    def test_interface_extends(self) -> None:
        decl = read_declarations("interface A extends B, C<string> { a: string }")[0]
        assert [h.name for h in decl.heritage] == ["B", "C"]
        assert [node_text(t) for t in decl.heritage[1].type_arguments] == ["string"]

    def test_class_extends_and_implements(self) -> None:
        decl = read_declarations("class A extends Base<number> implements I, J { }")[0]
        assert [h.name for h in decl.heritage] == ["Base", "I", "J"]
        assert [node_text(t) for t in decl.heritage[0].type_arguments] == ["number"]


# ###############
# Errors
# ###############


class TestSyntaxErrors:
    def test_invalid_source_raises(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            read_declarations("interface A { a: : string }")
        assert exc_info.value.line == 1
        assert "Line 1" in str(exc_info.value)

    def test_unterminated_declaration_raises(self) -> None:
        with pytest.raises(ParseError):
            read_declarations("interface A {\n  a: string;\n")

    def test_empty_source_is_valid(self) -> None:
        assert read_declarations("") == []
