# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Top-level declaration reader for TypeScript source text.

Lexing and parsing are delegated to tree-sitter with the TypeScript grammar.
This module only walks the resulting syntax tree: it unwraps export and
``declare`` modifiers, picks out interface, type alias and class
declarations, and normalizes their members into :class:`Member` records.
Type expressions are left as raw tree-sitter nodes for the resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import structlog
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from tsmodels.model.entities import ModelKind

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the source text is not syntactically valid TypeScript.

    Attributes:
        line: 1-based line number of the first syntax error.
        column: 1-based column number of the first syntax error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


class MemberKind(Enum):
    """Shapes of body members that become schema fields."""

    PROPERTY = "property"
    METHOD = "method"
    INDEX = "index"


@dataclass
class TypeParameterNode:
    """A declared type parameter with optional constraint and default type nodes."""

    name: str
    constraint: Node | None = None
    default: Node | None = None


@dataclass
class ParameterNode:
    """One formal parameter of a method or function type."""

    name: str
    type: Node | None = None
    optional: bool = False


@dataclass
class Member:
    """A body member of an interface, object type or class.

    Attributes:
        name: Member name (``[key]`` for index signatures).
        kind: Member shape.
        type: Annotated type node for properties, value type for index signatures.
        optional: Whether the member was declared with ``?``.
        parameters: Method parameters.
        return_type: Method return type node (None when unannotated).
        type_parameters: Method-level type parameters.
        key_type: Key type node of an index signature.
    """

    name: str
    kind: MemberKind
    type: Node | None = None
    optional: bool = False
    parameters: list[ParameterNode] = field(default_factory=list)
    return_type: Node | None = None
    type_parameters: list[TypeParameterNode] = field(default_factory=list)
    key_type: Node | None = None


@dataclass
class HeritageNode:
    """An ``extends`` / ``implements`` target: a name with optional type arguments."""

    name: str
    type_arguments: list[Node] = field(default_factory=list)


@dataclass
class Declaration:
    """A top-level interface, type alias or class declaration.

    For aliases whose value is an object type literal, ``members`` holds the
    literal's members and ``value`` is None. For any other alias ``value``
    holds the aliased type node.
    """

    kind: ModelKind
    name: str
    line: int
    type_parameters: list[TypeParameterNode] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    value: Node | None = None
    heritage: list[HeritageNode] = field(default_factory=list)


def read_declarations(source: str) -> list[Declaration]:
    """Parse *source* and return its top-level declarations in source order.

    Args:
        source: Complete TypeScript source text.

    Returns:
        Interface, type alias and class declarations, exported or not.

    Raises:
        ParseError: If the text contains any syntax error.
    """
    tree = Parser(_TYPESCRIPT).parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        row, col = bad.start_point
        what = f"missing {bad.type!r}" if bad.is_missing else f"unexpected {node_text(bad)[:40]!r}"
        raise ParseError(f"Syntax error: {what}", row + 1, col + 1)

    declarations: list[Declaration] = []
    for child in root.named_children:
        node = _unwrap(child)
        if node is None:
            continue
        decl = _read_declaration(node)
        if decl is not None:
            declarations.append(decl)
    log.debug("syntax.declarations", count=len(declarations))
    return declarations


def node_text(node: Node) -> str:
    """Return the source text of *node* with whitespace runs collapsed."""
    raw = node.text.decode("utf-8") if node.text is not None else ""
    return " ".join(raw.split())


def annotated_type(node: Node | None) -> Node | None:
    """Strip a ``: T`` annotation wrapper and return the type node."""
    if node is None:
        return None
    if node.type in _ANNOTATION_TYPES:
        named = node.named_children
        return named[0] if named else None
    return node


def read_parameters(node: Node | None) -> list[ParameterNode]:
    """Read a ``formal_parameters`` node into parameter records."""
    if node is None:
        return []
    params: list[ParameterNode] = []
    for child in node.named_children:
        if child.type not in ("required_parameter", "optional_parameter"):
            continue
        pattern = child.child_by_field_name("pattern")
        if pattern is None:
            continue
        if pattern.type == "rest_pattern" and pattern.named_children:
            pattern = pattern.named_children[0]
        params.append(
            ParameterNode(
                name=node_text(pattern),
                type=annotated_type(child.child_by_field_name("type")),
                optional=child.type == "optional_parameter",
            )
        )
    return params


def read_type_parameters(node: Node | None) -> list[TypeParameterNode]:
    """Read a ``type_parameters`` node into type parameter records."""
    if node is None:
        return []
    result: list[TypeParameterNode] = []
    for child in node.named_children:
        if child.type != "type_parameter":
            continue
        name = child.child_by_field_name("name")
        constraint = child.child_by_field_name("constraint")
        default = child.child_by_field_name("value")
        result.append(
            TypeParameterNode(
                name=node_text(name) if name is not None else "",
                constraint=_last_named(constraint),
                default=_last_named(default),
            )
        )
    return result


def read_members(body: Node | None) -> list[Member]:
    """Read the members of an interface body, object type or class body."""
    if body is None:
        return []
    members: list[Member] = []
    for child in body.named_children:
        member = _read_member(child)
        if member is not None:
            members.append(member)
    return members


# ################
# Implementation
# ################

_TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())

_ANNOTATION_TYPES = frozenset(
    {
        "type_annotation",
        "opting_type_annotation",
        "omitting_type_annotation",
        "adding_type_annotation",
        "asserts_annotation",
        "type_predicate_annotation",
    }
)

_DECLARATION_KINDS: dict[str, ModelKind] = {
    "interface_declaration": ModelKind.INTERFACE,
    "type_alias_declaration": ModelKind.ALIAS,
    "class_declaration": ModelKind.CLASS,
    "abstract_class_declaration": ModelKind.CLASS,
    "class": ModelKind.CLASS,
}

_SKIPPED_CLASS_METHODS = frozenset({"constructor"})


def _first_error(node: Node) -> Node:
    """Return the first ERROR or MISSING node below *node* in source order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error(child)
    return node


def _unwrap(node: Node) -> Node | None:
    """Strip ``export`` / ``declare`` wrappers; return a declaration node or None."""
    if node.type in _DECLARATION_KINDS:
        return node
    if node.type == "export_statement":
        decl = node.child_by_field_name("declaration")
        if decl is not None:
            return _unwrap(decl)
        # `export default class Name {}` may parse as a class expression.
        value = node.child_by_field_name("value")
        if value is not None and value.type == "class" and value.child_by_field_name("name") is not None:
            return value
    if node.type in ("export_statement", "ambient_declaration"):
        for child in node.named_children:
            found = _unwrap(child)
            if found is not None:
                return found
    return None


def _read_declaration(node: Node) -> Declaration | None:
    kind = _DECLARATION_KINDS[node.type]
    name_node = node.child_by_field_name("name")
    if name_node is None:
        # `export default class {}` declares nothing addressable by name.
        log.debug("syntax.declaration_skipped", kind=kind.value, line=node.start_point[0] + 1)
        return None
    decl = Declaration(
        kind=kind,
        name=node_text(name_node),
        line=node.start_point[0] + 1,
        type_parameters=read_type_parameters(node.child_by_field_name("type_parameters")),
    )

    if kind is ModelKind.ALIAS:
        value = node.child_by_field_name("value")
        if value is not None and value.type == "object_type":
            decl.members = read_members(value)
        else:
            decl.value = value
        return decl

    decl.members = read_members(node.child_by_field_name("body"))
    for child in node.named_children:
        if child.type == "extends_type_clause":
            decl.heritage.extend(_read_type_list(child))
        elif child.type == "class_heritage":
            for clause in child.named_children:
                if clause.type == "extends_clause":
                    decl.heritage.extend(_read_extends_clause(clause))
                elif clause.type == "implements_clause":
                    decl.heritage.extend(_read_type_list(clause))
    return decl


def _read_type_list(clause: Node) -> list[HeritageNode]:
    """Read the targets of an ``implements`` or interface ``extends`` clause."""
    result: list[HeritageNode] = []
    for type_node in clause.named_children:
        if type_node.type == "generic_type":
            name = type_node.child_by_field_name("name")
            args = type_node.child_by_field_name("type_arguments")
            result.append(
                HeritageNode(
                    name=node_text(name) if name is not None else node_text(type_node),
                    type_arguments=list(args.named_children) if args is not None else [],
                )
            )
        else:
            result.append(HeritageNode(name=node_text(type_node)))
    return result


def _read_extends_clause(clause: Node) -> list[HeritageNode]:
    """Read a class ``extends`` clause: expressions each optionally followed by type arguments."""
    result: list[HeritageNode] = []
    for child in clause.named_children:
        if child.type == "type_arguments":
            if result:
                result[-1].type_arguments = list(child.named_children)
            continue
        if child.type == "instantiation_expression":
            target, *rest = child.named_children
            args = rest[0].named_children if rest and rest[0].type == "type_arguments" else []
            result.append(HeritageNode(name=node_text(target), type_arguments=list(args)))
            continue
        result.append(HeritageNode(name=node_text(child)))
    return result


def _read_member(node: Node) -> Member | None:
    kind = node.type
    if kind in ("property_signature", "public_field_definition"):
        return Member(
            name=_member_name(node),
            kind=MemberKind.PROPERTY,
            type=annotated_type(node.child_by_field_name("type")),
            optional=_has_token(node, "?"),
        )
    if kind in ("method_signature", "abstract_method_signature", "method_definition"):
        name = _member_name(node)
        if name in _SKIPPED_CLASS_METHODS or _has_token(node, "set"):
            log.debug("syntax.member_skipped", member=name)
            return None
        return_type = annotated_type(node.child_by_field_name("return_type"))
        if _has_token(node, "get"):
            return Member(name=name, kind=MemberKind.PROPERTY, type=return_type)
        return Member(
            name=name,
            kind=MemberKind.METHOD,
            optional=_has_token(node, "?"),
            parameters=read_parameters(node.child_by_field_name("parameters")),
            return_type=return_type,
            type_parameters=read_type_parameters(node.child_by_field_name("type_parameters")),
        )
    if kind == "index_signature":
        return _read_index_signature(node)
    if kind in ("call_signature", "construct_signature", "class_static_block"):
        log.debug("syntax.member_skipped", member=kind)
    return None


def _read_index_signature(node: Node) -> Member | None:
    key_name = "key"
    key_type: Node | None = None
    value_type: Node | None = None
    for child in node.named_children:
        if child.type == "identifier":
            key_name = node_text(child)
        elif child.type in _ANNOTATION_TYPES:
            value_type = annotated_type(child)
        elif child.type == "mapped_type_clause":
            return None
        elif key_type is None:
            key_type = child
    return Member(name=f"[{key_name}]", kind=MemberKind.INDEX, type=value_type, key_type=key_type)


def _member_name(node: Node) -> str:
    name = node.child_by_field_name("name")
    if name is None:
        return ""
    if name.type == "string":
        return node_text(name)[1:-1]
    return node_text(name)


def _has_token(node: Node, token: str) -> bool:
    """Return True if *node* has an anonymous child token *token* before its body."""
    for child in node.children:
        if child.type in ("statement_block", "type_annotation", "formal_parameters"):
            break
        if not child.is_named and child.type == token:
            return True
    return False


def _last_named(node: Node | None) -> Node | None:
    """Return the type carried by a ``constraint`` / ``default_type`` wrapper."""
    if node is None:
        return None
    named = node.named_children
    return named[-1] if named else None
