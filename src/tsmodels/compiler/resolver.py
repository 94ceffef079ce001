# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type resolution: converts syntax nodes into TypeRef trees.

References to declared models are emitted as :class:`PendingModelRef`
placeholders; the linker substitutes the canonical model instances once every
declaration has been resolved.
"""

from __future__ import annotations

from collections.abc import Collection

from tree_sitter import Node

from tsmodels.compiler.collector import DeclarationGroup
from tsmodels.model.entities import Model
from tsmodels.model.types import (
    ALIAS_FIELD_NAME,
    ArrayTypeRef,
    Field,
    FunctionArgument,
    FunctionTypeRef,
    GenericParamTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    PendingModelRef,
    PrimitiveTypeRef,
    TypeParameter,
    TypeRef,
)
from tsmodels.syntax.source import (
    HeritageNode,
    Member,
    MemberKind,
    ParameterNode,
    TypeParameterNode,
    annotated_type,
    node_text,
    read_members,
    read_parameters,
    read_type_parameters,
)

# ###############
# Public Interface
# ###############

DEFAULT_MAX_DEPTH = 64

# Reference names that always denote an array of their single type argument.
ARRAY_REFERENCE_NAMES = frozenset({"Array", "ReadonlyArray"})

# Type used for members and parameters without an annotation.
UNANNOTATED = PrimitiveTypeRef(name="any")


class TypeDepthError(Exception):
    """Raised when a type expression nests deeper than the configured limit."""

    def __init__(self, max_depth: int, line: int) -> None:
        super().__init__(f"Line {line}: type expression nests deeper than {max_depth} levels")
        self.max_depth = max_depth
        self.line = line


class TypeResolver:
    """Resolves type expressions of declarations against a set of known model names.

    Args:
        known_names: Names of every model declared in the current pass.
        max_depth: Maximum nesting of type expressions before
            :class:`TypeDepthError` is raised.
    """

    def __init__(self, known_names: Collection[str], max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._known = frozenset(known_names)
        self._max_depth = max_depth

    def resolve_group(self, group: DeclarationGroup) -> Model:
        """Build the model for a group of same-named declarations.

        Fields are appended in declaration order. Type parameters are merged by
        name, first occurrence wins. Each declaration's fields are resolved in
        the scope of that declaration's own type parameters.
        """
        schema: list[Field] = []
        type_parameters: list[TypeParameter] = []
        heritage: list[TypeRef] = []
        seen_params: set[str] = set()

        for decl in group.declarations:
            scope = frozenset(p.name for p in decl.type_parameters)
            for param in self.resolve_type_parameters(decl.type_parameters, scope):
                if param.name not in seen_params:
                    seen_params.add(param.name)
                    type_parameters.append(param)
            if decl.value is not None:
                schema.append(Field(name=ALIAS_FIELD_NAME, type=self.resolve(decl.value, scope)))
            schema.extend(self.resolve_member(m, scope) for m in decl.members)
            heritage.extend(self.resolve_heritage(h, scope) for h in decl.heritage)

        return Model(
            group.name,
            group.kind,
            schema=tuple(schema),
            type_parameters=tuple(type_parameters),
            heritage=tuple(heritage),
        )

    def resolve_type_parameters(
        self, params: list[TypeParameterNode], scope: frozenset[str]
    ) -> list[TypeParameter]:
        return [
            TypeParameter(
                name=p.name,
                constraint=self.resolve(p.constraint, scope) if p.constraint is not None else None,
                default=self.resolve(p.default, scope) if p.default is not None else None,
            )
            for p in params
        ]

    def resolve_member(self, member: Member, scope: frozenset[str]) -> Field:
        """Map one body member to a schema field."""
        if member.kind is MemberKind.METHOD:
            inner = scope | {p.name for p in member.type_parameters}
            signature = FunctionTypeRef(
                arguments=tuple(self._resolve_parameters(member.parameters, inner, 1)),
                return_type=self._resolve(member.return_type, inner, 1),
            )
            return Field(name=member.name, type=signature, optional=member.optional)
        if member.kind is MemberKind.INDEX:
            keyed = KeyedCollectionTypeRef(
                key_type=self._resolve(member.key_type, scope, 1),
                value_type=self._resolve(member.type, scope, 1),
            )
            return Field(name=member.name, type=keyed)
        return Field(name=member.name, type=self.resolve(member.type, scope), optional=member.optional)

    def resolve_heritage(self, heritage: HeritageNode, scope: frozenset[str]) -> TypeRef:
        args = [self._resolve(a, scope, 1) for a in heritage.type_arguments]
        return self._resolve_reference(heritage.name, args, scope)

    def resolve(self, node: Node | None, scope: frozenset[str] = frozenset()) -> TypeRef:
        """Resolve a type node into a TypeRef.

        Args:
            node: A tree-sitter type node, or None for a missing annotation.
            scope: Type parameter names visible at this point.

        Raises:
            TypeDepthError: If the expression nests deeper than the limit.
        """
        return self._resolve(node, scope, 0)

    # ------------------------------------------------------------------
    # Type expressions
    # ------------------------------------------------------------------

    def _resolve(self, node: Node | None, scope: frozenset[str], depth: int) -> TypeRef:
        node = annotated_type(node)
        if node is None:
            return UNANNOTATED
        if depth > self._max_depth:
            raise TypeDepthError(self._max_depth, node.start_point[0] + 1)

        kind = node.type
        if kind in ("parenthesized_type", "readonly_type"):
            named = node.named_children
            return self._resolve(named[-1], scope, depth + 1) if named else PrimitiveTypeRef(name=node_text(node))
        if kind in ("type_identifier", "identifier"):
            return self._resolve_name(node_text(node), scope)
        if kind == "array_type":
            return ArrayTypeRef(element_type=self._resolve(node.named_children[0], scope, depth + 1))
        if kind == "generic_type":
            return self._resolve_generic(node, scope, depth)
        if kind == "function_type":
            return self._resolve_function(node, scope, depth)
        if kind == "object_type":
            keyed = self._resolve_keyed(node, scope, depth)
            if keyed is not None:
                return keyed
        return self._resolve_verbatim(node, scope)

    def _resolve_name(self, name: str, scope: frozenset[str]) -> TypeRef:
        # Type parameters shadow declared models of the same name.
        if name in scope:
            return GenericParamTypeRef(name=name)
        if name in self._known:
            return PendingModelRef(name=name)
        return PrimitiveTypeRef(name=name)

    def _resolve_generic(self, node: Node, scope: frozenset[str], depth: int) -> TypeRef:
        name_node = node.child_by_field_name("name")
        args_node = node.child_by_field_name("type_arguments")
        args = [self._resolve(a, scope, depth + 1) for a in args_node.named_children] if args_node is not None else []
        name = node_text(name_node) if name_node is not None else node_text(node)
        return self._resolve_reference(name, args, scope)

    def _resolve_reference(self, name: str, args: list[TypeRef], scope: frozenset[str]) -> TypeRef:
        if not args:
            return self._resolve_name(name, scope)
        if name in ARRAY_REFERENCE_NAMES and len(args) == 1:
            return ArrayTypeRef(element_type=args[0])
        return GenericTypeRef(reference_name=name, arguments=tuple(args))

    def _resolve_function(self, node: Node, scope: frozenset[str], depth: int) -> TypeRef:
        # The grammar does not always expose type parameters as a field here.
        params_node = node.child_by_field_name("type_parameters")
        if params_node is None:
            params_node = next((c for c in node.named_children if c.type == "type_parameters"), None)
        own = read_type_parameters(params_node)
        inner = scope | {p.name for p in own}
        params = read_parameters(node.child_by_field_name("parameters"))
        return FunctionTypeRef(
            arguments=tuple(self._resolve_parameters(params, inner, depth + 1)),
            return_type=self._resolve(node.child_by_field_name("return_type"), inner, depth + 1),
        )

    def _resolve_parameters(
        self, params: list[ParameterNode], scope: frozenset[str], depth: int
    ) -> list[FunctionArgument]:
        return [
            FunctionArgument(name=p.name, type=self._resolve(p.type, scope, depth), optional=p.optional)
            for p in params
        ]

    def _resolve_keyed(self, node: Node, scope: frozenset[str], depth: int) -> TypeRef | None:
        """Return a keyed collection for an object type made of a single index signature."""
        members = read_members(node)
        if len(members) != 1 or members[0].kind is not MemberKind.INDEX:
            return None
        member = members[0]
        return KeyedCollectionTypeRef(
            key_type=self._resolve(member.key_type, scope, depth + 1),
            value_type=self._resolve(member.type, scope, depth + 1),
        )

    def _resolve_verbatim(self, node: Node, scope: frozenset[str]) -> TypeRef:
        """Keep a compound type as text, recording the declared models it names."""
        references: dict[str, None] = {}
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "nested_type_identifier":
                continue
            if current.type == "type_identifier":
                name = node_text(current)
                if name in self._known and name not in scope:
                    references[name] = None
                continue
            stack.extend(reversed(current.named_children))
        return PrimitiveTypeRef(
            name=node_text(node),
            references=tuple(PendingModelRef(name=n) for n in references),
        )
