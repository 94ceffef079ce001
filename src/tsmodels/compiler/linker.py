# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dependency linking: replaces by-name model references with model instances.

Every model in the pass is registered before linking starts, so forward and
mutually recursive references always find their target. Type trees are
rebuilt rather than mutated; they are finite because they mirror the syntax
tree, so linking never follows model-to-model links and cannot loop.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from tsmodels.model.entities import Model
from tsmodels.model.types import (
    ArrayTypeRef,
    FunctionTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    ModelTypeRef,
    PendingModelRef,
    PrimitiveTypeRef,
    TypeParameter,
    TypeRef,
)

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


def link(models: Sequence[Model], *, include_heritage: bool = True) -> None:
    """Link every model's types and populate dependency / dependant edges.

    Args:
        models: All models of the pass; names must be unique.
        include_heritage: Whether ``extends`` / ``implements`` targets count
            as dependencies. Heritage types are linked either way.

    References to names not present in *models* are replaced with a
    :class:`PrimitiveTypeRef` carrying the name.
    """
    registry = {m.name: m for m in models}
    edges = _EdgeSet()
    for model in models:
        linker = _ModelLinker(model, registry, edges)
        model.schema = tuple(f.model_copy(update={"type": linker.link(f.type)}) for f in model.schema)
        model.type_parameters = tuple(linker.link_type_parameter(p) for p in model.type_parameters)
        linker.record = include_heritage
        model.heritage = tuple(linker.link(h) for h in model.heritage)

    for model in models:
        model.dependencies = edges.dependencies(model)
        model.dependants = edges.dependants(model)
    log.debug("linker.linked", models=len(models), edges=edges.count)


# ################
# Implementation
# ################


class _EdgeSet:
    """Ordered, duplicate-free dependency edges keyed by model identity."""

    def __init__(self) -> None:
        self._out: dict[Model, dict[Model, None]] = {}
        self._in: dict[Model, dict[Model, None]] = {}
        self.count = 0

    def add(self, source: Model, target: Model) -> None:
        if source is target:
            return
        visited = self._out.setdefault(source, {})
        if target in visited:
            return
        visited[target] = None
        self._in.setdefault(target, {})[source] = None
        self.count += 1

    def dependencies(self, model: Model) -> tuple[Model, ...]:
        return tuple(self._out.get(model, ()))

    def dependants(self, model: Model) -> tuple[Model, ...]:
        return tuple(self._in.get(model, ()))


class _ModelLinker:
    """Links the types owned by one model, recording its outgoing edges."""

    def __init__(self, model: Model, registry: dict[str, Model], edges: _EdgeSet) -> None:
        self._model = model
        self._registry = registry
        self._edges = edges
        self.record = True

    def link(self, type_ref: TypeRef) -> TypeRef:
        if isinstance(type_ref, PendingModelRef):
            target = self._target(type_ref.name)
            if target is None:
                return PrimitiveTypeRef(name=type_ref.name)
            return ModelTypeRef(model=target)
        if isinstance(type_ref, PrimitiveTypeRef) and type_ref.references:
            return type_ref.model_copy(update={"references": tuple(self.link(r) for r in type_ref.references)})
        if isinstance(type_ref, ArrayTypeRef):
            return ArrayTypeRef(element_type=self.link(type_ref.element_type))
        if isinstance(type_ref, KeyedCollectionTypeRef):
            return KeyedCollectionTypeRef(
                key_type=self.link(type_ref.key_type),
                value_type=self.link(type_ref.value_type),
            )
        if isinstance(type_ref, GenericTypeRef):
            return GenericTypeRef(
                reference_name=type_ref.reference_name,
                arguments=tuple(self.link(a) for a in type_ref.arguments),
                model=self._target(type_ref.reference_name, quiet=True),
            )
        if isinstance(type_ref, FunctionTypeRef):
            return FunctionTypeRef(
                arguments=tuple(a.model_copy(update={"type": self.link(a.type)}) for a in type_ref.arguments),
                return_type=self.link(type_ref.return_type),
            )
        return type_ref

    def link_type_parameter(self, param: TypeParameter) -> TypeParameter:
        return param.model_copy(
            update={
                "constraint": self.link(param.constraint) if param.constraint is not None else None,
                "default": self.link(param.default) if param.default is not None else None,
            }
        )

    def _target(self, name: str, *, quiet: bool = False) -> Model | None:
        target = self._registry.get(name)
        if target is None:
            if not quiet:
                log.debug("linker.unresolved", model=self._model.name, name=name)
            return None
        if self.record:
            self._edges.add(self._model, target)
        return target
