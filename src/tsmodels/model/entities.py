# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declared entities and the model graph produced by one extraction pass."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsmodels.model.types import Field, TypeParameter, TypeRef

# ###############
# Public Interface
# ###############


class ModelKind(Enum):
    """The declaration kinds that produce a model."""

    INTERFACE = "interface"
    ALIAS = "alias"
    CLASS = "class"


class Model:
    """A declared named entity with its field schema and graph edges.

    Models compare and hash by identity: exactly one instance exists per name
    in a graph and every link points at it. Once the extraction pass freezes
    a model, assigning to any attribute raises :class:`AttributeError`.

    Attributes:
        id: Stable identifier; equal to ``name``.
        name: Declared name.
        kind: Declaration kind.
        schema: Fields in encounter order across all merged declarations.
        type_parameters: Declared type parameters.
        heritage: Resolved ``extends`` / ``implements`` targets.
        dependencies: Models referenced by this model, in discovery order.
        dependants: Models referencing this model, in discovery order.
    """

    def __init__(
        self,
        name: str,
        kind: ModelKind,
        *,
        schema: tuple[Field, ...] = (),
        type_parameters: tuple[TypeParameter, ...] = (),
        heritage: tuple[TypeRef, ...] = (),
    ) -> None:
        self._frozen = False
        self.id = name
        self.name = name
        self.kind = kind
        self.schema = schema
        self.type_parameters = type_parameters
        self.heritage = heritage
        self.dependencies: tuple[Model, ...] = ()
        self.dependants: tuple[Model, ...] = ()

    def __setattr__(self, name: str, value: object) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Model '{self.name}' is read-only")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        # Edges are cyclic; show names only.
        return f"Model(name={self.name!r}, kind={self.kind.value!r}, fields={[f.name for f in self.schema]!r})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the model read-only."""
        object.__setattr__(self, "_frozen", True)

    def get_field(self, name: str) -> Field | None:
        """Return the first field called *name*, or None."""
        for f in self.schema:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True)
class ModelGraph:
    """The ordered, fully linked result of one extraction pass."""

    models: tuple[Model, ...] = ()

    def __iter__(self) -> Iterator[Model]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __getitem__(self, name: str) -> Model:
        model = self.get(name)
        if model is None:
            raise KeyError(name)
        return model

    def get(self, name: str) -> Model | None:
        """Return the model declared as *name*, or None."""
        for model in self.models:
            if model.name == name:
                return model
        return None

    def names(self) -> list[str]:
        """Return model names in graph order."""
        return [m.name for m in self.models]
