# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type system representations for extracted models."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, InstanceOf
from pydantic import Field as _Field

from tsmodels.model.entities import Model

# ###############
# Public Interface
# ###############


class _TypeRefBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveTypeRef(_TypeRefBase):
    """A built-in or unrecognized type, kept as its verbatim source text.

    For compound types such as unions, tuples or inline object literals,
    ``references`` holds the declared models named anywhere inside the text.
    """

    kind: Literal["primitive"] = "primitive"
    name: str
    references: tuple[TypeRef, ...] = ()


class ModelTypeRef(_TypeRefBase):
    """A direct link to another declared model."""

    kind: Literal["model"] = "model"
    model: InstanceOf[Model]

    @property
    def name(self) -> str:
        return self.model.name


class PendingModelRef(_TypeRefBase):
    """A by-name model reference awaiting the linker.

    Only exists between type resolution and linking; a finished graph never
    contains one.
    """

    kind: Literal["pending"] = "pending"
    name: str


class GenericParamTypeRef(_TypeRefBase):
    """A reference to a type parameter of the enclosing declaration or signature."""

    kind: Literal["generic_param"] = "generic_param"
    name: str


class ArrayTypeRef(_TypeRefBase):
    """A homogeneous sequence: ``T[]``, ``Array<T>`` or ``ReadonlyArray<T>``."""

    kind: Literal["array"] = "array"
    element_type: TypeRef


class KeyedCollectionTypeRef(_TypeRefBase):
    """A map-like association written as an index signature ``{ [key: K]: V }``."""

    kind: Literal["keyed_collection"] = "keyed_collection"
    key_type: TypeRef
    value_type: TypeRef


class GenericTypeRef(_TypeRefBase):
    """A named generic reference instantiated with type arguments.

    ``model`` is set when ``reference_name`` names a declared model.
    """

    kind: Literal["generic"] = "generic"
    reference_name: str
    arguments: tuple[TypeRef, ...] = ()
    model: InstanceOf[Model] | None = None


class FunctionArgument(BaseModel):
    """One parameter of a function signature."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    optional: bool = False


class FunctionTypeRef(_TypeRefBase):
    """A callable: a function-typed property or a method."""

    kind: Literal["function"] = "function"
    arguments: tuple[FunctionArgument, ...] = ()
    return_type: TypeRef


# A field type reference. The `kind` discriminator keeps the union closed.
TypeRef = Annotated[
    PrimitiveTypeRef
    | ModelTypeRef
    | PendingModelRef
    | GenericParamTypeRef
    | ArrayTypeRef
    | KeyedCollectionTypeRef
    | GenericTypeRef
    | FunctionTypeRef,
    _Field(discriminator="kind"),
]


class Field(BaseModel):
    """One named, typed entry of a model's schema.

    The reserved name :data:`ALIAS_FIELD_NAME` marks the underlying type of an
    alias that is not an object type.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    optional: bool = False


class TypeParameter(BaseModel):
    """A declared type parameter such as ``U extends string``."""

    model_config = ConfigDict(frozen=True)

    name: str
    constraint: TypeRef | None = None
    default: TypeRef | None = None


ALIAS_FIELD_NAME = "==>"

# Resolve forward references for models that use TypeRef.
PrimitiveTypeRef.model_rebuild()
ArrayTypeRef.model_rebuild()
KeyedCollectionTypeRef.model_rebuild()
GenericTypeRef.model_rebuild()
FunctionArgument.model_rebuild()
FunctionTypeRef.model_rebuild()
Field.model_rebuild()
TypeParameter.model_rebuild()
