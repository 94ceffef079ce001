# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for extracted declarations (models, fields, type references)."""

from tsmodels.model.entities import Model, ModelGraph, ModelKind
from tsmodels.model.types import (
    ALIAS_FIELD_NAME,
    ArrayTypeRef,
    Field,
    FunctionArgument,
    FunctionTypeRef,
    GenericParamTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    ModelTypeRef,
    PendingModelRef,
    PrimitiveTypeRef,
    TypeParameter,
    TypeRef,
)

__all__ = [
    # Type system
    "PrimitiveTypeRef",
    "ModelTypeRef",
    "PendingModelRef",
    "GenericParamTypeRef",
    "ArrayTypeRef",
    "KeyedCollectionTypeRef",
    "GenericTypeRef",
    "FunctionArgument",
    "FunctionTypeRef",
    "TypeRef",
    "Field",
    "TypeParameter",
    "ALIAS_FIELD_NAME",
    # Entities
    "ModelKind",
    "Model",
    "ModelGraph",
]
