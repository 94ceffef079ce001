# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Card descriptions for diagramming front ends.

A card is a model's name plus one row per schema field, each carrying a
short human-readable type label. Labels that point at other models are
flagged so a renderer can highlight them. Layout and drawing are left to the
front end.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tsmodels.model.entities import Model
from tsmodels.model.types import (
    ArrayTypeRef,
    FunctionTypeRef,
    GenericParamTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    ModelTypeRef,
    PendingModelRef,
    PrimitiveTypeRef,
    TypeRef,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class TypeFragment:
    """A rendered type label.

    Attributes:
        text: Display text, e.g. ``"B[]"`` or ``"Map<string, B>"``.
        is_model: True when the label names a declared model.
    """

    text: str
    is_model: bool = False


@dataclass
class FieldRow:
    """One row of a card: a field name and its type label."""

    name: str
    type: TypeFragment
    optional: bool = False


@dataclass
class ModelCard:
    """Full description of one model card.

    Attributes:
        title: Model name.
        kind: Declaration kind (``"interface"``, ``"alias"`` or ``"class"``).
        rows: One row per schema field, in schema order.
    """

    title: str
    kind: str
    rows: list[FieldRow] = field(default_factory=list)


def build_card(model: Model) -> ModelCard:
    """Build a :class:`ModelCard` for *model*."""
    return ModelCard(
        title=model.name,
        kind=model.kind.value,
        rows=[FieldRow(name=f.name, type=describe_type(f.type), optional=f.optional) for f in model.schema],
    )


def describe_type(type_ref: TypeRef) -> TypeFragment:
    """Return the display label for a type reference.

    Model references render as the model name, arrays as ``element[]`` and
    keyed collections as ``Map<key, value>``; the label is flagged as a model
    when the element or value is a model reference.
    """
    if isinstance(type_ref, ModelTypeRef):
        return TypeFragment(type_ref.model.name, is_model=True)
    if isinstance(type_ref, PrimitiveTypeRef):
        return TypeFragment(type_ref.name, is_model=any(isinstance(r, ModelTypeRef) for r in type_ref.references))
    if isinstance(type_ref, (GenericParamTypeRef, PendingModelRef)):
        return TypeFragment(type_ref.name)
    if isinstance(type_ref, ArrayTypeRef):
        inner = describe_type(type_ref.element_type)
        text = f"({inner.text})[]" if isinstance(type_ref.element_type, FunctionTypeRef) else f"{inner.text}[]"
        return TypeFragment(text, is_model=inner.is_model)
    if isinstance(type_ref, KeyedCollectionTypeRef):
        key = describe_type(type_ref.key_type)
        value = describe_type(type_ref.value_type)
        return TypeFragment(f"Map<{key.text}, {value.text}>", is_model=value.is_model)
    if isinstance(type_ref, GenericTypeRef):
        args = [describe_type(a) for a in type_ref.arguments]
        text = f"{type_ref.reference_name}<{', '.join(a.text for a in args)}>"
        return TypeFragment(text, is_model=type_ref.model is not None or any(a.is_model for a in args))
    if isinstance(type_ref, FunctionTypeRef):
        params = ", ".join(
            f"{a.name}{'?' if a.optional else ''}: {describe_type(a.type).text}" for a in type_ref.arguments
        )
        return TypeFragment(f"({params}) => {describe_type(type_ref.return_type).text}")
    raise TypeError(f"Unknown type reference: {type_ref!r}")
