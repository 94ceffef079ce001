# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Renderer-facing descriptions of models."""

from tsmodels.views.cards import FieldRow, ModelCard, TypeFragment, build_card, describe_type

__all__ = [
    "FieldRow",
    "ModelCard",
    "TypeFragment",
    "build_card",
    "describe_type",
]
