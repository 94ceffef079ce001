# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extract a linked graph of models from TypeScript interface, type alias and class declarations."""

from tsmodels.compiler import DeclarationConflictError, ModelRegistry, TypeDepthError, parse
from tsmodels.model import Model, ModelGraph, ModelKind
from tsmodels.syntax import ParseError
from tsmodels.workspace import ExtractorConfig

__all__ = [
    "parse",
    "ModelRegistry",
    "Model",
    "ModelGraph",
    "ModelKind",
    "ExtractorConfig",
    "ParseError",
    "DeclarationConflictError",
    "TypeDepthError",
]
