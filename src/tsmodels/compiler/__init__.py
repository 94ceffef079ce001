# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extraction pipeline: collection, type resolution, linking and serialization."""

from tsmodels.compiler.artifact import (
    ARTIFACT_FORMAT_VERSION,
    deserialize,
    read_artifact,
    serialize,
    to_dict,
    write_artifact,
)
from tsmodels.compiler.collector import DeclarationConflictError, DeclarationGroup, collect
from tsmodels.compiler.linker import link
from tsmodels.compiler.registry import ModelRegistry, parse
from tsmodels.compiler.resolver import TypeDepthError, TypeResolver

__all__ = [
    "parse",
    "ModelRegistry",
    "collect",
    "DeclarationGroup",
    "DeclarationConflictError",
    "TypeResolver",
    "TypeDepthError",
    "link",
    "serialize",
    "deserialize",
    "to_dict",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_FORMAT_VERSION",
]
