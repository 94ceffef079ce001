# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of model graphs.

Graphs are stored as JSON. Model-to-model links (type references, generic
targets and dependency edges) are written as model ids, which keeps cyclic
graphs finite; deserialization restores them as shared instances. The format
is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from tsmodels.model.entities import Model, ModelGraph, ModelKind
from tsmodels.model.types import (
    ArrayTypeRef,
    Field,
    FunctionArgument,
    FunctionTypeRef,
    GenericParamTypeRef,
    GenericTypeRef,
    KeyedCollectionTypeRef,
    ModelTypeRef,
    PrimitiveTypeRef,
    TypeParameter,
    TypeRef,
)

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"


def to_dict(graph: ModelGraph) -> dict[str, Any]:
    """Return a JSON-compatible dict for *graph*."""
    return {"v": ARTIFACT_FORMAT_VERSION, "models": [_model_to_dict(m) for m in graph]}


def serialize(graph: ModelGraph, *, indent: int | None = None) -> str:
    """Serialize a ModelGraph to a JSON string (compact unless *indent* is given)."""
    if indent is None:
        return json.dumps(to_dict(graph), separators=(",", ":"))
    return json.dumps(to_dict(graph), indent=indent)


def deserialize(data: str) -> ModelGraph:
    """Deserialize a ModelGraph from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed graph with frozen models and shared model links.

    Raises:
        ValueError: If the format version is not recognised or a model id is dangling.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _graph_from_dict(obj)


def write_artifact(graph: ModelGraph, path: Path, *, indent: int | None = None) -> None:
    """Write a serialized graph to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(graph, indent=indent), encoding="utf-8")


def read_artifact(path: Path) -> ModelGraph:
    """Read and deserialize a graph from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _model_to_dict(model: Model) -> dict[str, Any]:
    return {
        "id": model.id,
        "name": model.name,
        "kind": model.kind.value,
        "typeParameters": [_type_parameter_to_dict(p) for p in model.type_parameters],
        "schema": [_field_to_dict(f) for f in model.schema],
        "heritage": [_type_ref_to_dict(h) for h in model.heritage],
        "dependencies": [m.id for m in model.dependencies],
        "dependants": [m.id for m in model.dependants],
    }


def _type_parameter_to_dict(param: TypeParameter) -> dict[str, Any]:
    d: dict[str, Any] = {"name": param.name}
    if param.constraint is not None:
        d["constraint"] = _type_ref_to_dict(param.constraint)
    if param.default is not None:
        d["default"] = _type_ref_to_dict(param.default)
    return d


def _field_to_dict(f: Field | FunctionArgument) -> dict[str, Any]:
    d: dict[str, Any] = {"name": f.name, "type": _type_ref_to_dict(f.type)}
    if f.optional:
        d["optional"] = True
    return d


def _type_ref_to_dict(ref: TypeRef) -> dict[str, Any]:
    if isinstance(ref, PrimitiveTypeRef):
        d: dict[str, Any] = {"kind": "primitive", "name": ref.name}
        if ref.references:
            d["references"] = [_type_ref_to_dict(r) for r in ref.references]
        return d
    if isinstance(ref, ModelTypeRef):
        return {"kind": "model", "ref": ref.model.id}
    if isinstance(ref, GenericParamTypeRef):
        return {"kind": "generic_param", "name": ref.name}
    if isinstance(ref, ArrayTypeRef):
        return {"kind": "array", "elementType": _type_ref_to_dict(ref.element_type)}
    if isinstance(ref, KeyedCollectionTypeRef):
        return {
            "kind": "keyed_collection",
            "keyType": _type_ref_to_dict(ref.key_type),
            "valueType": _type_ref_to_dict(ref.value_type),
        }
    if isinstance(ref, GenericTypeRef):
        d = {
            "kind": "generic",
            "referenceName": ref.reference_name,
            "arguments": [_type_ref_to_dict(a) for a in ref.arguments],
        }
        if ref.model is not None:
            d["ref"] = ref.model.id
        return d
    if isinstance(ref, FunctionTypeRef):
        return {
            "kind": "function",
            "arguments": [_field_to_dict(a) for a in ref.arguments],
            "returnType": _type_ref_to_dict(ref.return_type),
        }
    raise ValueError(f"Cannot serialize unlinked type reference: {ref!r}")


def _graph_from_dict(obj: dict[str, Any]) -> ModelGraph:
    entries = obj.get("models", [])
    # Create every model first so that links can point forward.
    by_id: dict[str, Model] = {}
    for entry in entries:
        model = Model(entry["name"], ModelKind(entry["kind"]))
        model.id = entry.get("id", entry["name"])
        by_id[model.id] = model

    def lookup(model_id: str) -> Model:
        if model_id not in by_id:
            raise ValueError(f"Unknown model id in artifact: {model_id!r}")
        return by_id[model_id]

    for entry in entries:
        model = by_id[entry.get("id", entry["name"])]
        model.type_parameters = tuple(_type_parameter_from_dict(p, lookup) for p in entry.get("typeParameters", []))
        model.schema = tuple(
            Field(name=f["name"], type=_type_ref_from_dict(f["type"], lookup), optional=f.get("optional", False))
            for f in entry.get("schema", [])
        )
        model.heritage = tuple(_type_ref_from_dict(h, lookup) for h in entry.get("heritage", []))
        model.dependencies = tuple(lookup(i) for i in entry.get("dependencies", []))
        model.dependants = tuple(lookup(i) for i in entry.get("dependants", []))

    for model in by_id.values():
        model.freeze()
    return ModelGraph(models=tuple(by_id.values()))


def _type_parameter_from_dict(obj: dict[str, Any], lookup: Callable[[str], Model]) -> TypeParameter:
    return TypeParameter(
        name=obj["name"],
        constraint=_type_ref_from_dict(obj["constraint"], lookup) if "constraint" in obj else None,
        default=_type_ref_from_dict(obj["default"], lookup) if "default" in obj else None,
    )


def _type_ref_from_dict(obj: dict[str, Any], lookup: Callable[[str], Model]) -> TypeRef:
    kind = obj["kind"]
    if kind == "primitive":
        return PrimitiveTypeRef(
            name=obj["name"],
            references=tuple(_type_ref_from_dict(r, lookup) for r in obj.get("references", [])),
        )
    if kind == "model":
        return ModelTypeRef(model=lookup(obj["ref"]))
    if kind == "generic_param":
        return GenericParamTypeRef(name=obj["name"])
    if kind == "array":
        return ArrayTypeRef(element_type=_type_ref_from_dict(obj["elementType"], lookup))
    if kind == "keyed_collection":
        return KeyedCollectionTypeRef(
            key_type=_type_ref_from_dict(obj["keyType"], lookup),
            value_type=_type_ref_from_dict(obj["valueType"], lookup),
        )
    if kind == "generic":
        return GenericTypeRef(
            reference_name=obj["referenceName"],
            arguments=tuple(_type_ref_from_dict(a, lookup) for a in obj["arguments"]),
            model=lookup(obj["ref"]) if "ref" in obj else None,
        )
    if kind == "function":
        return FunctionTypeRef(
            arguments=tuple(
                FunctionArgument(
                    name=a["name"],
                    type=_type_ref_from_dict(a["type"], lookup),
                    optional=a.get("optional", False),
                )
                for a in obj["arguments"]
            ),
            return_type=_type_ref_from_dict(obj["returnType"], lookup),
        )
    raise ValueError(f"Unknown type reference kind: {kind!r}")
