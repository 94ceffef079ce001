# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extraction entry points: the pure :func:`parse` pipeline and :class:`ModelRegistry`.

One pass runs every stage to completion or raises; no partially linked graph
is ever returned:

1. Syntax source: tree-sitter parse into top-level declarations.
2. Collector: group same-named declarations for merging.
3. Resolver: build one model per group with by-name placeholders.
4. Linker: substitute placeholders and populate edges.
5. Freeze: hand out read-only models.
"""

from __future__ import annotations

import hashlib

import structlog

from tsmodels.compiler.collector import collect
from tsmodels.compiler.linker import link
from tsmodels.compiler.resolver import TypeResolver
from tsmodels.model.entities import Model, ModelGraph
from tsmodels.syntax.source import read_declarations
from tsmodels.workspace.config import ExtractorConfig

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


def parse(source: str, *, config: ExtractorConfig | None = None) -> ModelGraph:
    """Extract the linked model graph from TypeScript source text.

    Args:
        source: Complete source text.
        config: Extraction options; defaults apply when omitted.

    Returns:
        A :class:`ModelGraph` of frozen models ordered by first declaration.

    Raises:
        ParseError: If the source is syntactically invalid.
        DeclarationConflictError: If a name is declared with two different kinds.
        TypeDepthError: If a type expression nests deeper than the configured limit.
    """
    config = config or ExtractorConfig()
    groups = collect(read_declarations(source))
    resolver = TypeResolver([g.name for g in groups], max_depth=config.max_type_depth)
    models = [resolver.resolve_group(g) for g in groups]
    link(models, include_heritage=config.include_heritage)
    for model in models:
        model.freeze()
    log.debug("registry.parsed", models=len(models))
    return ModelGraph(models=tuple(models))


class ModelRegistry:
    """Holds the source text for a host application and hands out its model graph.

    The graph is parsed lazily on first access and cached against the SHA-256
    digest of the source text. :meth:`set_source` with different text discards
    the cached graph; the next access parses from scratch.
    """

    def __init__(self, source: str = "", *, config: ExtractorConfig | None = None) -> None:
        self._config = config or ExtractorConfig()
        self._source = source
        self._graph: ModelGraph | None = None
        self._graph_digest: str | None = None

    @property
    def source(self) -> str:
        return self._source

    def set_source(self, source: str) -> None:
        """Replace the source text, discarding the previous graph if the text changed."""
        self._source = source
        if self._graph_digest != _digest(source):
            self._graph = None
            self._graph_digest = None

    @property
    def graph(self) -> ModelGraph:
        """The model graph for the current source, parsed on demand."""
        if self._graph is None:
            self._graph = parse(self._source, config=self._config)
            self._graph_digest = _digest(self._source)
        else:
            log.debug("registry.cache_hit", digest=self._graph_digest)
        return self._graph

    def get_models(self) -> list[Model]:
        """Return the models of the current source in graph order."""
        return list(self.graph)


# ################
# Implementation
# ################


def _digest(source: str) -> str:
    return hashlib.sha256(source.encode("utf-8")).hexdigest()
