# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration collection: groups top-level declarations by name for merging."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from tsmodels.model.entities import ModelKind
from tsmodels.syntax.source import Declaration

log = structlog.get_logger(__name__)

# ###############
# Public Interface
# ###############


class DeclarationConflictError(Exception):
    """Raised when one name is declared with two different declaration kinds.

    Attributes:
        name: The conflicting name.
        first_kind: Kind of the first declaration seen.
        second_kind: Kind of the conflicting later declaration.
        line: 1-based line of the conflicting declaration.
    """

    def __init__(self, name: str, first_kind: ModelKind, second_kind: ModelKind, line: int) -> None:
        super().__init__(
            f"Line {line}: '{name}' is declared as {second_kind.value} but was first declared as {first_kind.value}"
        )
        self.name = name
        self.first_kind = first_kind
        self.second_kind = second_kind
        self.line = line


@dataclass
class DeclarationGroup:
    """All declarations sharing one name and kind, in source order."""

    name: str
    kind: ModelKind
    declarations: list[Declaration] = field(default_factory=list)


def collect(declarations: Iterable[Declaration]) -> list[DeclarationGroup]:
    """Group declarations by name.

    Groups are returned in order of the first declaration of each name; within
    a group, declarations keep their source order so that merged fields are
    appended after earlier ones.

    Raises:
        DeclarationConflictError: If a name is declared with two different kinds.
    """
    groups: dict[str, DeclarationGroup] = {}
    for decl in declarations:
        group = groups.get(decl.name)
        if group is None:
            group = DeclarationGroup(name=decl.name, kind=decl.kind)
            groups[decl.name] = group
        elif group.kind is not decl.kind:
            raise DeclarationConflictError(decl.name, group.kind, decl.kind, decl.line)
        else:
            log.debug("collector.merge", name=decl.name, line=decl.line)
        group.declarations.append(decl)
    return list(groups.values())
