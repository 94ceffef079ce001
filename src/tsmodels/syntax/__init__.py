# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tree-sitter backed reader for TypeScript declarations."""

from tsmodels.syntax.source import Declaration, Member, MemberKind, ParseError, read_declarations

__all__ = [
    "read_declarations",
    "ParseError",
    "Declaration",
    "Member",
    "MemberKind",
]
