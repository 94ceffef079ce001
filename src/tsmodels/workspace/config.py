# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the extractor configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".tsmodels.yaml"


class ExtractorConfigError(Exception):
    """Raised when an extractor configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class ExtractorConfig:
    """Options for one extraction pass.

    Attributes:
        max_type_depth: Maximum nesting of a type expression before the pass fails.
        include_heritage: Whether ``extends`` / ``implements`` targets count as dependencies.
    """

    max_type_depth: int = 64
    include_heritage: bool = True


def load_extractor_config(path: Path) -> ExtractorConfig:
    """Load and parse an extractor configuration file.

    Args:
        path: Path to the `.tsmodels.yaml` file.

    Returns:
        An ExtractorConfig populated from the file; absent keys keep their defaults.

    Raises:
        ExtractorConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ExtractorConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ExtractorConfigError(f"Cannot read config file: {exc}") from exc

    return parse_extractor_config(text, source_label=str(path))


def parse_extractor_config(text: str, source_label: str = "<string>") -> ExtractorConfig:
    """Parse configuration YAML text into an ExtractorConfig.

    An empty document yields the defaults.

    Raises:
        ExtractorConfigError: If the YAML is invalid or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ExtractorConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ExtractorConfig()
    if not isinstance(data, dict):
        raise ExtractorConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ExtractorConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    defaults = ExtractorConfig()
    max_type_depth = data.get("max-type-depth", defaults.max_type_depth)
    # bool is an int subclass
    if isinstance(max_type_depth, bool) or not isinstance(max_type_depth, int) or max_type_depth < 1:
        raise ExtractorConfigError(f"{source_label}: 'max-type-depth' must be a positive integer")

    include_heritage = data.get("include-heritage", defaults.include_heritage)
    if not isinstance(include_heritage, bool):
        raise ExtractorConfigError(f"{source_label}: 'include-heritage' must be a boolean")

    return ExtractorConfig(max_type_depth=max_type_depth, include_heritage=include_heritage)


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"max-type-depth", "include-heritage"})
