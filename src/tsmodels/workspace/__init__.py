# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extractor configuration."""

from tsmodels.workspace.config import (
    CONFIG_FILE_NAME,
    ExtractorConfig,
    ExtractorConfigError,
    load_extractor_config,
    parse_extractor_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ExtractorConfig",
    "ExtractorConfigError",
    "load_extractor_config",
    "parse_extractor_config",
]
