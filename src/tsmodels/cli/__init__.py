# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for tsmodels."""
