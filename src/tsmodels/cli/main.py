# Copyright 2026 tsmodels Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the tsmodels command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

import structlog
from yachalk import chalk

from tsmodels.compiler.artifact import serialize
from tsmodels.compiler.collector import DeclarationConflictError
from tsmodels.compiler.registry import parse
from tsmodels.compiler.resolver import TypeDepthError
from tsmodels.model.entities import ModelGraph
from tsmodels.syntax.source import ParseError
from tsmodels.views.cards import build_card
from tsmodels.workspace.config import (
    CONFIG_FILE_NAME,
    ExtractorConfig,
    ExtractorConfigError,
    load_extractor_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the tsmodels CLI."""
    parser = argparse.ArgumentParser(
        prog="tsmodels",
        description="tsmodels - extract a linked model graph from TypeScript declarations",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline events to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # extract subcommand
    extract_parser = subparsers.add_parser(
        "extract",
        help="Print the model graph as JSON",
        description="Extract interfaces, type aliases and classes and print the model graph as JSON.",
    )
    _add_source_arguments(extract_parser)
    extract_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output by this many spaces (default: compact)",
    )
    extract_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the JSON to this file instead of stdout",
    )

    # cards subcommand
    cards_parser = subparsers.add_parser(
        "cards",
        help="Print one text card per model",
        description="Print each model with its fields; references to other models are highlighted.",
    )
    _add_source_arguments(cards_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_source_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("file", help="TypeScript source file")
    subparser.add_argument(
        "--config",
        default=None,
        help=f"Extractor configuration file (default: {CONFIG_FILE_NAME} next to the source file, if present)",
    )


def _configure_logging(verbose: bool) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "extract":
        return _cmd_extract(args)
    if args.command == "cards":
        return _cmd_cards(args)
    return 0


def _cmd_extract(args: argparse.Namespace) -> int:
    """Handle the extract subcommand."""
    graph = _load_graph(args)
    if graph is None:
        return 1

    text = serialize(graph, indent=args.indent)
    if args.output is None:
        print(text)
        return 0
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    print(f"Wrote {len(graph)} model(s) to '{output}'.")
    return 0


def _cmd_cards(args: argparse.Namespace) -> int:
    """Handle the cards subcommand."""
    graph = _load_graph(args)
    if graph is None:
        return 1

    if len(graph) == 0:
        print("No models found.")
        return 0

    for model in graph:
        card = build_card(model)
        print(chalk.bold(chalk.blue(f"{card.title} ({card.kind})")))
        for row in card.rows:
            name = f"{row.name}?" if row.optional else row.name
            label = chalk.blue(row.type.text) if row.type.is_model else row.type.text
            print(f"  {name}: {label}")
        print()
    return 0


def _load_graph(args: argparse.Namespace) -> ModelGraph | None:
    """Read the source file and run extraction; report errors on stderr and return None."""
    source_path = Path(args.file)
    if not source_path.is_file():
        print(f"Error: file '{source_path}' does not exist.", file=sys.stderr)
        return None

    try:
        config = _load_config(args.config, source_path)
    except ExtractorConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    try:
        source = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read '{source_path}': {exc}", file=sys.stderr)
        return None

    try:
        return parse(source, config=config)
    except (ParseError, DeclarationConflictError, TypeDepthError) as exc:
        print(chalk.red(f"Error: {source_path}: {exc}"), file=sys.stderr)
        return None


def _load_config(explicit: str | None, source_path: Path) -> ExtractorConfig:
    if explicit is not None:
        return load_extractor_config(Path(explicit))
    candidate = source_path.parent / CONFIG_FILE_NAME
    if candidate.is_file():
        return load_extractor_config(candidate)
    return ExtractorConfig()


if __name__ == "__main__":
    main()
