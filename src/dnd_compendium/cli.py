"""Command-line entry point.

Usage:
    dnd-compendium [spells|monsters|items|all] [--data DIR] [--out DIR]
                   [--log-level LEVEL] [--json-logs] [--fail-fast]

Options left unset fall back to the ``DND_COMPENDIUM_*`` settings.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from dnd_compendium import __version__
from dnd_compendium.core.config import Settings, get_settings
from dnd_compendium.core.exceptions import CompendiumError
from dnd_compendium.core.logging import configure_logging, get_logger
from dnd_compendium.models.enums import EntityKind
from dnd_compendium.pipeline.batch import convert_all


logger = get_logger(__name__)

TARGETS: dict[str, tuple[EntityKind, ...]] = {
    kind.output_directory: (kind,) for kind in EntityKind
}
TARGETS["all"] = tuple(EntityKind)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dnd-compendium",
        description="Convert 5etools spell, monster and item data into Markdown documents.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default="all",
        choices=list(TARGETS),
        help="Which kind of entity to convert (default: all)",
    )
    parser.add_argument("--data", type=Path, help="Root of the 5etools data directory")
    parser.add_argument("--out", type=Path, help="Directory receiving the documents")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Logging level")
    parser.add_argument(
        "--json-logs", action="store_true", default=None, help="Emit JSON log lines"
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first source file that fails",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Overlay command-line options on the loaded settings.

    Args:
        args: Parsed arguments; ``None`` means the option was not given.
        settings: Settings loaded from the environment.

    Returns:
        A settings copy with the given options applied.
    """
    overrides: dict[str, Any] = {
        "data_directory": args.data,
        "out_directory": args.out,
        "log_level": args.log_level,
        "json_logs": args.json_logs,
        "fail_fast": args.fail_fast,
    }
    return settings.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit status: 0 when every source file converted, 1 otherwise.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args, get_settings())
    except CompendiumError as exc:
        configure_logging()
        logger.error("Invalid configuration", error=str(exc))
        return 1

    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    try:
        report = convert_all(
            settings.data_directory,
            settings.out_directory,
            kinds=TARGETS[args.target],
            suffix=settings.output_suffix,
            fail_fast=settings.fail_fast,
        )
    except CompendiumError as exc:
        logger.error("Conversion aborted", error=str(exc))
        return 1

    for failure in report.failures:
        logger.error("Failed source file", file=str(failure.path), error=str(failure.error))
    return 0 if report.ok else 1


__all__ = ["build_parser", "main", "resolve_settings"]
