"""CLI entry point for building the quiz site."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console

from quiz_site.core import config_templates
from quiz_site.core.config_templates import ConfigTemplateError
from quiz_site.core.logging import configure_logger

from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    SiteConfigError,
    load_config,
)
from .executor import build_site
from .report import render_summary

LOGGER_NAME = "quiz_site.build"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-site build",
        description=(
            "Render quiz JSON files listed in an index manifest into a static "
            "HTML site with shared CSS and JS assets."
        ),
        epilog=(
            "Run `quiz-site build config init` to scaffold a default "
            f"{CONFIG_FILENAME}."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to a TOML config file (defaults to ./{CONFIG_FILENAME}).",
    )
    parser.add_argument(
        "--index",
        type=Path,
        help="Index manifest listing quiz files (default: data/index.json).",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the quiz JSON files (default: data).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory receiving the generated site (default: dist).",
    )
    parser.add_argument(
        "--site-title",
        help="Title shown on the generated index page.",
    )
    parser.add_argument(
        "--raw-html",
        action="store_true",
        help="Insert quiz text into pages verbatim instead of escaping it.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the file logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Directory for JSON log files (default: .quiz-site/logs).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Echo debug-level log messages to stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args_list = list(argv) if argv is not None else list(sys.argv[1:])

    if args_list[:1] == ["config"]:
        return _handle_config(args_list[1:])

    parser = _build_parser()
    args = parser.parse_args(args_list)

    overrides = ConfigOverrides(
        index_path=args.index,
        data_dir=args.data_dir,
        output_dir=args.output_dir,
        site_title=args.site_title,
        escape_html=False if args.raw_html else None,
        log_level=args.log_level,
        log_dir=args.log_dir,
    )

    try:
        load_result = load_config(config_path=args.config, overrides=overrides)
    except SiteConfigError as exc:
        parser.error(str(exc))

    config = load_result.config
    logger, log_path = configure_logger(
        LOGGER_NAME,
        log_dir=config.log_dir,
        level=config.log_level,
        verbose=args.verbose,
    )
    logger.debug(
        "build CLI invoked",
        extra={
            "config_path": (
                str(load_result.config_path)
                if load_result.config_path is not None
                else None
            ),
        },
    )

    summary = build_site(config, logger=logger)

    render_summary(
        _make_console(),
        summary,
        output_dir=config.output_dir,
        log_path=log_path,
    )
    return summary.exit_code


def _make_console() -> Console:
    return Console()


def _handle_config(argv: Sequence[str]) -> int:
    parser = _build_config_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        return _handle_config_list()
    return _handle_config_init(args)


def _build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-site build config",
        description="Manage configuration files for the quiz site build.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List packaged config templates.")

    init_parser = subparsers.add_parser(
        "init",
        help=f"Write the default {CONFIG_FILENAME} template.",
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Destination for the config TOML (defaults to "
            f"./{CONFIG_FILENAME})."
        ),
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    return parser


def _handle_config_list() -> int:
    templates = list(config_templates.iter_templates())
    width = max(len(template.name) for template in templates)
    for template in templates:
        sys.stdout.write(
            f"{template.name.ljust(width)}  {template.description}\n"
        )
    return 0


def _handle_config_init(args: argparse.Namespace) -> int:
    target = _resolve_config_target(args)

    template = config_templates.get_template("build")
    try:
        written = template.write(target, overwrite=args.force)
    except ConfigTemplateError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    sys.stdout.write(f"Wrote build config to {written}\n")
    return 0


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is None:
        return Path.cwd() / CONFIG_FILENAME
    candidate = args.path.expanduser()
    if not candidate.is_absolute():
        candidate = (Path.cwd() / candidate).resolve()
    return candidate


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
