"""gherkin-diff command line interface.

Usage::

    gherkin-diff parse login.feature.md
    gherkin-diff format login.feature
    gherkin-diff scenarios login.feature.md
    gherkin-diff diff old/login.feature.md new/login.feature.md --exit-code
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError
from rich.markup import escape

from gherkin_diff.config import Config
from gherkin_diff.differ import (
    AmbiguousScenarioError,
    build_scenario_index,
    diff_scenarios,
)
from gherkin_diff.parser import (
    Document,
    GherkinSyntaxError,
    ParseMode,
    SourceEncodingError,
    load_gherkin,
    parse,
    parse_markdown,
    read_source,
    serialize,
    split_lines,
    to_code_block,
)
from gherkin_diff.parser.extractor import is_markdown
from gherkin_diff.utils import (
    console,
    print_changes_table,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    setup_logging,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHANGES = 1
EXIT_ERROR = 2


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _emit(text: str) -> None:
    """Write plain text (scenario text, JSON) without Rich markup or wrapping."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(args.config) if args.config else Config.from_env()
    if args.strict:
        config = config.model_copy(update={"mode": ParseMode.STRICT})
    return config


def _suffixes(config: Config) -> tuple[str, ...]:
    return tuple(config.markdown_suffixes)


def _read_gherkin(path: str, config: Config) -> str:
    """Scenario text for indexing. In strict mode it must also parse cleanly."""
    if config.strict:
        _read_documents(path, config)
    return load_gherkin(path, language=config.fence_language, suffixes=_suffixes(config))


def _read_documents(path: str, config: Config) -> list[Document]:
    content = read_source(path)
    if is_markdown(path, _suffixes(config)):
        return parse_markdown(content, mode=config.mode, language=config.fence_language)
    return [parse(content, mode=config.mode)]


def _line_count(block: str) -> int:
    return len(split_lines(block)) if block else 0


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_parse(args: argparse.Namespace, config: Config) -> int:
    documents = _read_documents(args.file, config)
    payload = ",\n".join(doc.model_dump_json(indent=2) for doc in documents)
    _emit(f"[\n{payload}\n]" if payload else "[]")
    return EXIT_OK


def _cmd_format(args: argparse.Namespace, config: Config) -> int:
    documents = _read_documents(args.file, config)
    if is_markdown(args.file, _suffixes(config)):
        rendered = [
            to_code_block(doc, language=config.fence_language, indent=config.indent)
            for doc in documents
        ]
    else:
        rendered = [serialize(doc, indent=config.indent) for doc in documents]
    _emit("\n\n".join(rendered))
    return EXIT_OK


def _cmd_scenarios(args: argparse.Namespace, config: Config) -> int:
    index = build_scenario_index(_read_gherkin(args.file, config), mode=config.mode)
    if not index:
        print_warning(f"No scenarios found in {escape(args.file)}")
        return EXIT_OK

    print_summary_table(
        {title: f"{_line_count(block)} line(s)" for title, block in index.items()},
        title=f"Scenarios in {escape(args.file)}",
    )
    for title in index.duplicates:
        print_warning(f"Scenario title used more than once: {escape(title)}")
    return EXIT_OK


def _cmd_diff(args: argparse.Namespace, config: Config) -> int:
    changes = diff_scenarios(
        _read_gherkin(args.old, config),
        _read_gherkin(args.new, config),
        mode=config.mode,
    )
    logger.debug(
        "%d added, %d modified, %d removed",
        len(changes.added), len(changes.modified), len(changes.removed),
    )

    if args.json:
        _emit(changes.model_dump_json(indent=2))
    elif changes.has_changes:
        print_changes_table(changes, title=f"{escape(args.old)} -> {escape(args.new)}")
    else:
        print_success("No scenario changes.")

    if args.exit_code and changes.has_changes:
        return EXIT_CHANGES
    return EXIT_OK


_COMMANDS: dict[str, Callable[[argparse.Namespace, Config], int]] = {
    "parse": _cmd_parse,
    "format": _cmd_format,
    "scenarios": _cmd_scenarios,
    "diff": _cmd_diff,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gherkin-diff",
        description="Parse, format and diff Gherkin-style scenario documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  gherkin-diff parse login.feature.md\n"
            "  gherkin-diff format login.feature\n"
            "  gherkin-diff diff old.feature.md new.feature.md --json\n"
        ),
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="reject unrecognised lines, orphan steps, repeated headers and duplicate titles",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="log dropped lines and other debug details",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON configuration file (default: read GHERKIN_DIFF_* variables)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="print parsed documents as JSON")
    parse_cmd.add_argument("file", help="scenario or markdown file")

    format_cmd = subparsers.add_parser("format", help="print canonical scenario text")
    format_cmd.add_argument("file", help="scenario or markdown file")

    scenarios_cmd = subparsers.add_parser("scenarios", help="list scenario titles")
    scenarios_cmd.add_argument("file", help="scenario or markdown file")

    diff_cmd = subparsers.add_parser("diff", help="compare scenarios between two files")
    diff_cmd.add_argument("old", help="previous version")
    diff_cmd.add_argument("new", help="current version")
    diff_cmd.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="print the change report as JSON",
    )
    diff_cmd.add_argument(
        "--exit-code",
        action="store_true",
        default=False,
        help="exit with status 1 when scenarios changed",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point for ``gherkin-diff`` and ``python -m gherkin_diff``."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = _load_config(args)
        return _COMMANDS[args.command](args, config)
    except (
        OSError,
        UnicodeDecodeError,
        SourceEncodingError,
        GherkinSyntaxError,
        AmbiguousScenarioError,
        ValidationError,
    ) as exc:
        print_error(f"Error: {escape(str(exc))}")
        return EXIT_ERROR
