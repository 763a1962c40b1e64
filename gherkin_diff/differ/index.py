"""Scenario index: a flat ``title -> content block`` mapping used for diffing.

The index is built by its own pass over the raw text rather than from a
parsed ``Document``, so the block for a scenario contains every line written
under its header (comments, tables and doc-strings included), not only the
steps the parser understands. Headers are matched without regard to case, so
a lower-case ``scenario:`` line starts a block of its own. Rule nesting is
ignored: every titled scenario lands in one namespace.

A title that appears more than once keeps the block of its last occurrence.
The collision is not silent: the title is listed in
:attr:`ScenarioIndex.duplicates`, and strict mode refuses to build the index.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional

from gherkin_diff.parser.classifier import classify_line, classify_lines, split_lines
from gherkin_diff.parser.models import Document, LineKind, ParseMode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AmbiguousScenarioError(ValueError):
    """Raised in strict mode when a scenario title is used more than once."""

    def __init__(self, titles: Iterable[str]) -> None:
        self.titles = list(titles)
        super().__init__(
            "Duplicate scenario title(s): " + ", ".join(repr(t) for t in self.titles)
        )


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


class ScenarioIndex(Mapping[str, str]):
    """Read-only mapping of scenario title to its trimmed content block.

    Iteration follows first appearance in the source. Equality with any other
    mapping compares titles and blocks only.
    """

    __slots__ = ("_blocks", "duplicates")

    def __init__(
        self,
        blocks: Optional[Mapping[str, str]] = None,
        duplicates: Optional[Iterable[str]] = None,
    ) -> None:
        self._blocks: dict[str, str] = dict(blocks or {})
        self.duplicates: list[str] = list(duplicates or [])

    def __getitem__(self, title: str) -> str:
        return self._blocks[title]

    def __iter__(self) -> Iterator[str]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"ScenarioIndex({self._blocks!r}, duplicates={self.duplicates!r})"

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.duplicates)


def _record(
    blocks: dict[str, str],
    duplicates: list[str],
    title: str,
    block: str,
) -> None:
    if title in blocks and title not in duplicates:
        logger.debug("Scenario title %r appears more than once; keeping the last", title)
        duplicates.append(title)
    blocks[title] = block


def _finish(blocks: dict[str, str], duplicates: list[str], mode: ParseMode) -> ScenarioIndex:
    if duplicates and mode == ParseMode.STRICT:
        raise AmbiguousScenarioError(duplicates)
    return ScenarioIndex(blocks, duplicates)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_scenario_index(
    text: str,
    mode: ParseMode = ParseMode.PERMISSIVE,
) -> ScenarioIndex:
    """Scan raw scenario text and map each scenario title to its block.

    Collection for a scenario starts after its ``Scenario:``/``Example:``
    header and stops at the next Feature, Background, Rule, Scenario or
    Example header, or at the end of the text, matching header keywords in
    any case. The collected lines are joined with newlines and trimmed.

    Raises:
        AmbiguousScenarioError: In strict mode, when a title repeats.
    """
    blocks: dict[str, str] = {}
    duplicates: list[str] = []
    current_title: Optional[str] = None
    current_lines: list[str] = []

    def _flush() -> None:
        nonlocal current_title, current_lines
        if current_title is not None:
            _record(blocks, duplicates, current_title, "\n".join(current_lines).strip())
        current_title = None
        current_lines = []

    for line in split_lines(text):
        if line.strip():
            classified = classify_line(line, ignore_case=True)
            if classified.is_header:
                _flush()
                if classified.kind == LineKind.SCENARIO:
                    if classified.title:
                        current_title = classified.title
                    else:
                        logger.debug("Skipping untitled scenario header: %r", classified.raw)
                continue

        if current_title is not None:
            current_lines.append(line)

    _flush()
    return _finish(blocks, duplicates, mode)


def index_from_document(
    document: Document,
    mode: ParseMode = ParseMode.PERMISSIVE,
) -> ScenarioIndex:
    """Project a parsed ``Document`` onto a scenario index.

    Each block is the scenario's steps, one per line, exactly as the parser
    recorded them. Untitled scenarios are skipped since they have no key.

    Raises:
        AmbiguousScenarioError: In strict mode, when a title repeats.
    """
    blocks: dict[str, str] = {}
    duplicates: list[str] = []

    for scenario in document.all_scenarios():
        if not scenario.title:
            continue
        block = "\n".join(step.render() for step in scenario.steps).strip()
        _record(blocks, duplicates, scenario.title, block)

    return _finish(blocks, duplicates, mode)


def extract_scenario_titles(text: str) -> list[str]:
    """List every titled scenario header in order of appearance.

    Headers match in any case, as in the index. Unlike the index, repeated
    titles are listed each time they occur.
    """
    return [
        classified.title
        for _, classified in classify_lines(text, ignore_case=True)
        if classified.kind == LineKind.SCENARIO and classified.title
    ]
