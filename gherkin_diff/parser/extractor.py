"""Extraction of scenario text from markdown documentation files.

Feature documents are markdown files whose scenarios live in fenced code
blocks tagged with the scenario language (```` ```gherkin ````). This module
isolates those blocks so the rest of the package only ever sees raw scenario
text.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .document import parse
from .models import Document, ParseMode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SourceEncodingError(ValueError):
    """Raised when a scenario file is not valid UTF-8."""

    def __init__(self, path: str | Path, cause: UnicodeDecodeError) -> None:
        self.path = str(path)
        super().__init__(
            f"Scenario file is not valid UTF-8: {path} (byte {cause.start}: {cause.reason})"
        )


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_LANGUAGE = "gherkin"
MARKDOWN_SUFFIXES: tuple[str, ...] = (".md", ".markdown")
BLOCK_SEPARATOR = "\n\n"


def _fence_pattern(language: str) -> re.Pattern[str]:
    return re.compile(
        r"```" + re.escape(language) + r"[ \t]*\r?\n(.*?)```",
        re.DOTALL,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_code_blocks(markdown: str, language: str = DEFAULT_LANGUAGE) -> list[str]:
    """Return the bodies of every fenced block tagged with ``language``.

    Blocks are returned in document order, without the fence lines.
    """
    return [match.group(1) for match in _fence_pattern(language).finditer(markdown)]


def extract_gherkin(markdown: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Join every scenario block in ``markdown`` into one text, blank-line separated."""
    return BLOCK_SEPARATOR.join(extract_code_blocks(markdown, language))


def parse_markdown(
    markdown: str,
    mode: ParseMode = ParseMode.PERMISSIVE,
    language: str = DEFAULT_LANGUAGE,
) -> list[Document]:
    """Parse each scenario block in ``markdown`` into its own ``Document``."""
    return [parse(block, mode=mode) for block in extract_code_blocks(markdown, language)]


def read_source(path: str | Path) -> str:
    """Read a text file as UTF-8.

    Raises:
        FileNotFoundError: If the file does not exist.
        SourceEncodingError: If the file is not valid UTF-8.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Scenario file not found: {path}")
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceEncodingError(path, exc) from exc


def is_markdown(path: str | Path, suffixes: tuple[str, ...] = MARKDOWN_SUFFIXES) -> bool:
    """Return ``True`` if ``path`` names a markdown file."""
    return Path(path).suffix.lower() in suffixes


def load_gherkin(
    path: str | Path,
    language: str = DEFAULT_LANGUAGE,
    suffixes: tuple[str, ...] = MARKDOWN_SUFFIXES,
) -> str:
    """Read ``path`` and return its scenario text.

    Markdown files are reduced to their joined scenario blocks; any other file
    is assumed to hold scenario text already.
    """
    content = read_source(path)
    if not is_markdown(path, suffixes):
        return content

    blocks = extract_code_blocks(content, language)
    logger.debug("Found %d %s block(s) in %s", len(blocks), language, path)
    return BLOCK_SEPARATOR.join(blocks)
