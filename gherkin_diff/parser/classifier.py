"""Line classifier for scenario documents.

Assigns a structural tag to each non-blank line. Classification is total:
anything that is not a header or a step is tagged ``OTHER``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Optional

from .models import ClassifiedLine, LineKind


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Order matters only for readability; the prefixes do not overlap.
_HEADER_PREFIXES: tuple[tuple[str, LineKind], ...] = (
    ("Feature:", LineKind.FEATURE),
    ("Background:", LineKind.BACKGROUND),
    ("Rule:", LineKind.RULE),
    ("Scenario:", LineKind.SCENARIO),
    ("Example:", LineKind.SCENARIO),
)
_STEP_PATTERN = re.compile(r"^(Given|When|Then|And|But)\s+(.*)$", re.IGNORECASE)
_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` and ``\\r\\n`` only.

    Form feeds, U+2028 and the other separators ``str.splitlines`` breaks on
    stay inside their line.
    """
    return _LINE_BREAK.split(text)


def _match_header(stripped: str, ignore_case: bool) -> Optional[tuple[str, LineKind]]:
    for prefix, kind in _HEADER_PREFIXES:
        head = stripped[:len(prefix)]
        if head == prefix or (ignore_case and head.casefold() == prefix.casefold()):
            return prefix, kind
    return None


def classify_line(line: str, ignore_case: bool = False) -> ClassifiedLine:
    """Classify one non-blank line.

    Header keywords are matched by prefix and the title is the trimmed
    remainder. They are case-sensitive unless ``ignore_case`` is set. Step
    keywords are always matched case-insensitively and keep the casing they
    were written in.
    """
    stripped = line.strip()

    header = _match_header(stripped, ignore_case)
    if header is not None:
        prefix, kind = header
        return ClassifiedLine(
            kind=kind,
            raw=stripped,
            title=stripped[len(prefix):].strip(),
        )

    step_match = _STEP_PATTERN.match(stripped)
    if step_match:
        return ClassifiedLine(
            kind=LineKind.STEP,
            raw=stripped,
            keyword=step_match.group(1),
            text=step_match.group(2),
        )

    return ClassifiedLine(kind=LineKind.OTHER, raw=stripped)


def classify_lines(text: str, ignore_case: bool = False) -> Iterator[tuple[int, ClassifiedLine]]:
    """Yield ``(line_number, classified)`` for every non-blank line.

    Line numbers are 1-based and refer to the original text, so blank lines
    still count.
    """
    for number, line in enumerate(split_lines(text), start=1):
        if not line.strip():
            continue
        yield number, classify_line(line, ignore_case=ignore_case)
