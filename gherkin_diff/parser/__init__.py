"""Scenario document parser.

Classifies scenario lines, folds them into a structured ``Document`` and
renders documents back to canonical text.

Usage::

    from gherkin_diff.parser import parse, serialize

    document = parse(text)
    print(document.feature_name, len(document.scenarios))
    print(serialize(document))
"""

from gherkin_diff.parser.models import (
    Background,
    ClassifiedLine,
    Document,
    LineKind,
    ParseMode,
    Rule,
    Scenario,
    Step,
    StepKeyword,
)
from gherkin_diff.parser.classifier import classify_line, classify_lines, split_lines
from gherkin_diff.parser.document import GherkinSyntaxError, parse
from gherkin_diff.parser.serializer import serialize, to_code_block
from gherkin_diff.parser.extractor import (
    SourceEncodingError,
    extract_code_blocks,
    extract_gherkin,
    load_gherkin,
    parse_markdown,
    read_source,
)

__all__ = [
    "SourceEncodingError",
    "parse",
    "serialize",
    "to_code_block",
    "classify_line",
    "classify_lines",
    "split_lines",
    "extract_code_blocks",
    "extract_gherkin",
    "load_gherkin",
    "parse_markdown",
    "read_source",
    "GherkinSyntaxError",
    "Background",
    "ClassifiedLine",
    "Document",
    "LineKind",
    "ParseMode",
    "Rule",
    "Scenario",
    "Step",
    "StepKeyword",
]
