"""gherkin-diff: parse, format and diff Gherkin-style scenario documents.

Usage::

    from gherkin_diff import parse, serialize, diff_scenarios

    document = parse(text)
    changes = diff_scenarios(old_text, new_text)
    print(changes.added, changes.modified, changes.removed)
"""

from gherkin_diff.parser import (
    Background,
    Document,
    GherkinSyntaxError,
    ParseMode,
    Rule,
    Scenario,
    SourceEncodingError,
    Step,
    StepKeyword,
    extract_code_blocks,
    parse,
    parse_markdown,
    serialize,
    to_code_block,
)
from gherkin_diff.parser.models import ChangeType, FeatureChangeEntry, ScenarioChanges
from gherkin_diff.differ import (
    AmbiguousScenarioError,
    ScenarioIndex,
    build_change_entry,
    build_scenario_index,
    diff_indexes,
    diff_scenarios,
    index_from_document,
    merge_change_entries,
)

__all__ = [
    "parse",
    "serialize",
    "to_code_block",
    "extract_code_blocks",
    "parse_markdown",
    "build_scenario_index",
    "index_from_document",
    "diff_indexes",
    "diff_scenarios",
    "build_change_entry",
    "merge_change_entries",
    "AmbiguousScenarioError",
    "GherkinSyntaxError",
    "SourceEncodingError",
    "ScenarioIndex",
    "ScenarioChanges",
    "ChangeType",
    "FeatureChangeEntry",
    "ParseMode",
    "Background",
    "Document",
    "Rule",
    "Scenario",
    "Step",
    "StepKeyword",
]
