"""Scenario-level change detection.

Builds flat ``title -> block`` indexes from scenario text and reports which
scenarios were added, modified or removed between two versions.

Usage::

    from gherkin_diff.differ import diff_scenarios

    changes = diff_scenarios(old_text, new_text)
    print(changes.added, changes.modified, changes.removed)
"""

from gherkin_diff.differ.index import (
    AmbiguousScenarioError,
    ScenarioIndex,
    build_scenario_index,
    extract_scenario_titles,
    index_from_document,
)
from gherkin_diff.differ.engine import diff_indexes, diff_scenarios
from gherkin_diff.differ.changes import (
    build_change_entry,
    diff_markdown,
    merge_change_entries,
)

__all__ = [
    "AmbiguousScenarioError",
    "ScenarioIndex",
    "build_scenario_index",
    "extract_scenario_titles",
    "index_from_document",
    "diff_indexes",
    "diff_scenarios",
    "diff_markdown",
    "build_change_entry",
    "merge_change_entries",
]
