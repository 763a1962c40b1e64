"""Tests for per-file change entries (changes module).

Covers:
- Diffing markdown documents through their scenario blocks
- Change type of new versus edited files
- Merging entries for the same file
"""

from __future__ import annotations

import pytest

from gherkin_diff.differ.changes import (
    build_change_entry,
    diff_markdown,
    merge_change_entries,
)
from gherkin_diff.parser.models import ChangeType, FeatureChangeEntry


pytestmark = pytest.mark.unit


def _markdown(*blocks: str, prose: str = "Intro text.") -> str:
    fenced = "\n\n".join(f"```gherkin\n{block}\n```" for block in blocks)
    return f"# Feature doc\n\n{prose}\n\n{fenced}\n"


# ---------------------------------------------------------------------------
# diff_markdown
# ---------------------------------------------------------------------------


class TestDiffMarkdown:
    def test_prose_changes_are_ignored(self):
        old = _markdown("Scenario: A\n  Given x", prose="Old wording.")
        new = _markdown("Scenario: A\n  Given x", prose="New wording.")
        assert not diff_markdown(old, new).has_changes

    def test_scenarios_across_blocks(self):
        old = _markdown("Scenario: A\n  Given x", "Scenario: B\n  Given y")
        new = _markdown("Scenario: A\n  Given changed", "Scenario: C\n  Given z")
        changes = diff_markdown(old, new)
        assert changes.added == ["C"]
        assert changes.modified == ["A"]
        assert changes.removed == ["B"]

    def test_other_languages_are_ignored(self):
        old = _markdown("Scenario: A\n  Given x")
        new = old + "\n```text\nScenario: Not real\n```\n"
        assert not diff_markdown(old, new).has_changes

    def test_custom_language(self):
        new = "```feature\nScenario: A\n  Given x\n```"
        assert diff_markdown("", new, language="feature").added == ["A"]

    def test_markdown_without_blocks(self):
        assert not diff_markdown("# Nothing", "# Still nothing").has_changes


# ---------------------------------------------------------------------------
# build_change_entry
# ---------------------------------------------------------------------------


class TestBuildChangeEntry:
    def test_new_file_is_added(self, feature_markdown: str):
        entry = build_change_entry("features/login.feature.md", "", feature_markdown)
        assert entry.path == "features/login.feature.md"
        assert entry.change_type == ChangeType.ADDED
        assert entry.scenarios_added == ["Successful login", "Failed login"]
        assert entry.scenarios_modified == []
        assert entry.scenarios_removed == []

    def test_edited_file_is_modified(self, feature_markdown: str):
        edited = feature_markdown.replace("an error message", "a lockout warning")
        entry = build_change_entry("login.feature.md", feature_markdown, edited)
        assert entry.change_type == ChangeType.MODIFIED
        assert entry.scenarios_modified == ["Failed login"]
        assert entry.scenarios_added == []

    def test_unchanged_file_is_modified_with_no_scenarios(self, feature_markdown: str):
        entry = build_change_entry("login.feature.md", feature_markdown, feature_markdown)
        assert entry.change_type == ChangeType.MODIFIED
        assert entry.scenarios_added == entry.scenarios_modified == entry.scenarios_removed == []

    def test_old_text_without_scenarios_is_still_modified(self, feature_markdown: str):
        entry = build_change_entry("login.feature.md", "# Draft\n", feature_markdown)
        assert entry.change_type == ChangeType.MODIFIED
        assert entry.scenarios_added == ["Successful login", "Failed login"]

    def test_entry_serialises(self, feature_markdown: str):
        entry = build_change_entry("login.feature.md", "", feature_markdown)
        data = entry.model_dump(mode="json")
        assert data["change_type"] == "added"
        assert data["scenarios_added"] == ["Successful login", "Failed login"]


# ---------------------------------------------------------------------------
# merge_change_entries
# ---------------------------------------------------------------------------


class TestMergeChangeEntries:
    def test_unions_without_duplicates(self):
        first = FeatureChangeEntry(
            path="a.feature.md",
            change_type=ChangeType.MODIFIED,
            scenarios_added=["A"],
            scenarios_modified=["M"],
        )
        second = FeatureChangeEntry(
            path="a.feature.md",
            change_type=ChangeType.MODIFIED,
            scenarios_added=["A", "B"],
            scenarios_removed=["R"],
        )
        merged = merge_change_entries(first, second)
        assert merged.scenarios_added == ["A", "B"]
        assert merged.scenarios_modified == ["M"]
        assert merged.scenarios_removed == ["R"]
        assert merged.change_type == ChangeType.MODIFIED

    def test_added_wins(self):
        added = FeatureChangeEntry(path="a.feature.md", change_type=ChangeType.ADDED)
        modified = FeatureChangeEntry(path="a.feature.md", change_type=ChangeType.MODIFIED)
        assert merge_change_entries(added, modified).change_type == ChangeType.ADDED
        assert merge_change_entries(modified, added).change_type == ChangeType.ADDED

    def test_keeps_existing_path(self):
        first = FeatureChangeEntry(path="a.feature.md", change_type=ChangeType.MODIFIED)
        second = FeatureChangeEntry(path="b.feature.md", change_type=ChangeType.MODIFIED)
        assert merge_change_entries(first, second).path == "a.feature.md"

    def test_inputs_are_not_mutated(self):
        first = FeatureChangeEntry(
            path="a.feature.md", change_type=ChangeType.MODIFIED, scenarios_added=["A"]
        )
        second = FeatureChangeEntry(
            path="a.feature.md", change_type=ChangeType.MODIFIED, scenarios_added=["B"]
        )
        merge_change_entries(first, second)
        assert first.scenarios_added == ["A"]
        assert second.scenarios_added == ["B"]

    def test_merging_successive_edits(self, feature_markdown: str):
        created = build_change_entry("login.feature.md", "", feature_markdown)
        edited = feature_markdown.replace("an error message", "a lockout warning")
        later = build_change_entry("login.feature.md", feature_markdown, edited)
        merged = merge_change_entries(created, later)
        assert merged.change_type == ChangeType.ADDED
        assert merged.scenarios_added == ["Successful login", "Failed login"]
        assert merged.scenarios_modified == ["Failed login"]
