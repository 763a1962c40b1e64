"""Per-file change entries for feature documents.

A change entry records, for one markdown feature file, whether the file is
new and which scenarios were added, modified or removed. Entries for the same
file can be merged as further edits arrive.
"""

from __future__ import annotations

from collections.abc import Iterable

from gherkin_diff.parser.extractor import DEFAULT_LANGUAGE, extract_gherkin
from gherkin_diff.parser.models import (
    ChangeType,
    FeatureChangeEntry,
    ParseMode,
    ScenarioChanges,
)

from .engine import diff_scenarios


def _union(*groups: Iterable[str]) -> list[str]:
    """Concatenate ``groups`` dropping repeats, keeping first-seen order."""
    return list(dict.fromkeys(title for group in groups for title in group))


def diff_markdown(
    old_markdown: str,
    new_markdown: str,
    mode: ParseMode = ParseMode.PERMISSIVE,
    language: str = DEFAULT_LANGUAGE,
) -> ScenarioChanges:
    """Diff the scenario blocks of two versions of a markdown document."""
    return diff_scenarios(
        extract_gherkin(old_markdown, language),
        extract_gherkin(new_markdown, language),
        mode=mode,
    )


def build_change_entry(
    path: str,
    old_markdown: str,
    new_markdown: str,
    mode: ParseMode = ParseMode.PERMISSIVE,
    language: str = DEFAULT_LANGUAGE,
) -> FeatureChangeEntry:
    """Build the change entry for one edit of a feature file.

    An empty ``old_markdown`` means the file did not exist before, in which
    case the entry is ``added`` and every scenario in it is listed as added.
    """
    changes = diff_markdown(old_markdown, new_markdown, mode=mode, language=language)
    change_type = ChangeType.ADDED if old_markdown == "" else ChangeType.MODIFIED

    return FeatureChangeEntry(
        path=path,
        change_type=change_type,
        scenarios_added=changes.added,
        scenarios_modified=changes.modified,
        scenarios_removed=changes.removed,
    )


def merge_change_entries(
    existing: FeatureChangeEntry,
    new_entry: FeatureChangeEntry,
) -> FeatureChangeEntry:
    """Combine two entries for the same file.

    Scenario lists are unioned without duplicates. The result is ``added`` if
    either entry is, otherwise ``modified``.
    """
    change_type = (
        ChangeType.ADDED
        if ChangeType.ADDED in (existing.change_type, new_entry.change_type)
        else ChangeType.MODIFIED
    )

    return FeatureChangeEntry(
        path=existing.path,
        change_type=change_type,
        scenarios_added=_union(existing.scenarios_added, new_entry.scenarios_added),
        scenarios_modified=_union(existing.scenarios_modified, new_entry.scenarios_modified),
        scenarios_removed=_union(existing.scenarios_removed, new_entry.scenarios_removed),
    )
