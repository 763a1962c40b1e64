"""Scenario diff engine.

Compares two scenario indexes by title. A scenario's title is its only
identity: content is compared as exact strings after trimming, and there is
no similarity matching, so a renamed scenario is reported as one removal plus
one addition.
"""

from __future__ import annotations

from collections.abc import Mapping

from gherkin_diff.parser.models import ParseMode, ScenarioChanges

from .index import build_scenario_index


def diff_indexes(
    old_index: Mapping[str, str],
    new_index: Mapping[str, str],
) -> ScenarioChanges:
    """Compare two ``title -> block`` mappings.

    ``added`` and ``modified`` follow the order of ``new_index``; ``removed``
    follows the order of ``old_index``.
    """
    added: list[str] = []
    modified: list[str] = []

    for title, block in new_index.items():
        if title not in old_index:
            added.append(title)
        elif old_index[title].strip() != block.strip():
            modified.append(title)

    removed = [title for title in old_index if title not in new_index]

    return ScenarioChanges(added=added, modified=modified, removed=removed)


def diff_scenarios(
    old_text: str,
    new_text: str,
    mode: ParseMode = ParseMode.PERMISSIVE,
) -> ScenarioChanges:
    """Report scenarios added, modified and removed between two texts.

    Raises:
        AmbiguousScenarioError: In strict mode, when either text repeats a
            scenario title.
    """
    return diff_indexes(
        build_scenario_index(old_text, mode=mode),
        build_scenario_index(new_text, mode=mode),
    )
