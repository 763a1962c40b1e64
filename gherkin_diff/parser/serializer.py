"""Canonical text rendering of a parsed ``Document``."""

from __future__ import annotations

from .models import Document, Scenario

DEFAULT_INDENT = "  "


def _header(keyword: str, title: str | None) -> str:
    return f"{keyword}: {title}" if title else f"{keyword}:"


def _scenario_lines(scenario: Scenario, keyword: str, depth: int, indent: str) -> list[str]:
    lines = [indent * depth + _header(keyword, scenario.title)]
    lines.extend(indent * (depth + 1) + step.render() for step in scenario.steps)
    lines.append("")
    return lines


def serialize(document: Document, indent: str = DEFAULT_INDENT) -> str:
    """Render ``document`` as canonical scenario text.

    Layout: the Feature line, the Background block, every top-level scenario,
    then every rule with its scenarios written as ``Example:`` one level in.
    Original indentation and header synonyms are not preserved, so a second
    parse/serialize cycle always reproduces the same text.
    """
    lines: list[str] = []

    if document.feature_name is not None:
        lines.append(_header("Feature", document.feature_name))
        lines.append("")

    if document.background is not None:
        lines.append("Background:")
        lines.extend(indent + step.render() for step in document.background.steps)
        lines.append("")

    for scenario in document.scenarios:
        lines.extend(_scenario_lines(scenario, "Scenario", 0, indent))

    for rule in document.rules:
        lines.append(_header("Rule", rule.title))
        for scenario in rule.scenarios:
            lines.extend(_scenario_lines(scenario, "Example", 1, indent))

    return "\n".join(lines).rstrip()


def to_code_block(
    document: Document,
    language: str = "gherkin",
    indent: str = DEFAULT_INDENT,
) -> str:
    """Render ``document`` wrapped in a fenced markdown code block."""
    return f"```{language}\n{serialize(document, indent=indent)}\n```"
