"""Pydantic v2 models for the gherkin-diff scenario parser.

Defines the document tree produced by the parser, the tagged output of the
line classifier, and the change records produced by the scenario differ.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class StepKeyword(str, Enum):
    """Canonical spelling of a step keyword."""
    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"

    @classmethod
    def lookup(cls, keyword: str) -> "StepKeyword":
        """Resolve a keyword written in any casing, e.g. ``'GIVEN'``."""
        for member in cls:
            if member.value.lower() == keyword.lower():
                return member
        raise ValueError(f"Unknown step keyword: {keyword!r}")


class LineKind(str, Enum):
    """Structural tag assigned to one non-blank line."""
    FEATURE = "feature"
    BACKGROUND = "background"
    RULE = "rule"
    SCENARIO = "scenario"
    STEP = "step"
    OTHER = "other"


class ParseMode(str, Enum):
    """How the parser treats input it cannot place.

    ``permissive`` drops unrecognised lines and orphan steps silently.
    ``strict`` rejects them with an error.
    """
    PERMISSIVE = "permissive"
    STRICT = "strict"


class ChangeType(str, Enum):
    """Whether a tracked feature file is new or an edit of an existing one."""
    ADDED = "added"
    MODIFIED = "modified"


# ---------------------------------------------------------------------------
# Classifier Output
# ---------------------------------------------------------------------------

class ClassifiedLine(BaseModel):
    """A single trimmed line together with its structural tag."""
    kind: LineKind = Field(..., description="Structural tag")
    raw: str = Field(..., description="The trimmed source line")
    title: Optional[str] = Field(
        default=None, description="Header title for Feature/Background/Rule/Scenario lines"
    )
    keyword: Optional[str] = Field(
        default=None, description="Step keyword exactly as written"
    )
    text: Optional[str] = Field(default=None, description="Step text after the keyword")

    @property
    def is_header(self) -> bool:
        return self.kind in (
            LineKind.FEATURE,
            LineKind.BACKGROUND,
            LineKind.RULE,
            LineKind.SCENARIO,
        )

    def as_step(self) -> "Step":
        """Build the ``Step`` for a ``STEP`` line.

        Raises:
            ValueError: If the line is not a step.
        """
        if self.kind != LineKind.STEP or self.keyword is None or self.text is None:
            raise ValueError(f"Not a step line: {self.raw!r}")
        return Step(keyword=self.keyword, text=self.text)


# ---------------------------------------------------------------------------
# Document Tree
# ---------------------------------------------------------------------------

def _one_line(value: Any) -> Any:
    """Trim a title or step text, refusing embedded line breaks."""
    if not isinstance(value, str):
        return value
    if "\n" in value:
        raise ValueError("must not contain a line break")
    return value.strip()


def _optional_title(value: Any) -> Any:
    """Trim a header title; a blank title is no title."""
    value = _one_line(value)
    if value == "":
        return None
    return value


class Step(BaseModel):
    """One line of scenario behaviour, e.g. ``Given a registered user``."""
    keyword: str = Field(..., description="Given/When/Then/And/But, casing as written")
    text: str = Field(..., min_length=1, description="Free-form step text")

    @field_validator("keyword", "text", mode="before")
    @classmethod
    def _trim(cls, value: Any) -> Any:
        return _one_line(value)

    @field_validator("keyword")
    @classmethod
    def _known_keyword(cls, value: str) -> str:
        StepKeyword.lookup(value)
        return value

    @property
    def kind(self) -> StepKeyword:
        """The canonical keyword, regardless of how it was written."""
        return StepKeyword.lookup(self.keyword)

    def render(self) -> str:
        return f"{self.keyword} {self.text}"


class Scenario(BaseModel):
    """A named, ordered sequence of steps."""
    title: Optional[str] = Field(default=None, description="Scenario title")
    steps: list[Step] = Field(default_factory=list, description="Ordered steps")

    @field_validator("title", mode="before")
    @classmethod
    def _trim_title(cls, value: Any) -> Any:
        return _optional_title(value)


class Background(BaseModel):
    """Steps conceptually prefixed to every scenario in the document."""
    steps: list[Step] = Field(default_factory=list, description="Ordered steps")


class Rule(BaseModel):
    """A named group of scenarios, one level below the document root."""
    title: str = Field(default="", description="Rule title")
    scenarios: list[Scenario] = Field(default_factory=list, description="Rule scenarios")

    @field_validator("title", mode="before")
    @classmethod
    def _trim_title(cls, value: Any) -> Any:
        return _one_line(value)


class Document(BaseModel):
    """A parsed scenario document."""
    feature_name: Optional[str] = Field(default=None, description="Feature title")
    background: Optional[Background] = Field(default=None, description="Document background")
    scenarios: list[Scenario] = Field(
        default_factory=list, description="Top-level scenarios, in source order"
    )
    rules: list[Rule] = Field(default_factory=list, description="Rules, in source order")

    @field_validator("feature_name", mode="before")
    @classmethod
    def _trim_feature_name(cls, value: Any) -> Any:
        return _optional_title(value)

    def all_scenarios(self) -> Iterator[Scenario]:
        """Yield top-level scenarios followed by rule-nested ones."""
        yield from self.scenarios
        for rule in self.rules:
            yield from rule.scenarios

    @property
    def is_empty(self) -> bool:
        return (
            self.feature_name is None
            and self.background is None
            and not self.scenarios
            and not self.rules
        )


# ---------------------------------------------------------------------------
# Change Reports
# ---------------------------------------------------------------------------

class ScenarioChanges(BaseModel):
    """Scenario titles added, modified and removed between two versions."""
    added: list[str] = Field(default_factory=list, description="Titles only in the new version")
    modified: list[str] = Field(
        default_factory=list, description="Titles in both versions with different content"
    )
    removed: list[str] = Field(
        default_factory=list, description="Titles only in the old version"
    )

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.modified or self.removed)


class FeatureChangeEntry(BaseModel):
    """Change record for one feature file, with scenario-level detail."""
    path: str = Field(..., description="Path of the feature file relative to the project root")
    change_type: ChangeType = Field(..., description="'added' for new files, else 'modified'")
    scenarios_added: list[str] = Field(default_factory=list)
    scenarios_modified: list[str] = Field(default_factory=list)
    scenarios_removed: list[str] = Field(default_factory=list)
