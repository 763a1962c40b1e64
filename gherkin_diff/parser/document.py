"""Document parser: folds classified lines into a ``Document``.

The parser is a small state machine. The currently open container is held in
one explicit state value (one of the ``_State`` variants below) rather than in
separate nullable "current scenario" / "current rule" variables, so every
transition replaces the whole state and closing a container is a single
operation that attaches it to its owner.

Two modes are supported:

* ``ParseMode.PERMISSIVE`` (default) never raises. Unrecognised lines and
  steps with no open container are dropped.
* ``ParseMode.STRICT`` raises :class:`GherkinSyntaxError` for those lines and
  for repeated Feature or Background headers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .classifier import classify_lines
from .models import (
    Background,
    ClassifiedLine,
    Document,
    LineKind,
    ParseMode,
    Rule,
    Scenario,
    Step,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GherkinSyntaxError(ValueError):
    """Raised in strict mode when a line cannot be placed in the document."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line!r}")


# ---------------------------------------------------------------------------
# Parser states
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _TopLevel:
    pass


@dataclass(frozen=True)
class _CollectingBackground:
    steps: tuple[Step, ...] = ()


@dataclass(frozen=True)
class _CollectingTopScenario:
    title: Optional[str]
    steps: tuple[Step, ...] = ()


@dataclass(frozen=True)
class _CollectingRule:
    title: str
    scenarios: tuple[Scenario, ...] = ()


@dataclass(frozen=True)
class _CollectingRuleScenario:
    rule_title: str
    rule_scenarios: tuple[Scenario, ...]
    title: Optional[str]
    steps: tuple[Step, ...] = ()


_State = Union[
    _TopLevel,
    _CollectingBackground,
    _CollectingTopScenario,
    _CollectingRule,
    _CollectingRuleScenario,
]


@dataclass
class _Draft:
    """Containers that have already been closed."""

    feature_name: Optional[str] = None
    feature_seen: bool = False
    background: Optional[Background] = None
    scenarios: list[Scenario] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    def to_document(self) -> Document:
        return Document(
            feature_name=self.feature_name,
            background=self.background,
            scenarios=self.scenarios,
            rules=self.rules,
        )


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _close(state: _State, draft: _Draft) -> None:
    """Attach whatever ``state`` holds open to its owner in ``draft``."""
    if isinstance(state, _TopLevel):
        return
    if isinstance(state, _CollectingBackground):
        draft.background = Background(steps=list(state.steps))
    elif isinstance(state, _CollectingTopScenario):
        draft.scenarios.append(Scenario(title=state.title, steps=list(state.steps)))
    elif isinstance(state, _CollectingRule):
        draft.rules.append(Rule(title=state.title, scenarios=list(state.scenarios)))
    elif isinstance(state, _CollectingRuleScenario):
        scenario = Scenario(title=state.title, steps=list(state.steps))
        draft.rules.append(
            Rule(title=state.rule_title, scenarios=[*state.rule_scenarios, scenario])
        )
    else:  # pragma: no cover
        raise TypeError(f"Unhandled parser state: {state!r}")


def _with_step(state: _State, step: Step) -> Optional[_State]:
    """Return ``state`` with ``step`` appended, or ``None`` if nothing is open."""
    if isinstance(state, _CollectingBackground):
        return _CollectingBackground(steps=(*state.steps, step))
    if isinstance(state, _CollectingTopScenario):
        return _CollectingTopScenario(title=state.title, steps=(*state.steps, step))
    if isinstance(state, _CollectingRuleScenario):
        return _CollectingRuleScenario(
            rule_title=state.rule_title,
            rule_scenarios=state.rule_scenarios,
            title=state.title,
            steps=(*state.steps, step),
        )
    return None


def _advance(
    state: _State,
    line: ClassifiedLine,
    line_number: int,
    draft: _Draft,
    mode: ParseMode,
) -> _State:
    """Apply one classified line and return the next state."""
    strict = mode == ParseMode.STRICT

    if line.kind == LineKind.FEATURE:
        if draft.feature_seen and strict:
            raise GherkinSyntaxError(line_number, line.raw, "duplicate Feature header")
        draft.feature_seen = True
        if draft.feature_name is None:
            draft.feature_name = line.title or None
        else:
            logger.debug("Ignoring Feature header on line %d", line_number)
        return state

    if line.kind == LineKind.BACKGROUND:
        if strict and (
            draft.background is not None or isinstance(state, _CollectingBackground)
        ):
            raise GherkinSyntaxError(line_number, line.raw, "duplicate Background header")
        _close(state, draft)
        return _CollectingBackground()

    if line.kind == LineKind.RULE:
        _close(state, draft)
        return _CollectingRule(title=line.title or "")

    if line.kind == LineKind.SCENARIO:
        title = line.title or None
        if isinstance(state, _CollectingRule):
            return _CollectingRuleScenario(
                rule_title=state.title,
                rule_scenarios=state.scenarios,
                title=title,
            )
        if isinstance(state, _CollectingRuleScenario):
            previous = Scenario(title=state.title, steps=list(state.steps))
            return _CollectingRuleScenario(
                rule_title=state.rule_title,
                rule_scenarios=(*state.rule_scenarios, previous),
                title=title,
            )
        _close(state, draft)
        return _CollectingTopScenario(title=title)

    if line.kind == LineKind.STEP:
        step = line.as_step()
        next_state = _with_step(state, step)
        if next_state is not None:
            return next_state
        if strict:
            raise GherkinSyntaxError(line_number, line.raw, "step outside of a scenario")
        logger.debug("Discarding step with no open scenario on line %d", line_number)
        return state

    # LineKind.OTHER
    if strict:
        raise GherkinSyntaxError(line_number, line.raw, "unrecognised line")
    logger.debug("Dropping unrecognised line %d: %r", line_number, line.raw)
    return state


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(text: str, mode: ParseMode = ParseMode.PERMISSIVE) -> Document:
    """Parse scenario text into a :class:`Document`.

    Args:
        text: Raw scenario text, already extracted from any surrounding
            markdown.
        mode: ``PERMISSIVE`` drops what it cannot place; ``STRICT`` raises.

    Returns:
        A freshly built ``Document``. Empty input yields an empty document.

    Raises:
        GherkinSyntaxError: Only in strict mode.
    """
    draft = _Draft()
    state: _State = _TopLevel()

    for line_number, line in classify_lines(text):
        state = _advance(state, line, line_number, draft, mode)

    _close(state, draft)
    return draft.to_document()
