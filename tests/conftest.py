"""Shared pytest fixtures for the gherkin-diff test suite.

Provides reusable fixtures for:
- Sample scenario documents (plain, with rules, with a background)
- A markdown feature document with embedded scenario blocks
- Files on disk for CLI tests
- Restoring root logging after CLI runs
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Scenario text
# ---------------------------------------------------------------------------

@pytest.fixture
def login_feature() -> str:
    """A feature with a background and two top-level scenarios."""
    return textwrap.dedent("""\
        Feature: User Login

        Background:
          Given the login page is open

        Scenario: Successful login
          Given a registered user
          When they enter valid credentials
          Then they should be logged in

        Scenario: Failed login
          Given a registered user
          When they enter an invalid password
          Then they should see an error message
    """)


@pytest.fixture
def rules_feature() -> str:
    """A feature mixing a top-level scenario and two rules."""
    return textwrap.dedent("""\
        Feature: Checkout

        Scenario: Empty cart
          Given an empty cart
          Then the checkout button is disabled

        Rule: Discounts apply once
          Example: Single discount code
            Given a cart worth 100
            When the code SAVE10 is applied
            Then the total is 90

          Example: Second code rejected
            Given a cart with code SAVE10 applied
            When the code SAVE20 is applied
            Then an error is shown

        Rule: Shipping is free above 50
          Example: Free shipping
            Given a cart worth 60
            Then shipping costs 0
    """)


@pytest.fixture
def feature_markdown(login_feature: str) -> str:
    """A markdown feature document with one scenario block and prose around it."""
    return (
        "---\n"
        "feature_id: user-login\n"
        "---\n"
        "\n"
        "# User Login\n"
        "\n"
        "Users sign in with email and password.\n"
        "\n"
        "```gherkin\n"
        f"{login_feature}"
        "```\n"
        "\n"
        "Notes: lockout rules live in the security guide.\n"
    )


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

@pytest.fixture
def write_file(tmp_path: Path):
    """Factory writing ``content`` to ``tmp_path / name`` and returning the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
