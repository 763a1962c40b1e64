"""gherkin-diff configuration.

Typed settings shared by the CLI and any embedding tool. Settings are a
Pydantic v2 model so they are validated at construction time and can be
serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from gherkin_diff.parser.models import ParseMode


class Config(BaseModel):
    """Global gherkin-diff configuration.

    Instances are typically created once by the CLI entry point, optionally
    loaded from a JSON file, and then passed through to the parser and differ.
    """

    mode: ParseMode = Field(
        default=ParseMode.PERMISSIVE,
        description="'permissive' drops unknown lines, 'strict' rejects them",
    )
    fence_language: str = Field(
        default="gherkin",
        min_length=1,
        description="Info string of the markdown code blocks that hold scenarios",
    )
    indent: str = Field(default="  ", description="One indentation level in serialized output")
    markdown_suffixes: list[str] = Field(
        default=[".md", ".markdown"],
        description="File suffixes treated as markdown documents",
    )

    @field_validator("indent")
    @classmethod
    def _whitespace_indent(cls, value: str) -> str:
        if not value or value.strip():
            raise ValueError("indent must be a non-empty run of whitespace")
        return value

    @field_validator("markdown_suffixes")
    @classmethod
    def _normalise_suffixes(cls, value: list[str]) -> list[str]:
        return [s.lower() if s.startswith(".") else f".{s.lower()}" for s in value]

    @property
    def strict(self) -> bool:
        return self.mode == ParseMode.STRICT

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GHERKIN_DIFF_MODE, GHERKIN_DIFF_FENCE_LANGUAGE, GHERKIN_DIFF_INDENT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GHERKIN_DIFF_MODE"):
            kwargs["mode"] = os.environ["GHERKIN_DIFF_MODE"].strip().lower()
        if os.environ.get("GHERKIN_DIFF_FENCE_LANGUAGE"):
            kwargs["fence_language"] = os.environ["GHERKIN_DIFF_FENCE_LANGUAGE"].strip()
        if os.environ.get("GHERKIN_DIFF_INDENT"):
            kwargs["indent"] = os.environ["GHERKIN_DIFF_INDENT"]

        return cls(**kwargs)
