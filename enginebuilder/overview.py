"""Reasoning gathered from every pipeline stage, rendered as a document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_OPTIONAL_FIELDS = (
    "file_selection_reasoning",
    "ranking_reasoning",
    "setup_script_reasoning",
    "lint_script_reasoning",
    "test_script_reasoning",
    "single_test_script_reasoning",
    "dockerfile_reasoning",
)

_MAP_FIELDS = (
    "relevance_reasoning",
    "dockerfile_error_reasoning",
    "test_script_error_reasoning",
    "metadata",
)

_UNSIGNED = re.compile(r"\+?[0-9]+")
_UNSIGNED_LIMIT = 2**64


def _attempt_number(key: str) -> int:
    """Numeric value of an attempt key; anything that is not a count sorts as 0."""
    if not _UNSIGNED.fullmatch(key):
        return 0
    value = int(key)
    return value if value < _UNSIGNED_LIMIT else 0


def _default_metadata() -> dict[str, str]:
    return {"created_at": datetime.now(timezone.utc).isoformat()}


def _section(title: str, body: str) -> str:
    return f"{title}\n\n{body}\n\n"


def _attempts(heading: str, reasons: dict[str, str]) -> str:
    parts = [f"{heading}\n\n"]
    for attempt, reasoning in sorted(reasons.items(), key=lambda item: _attempt_number(item[0])):
        parts.append(_section(f"### Attempt {attempt}", reasoning))
    return "".join(parts)


@dataclass
class OverviewData:
    """The reasoning recorded at each stage for one problem."""

    problem_id: str
    problem_statement: str
    file_selection_reasoning: str | None = None
    relevance_reasoning: dict[str, str] = field(default_factory=dict)
    ranking_reasoning: str | None = None
    setup_script_reasoning: str | None = None
    lint_script_reasoning: str | None = None
    test_script_reasoning: str | None = None
    single_test_script_reasoning: str | None = None
    dockerfile_reasoning: str | None = None
    dockerfile_error_reasoning: dict[str, str] = field(default_factory=dict)
    test_script_error_reasoning: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=_default_metadata)

    def to_markdown(self) -> str:
        """Render the full overview as a Markdown document."""
        parts = [
            f"# Project Overview for {self.problem_id}\n\n",
            _section("## Problem Statement", self.problem_statement),
        ]

        if self.file_selection_reasoning is not None:
            parts.append(_section("## File Selection Strategy", self.file_selection_reasoning))

        if self.relevance_reasoning:
            parts.append("## File Relevance Analysis\n\n")
            for path, reasoning in self.relevance_reasoning.items():
                parts.append(_section(f"### {path}", reasoning))

        if self.ranking_reasoning is not None:
            parts.append(_section("## File Ranking Strategy", self.ranking_reasoning))

        parts.append("## Scripts Generation\n\n")
        for title, reasoning in (
            ("### Setup Script", self.setup_script_reasoning),
            ("### Lint Script", self.lint_script_reasoning),
            ("### Test Script", self.test_script_reasoning),
            ("### Single Test Script", self.single_test_script_reasoning),
        ):
            if reasoning is not None:
                parts.append(_section(title, reasoning))

        if self.dockerfile_reasoning is not None:
            parts.append(_section("## Dockerfile Generation", self.dockerfile_reasoning))

        if self.dockerfile_error_reasoning:
            parts.append(_attempts("## Dockerfile Error Fixes", self.dockerfile_error_reasoning))

        if self.test_script_error_reasoning:
            parts.append(
                _attempts("## Test Script Error Fixes", self.test_script_error_reasoning)
            )

        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        data: dict[str, Any] = {
            "problem_id": self.problem_id,
            "problem_statement": self.problem_statement,
        }
        for name in _OPTIONAL_FIELDS:
            data[name] = getattr(self, name)
        for name in _MAP_FIELDS:
            data[name] = dict(getattr(self, name))
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OverviewData:
        """Build from the JSON object form; absent optional reasoning means none."""
        if not isinstance(data, dict):
            raise ValueError("overview must be a JSON object")
        values: dict[str, Any] = {}
        for name in ("problem_id", "problem_statement"):
            if name not in data:
                raise ValueError(f"missing field `{name}`")
            if not isinstance(data[name], str):
                raise ValueError(f"field `{name}` must be a string")
            values[name] = data[name]
        for name in _OPTIONAL_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"field `{name}` must be a string or null")
            values[name] = value
        for name in _MAP_FIELDS:
            if name not in data:
                raise ValueError(f"missing field `{name}`")
            mapping = data[name]
            if not isinstance(mapping, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in mapping.items()
            ):
                raise ValueError(f"field `{name}` must map strings to strings")
            values[name] = dict(mapping)
        return cls(**values)