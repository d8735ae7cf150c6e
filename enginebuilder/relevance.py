"""Relevance decisions made for individual files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RelevanceStatus(Enum):
    """Outcome of a relevance assessment."""

    RELEVANT = "Relevant"
    NOT_RELEVANT = "NotRelevant"
    PARSE_ERROR = "ParseError"


@dataclass
class RelevanceDecision:
    """A model's verdict on whether a file matters for a problem."""

    message: str
    status: RelevanceStatus
    summary: str | None = None

    @classmethod
    def relevant(cls, message: str, summary: str) -> RelevanceDecision:
        """A decision that the file is relevant, with its summary."""
        return cls(message, RelevanceStatus.RELEVANT, summary)

    @classmethod
    def not_relevant(cls, message: str) -> RelevanceDecision:
        """A decision that the file is not relevant."""
        return cls(message, RelevanceStatus.NOT_RELEVANT)

    @classmethod
    def parse_error(cls, message: str) -> RelevanceDecision:
        """A decision recording that the model answer could not be parsed."""
        return cls(message, RelevanceStatus.PARSE_ERROR)

    def is_relevant(self) -> bool:
        """True when the status is relevant."""
        return self.status is RelevanceStatus.RELEVANT

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {"message": self.message, "status": self.status.value, "summary": self.summary}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RelevanceDecision:
        """Build from the JSON object form; a missing summary means none."""
        if not isinstance(data, dict):
            raise ValueError("relevance decision must be a JSON object")
        for name in ("message", "status"):
            if name not in data:
                raise ValueError(f"missing field `{name}`")
        message = data["message"]
        if not isinstance(message, str):
            raise ValueError("field `message` must be a string")
        try:
            status = RelevanceStatus(data["status"])
        except ValueError as exc:
            raise ValueError(f"unknown relevance status: {data['status']!r}") from exc
        summary = data.get("summary")
        if summary is not None and not isinstance(summary, str):
            raise ValueError("field `summary` must be a string or null")
        return cls(message, status, summary)