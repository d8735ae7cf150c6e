"""Ranked files and the context built from model rankings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _require(data: Any, name: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


def _str(data: Any, name: str) -> str:
    value = _require(data, name)
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


def _count(data: Any, name: str) -> int:
    value = _require(data, name)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{name}` must be a non-negative integer")
    return value


def _list(data: Any, name: str) -> list[Any]:
    value = _require(data, name)
    if not isinstance(value, list):
        raise ValueError(f"field `{name}` must be a list")
    return value


@dataclass
class RankedCodebaseFile:
    """A file in the final ranking with its token count."""

    path: str
    tokens: int

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {"path": self.path, "tokens": self.tokens}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RankedCodebaseFile:
        """Build from the JSON object form."""
        return cls(path=_str(data, "path"), tokens=_count(data, "tokens"))


@dataclass
class FileRanking:
    """One model answer: its full message and the ranked paths."""

    message: str
    ranking: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {"message": self.message, "ranking": list(self.ranking)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileRanking:
        """Build from the JSON object form."""
        ranking = _list(data, "ranking")
        if not all(isinstance(item, str) for item in ranking):
            raise ValueError("field `ranking` must be a list of strings")
        return cls(message=_str(data, "message"), ranking=list(ranking))


@dataclass
class RelevantFileDataForPrompt:
    """A relevant file as presented in a ranking prompt."""

    path: str
    summary: str
    token_count: int

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {"path": self.path, "summary": self.summary, "token_count": self.token_count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RelevantFileDataForPrompt:
        """Build from the JSON object form."""
        return cls(
            path=_str(data, "path"),
            summary=_str(data, "summary"),
            token_count=_count(data, "token_count"),
        )


@dataclass
class ProblemContext:
    """Model rankings, the merged file ranking and API usage records."""

    model_rankings: list[FileRanking] = field(default_factory=list)
    ranked_files: list[RankedCodebaseFile] = field(default_factory=list)
    prompt_caching_usages: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form."""
        return {
            "model_rankings": [r.to_dict() for r in self.model_rankings],
            "ranked_files": [f.to_dict() for f in self.ranked_files],
            "prompt_caching_usages": [dict(u) for u in self.prompt_caching_usages],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProblemContext:
        """Build from the JSON object form."""
        usages = _list(data, "prompt_caching_usages")
        if not all(isinstance(u, dict) for u in usages):
            raise ValueError("field `prompt_caching_usages` must be a list of objects")
        return cls(
            model_rankings=[FileRanking.from_dict(r) for r in _list(data, "model_rankings")],
            ranked_files=[RankedCodebaseFile.from_dict(f) for f in _list(data, "ranked_files")],
            prompt_caching_usages=[dict(u) for u in usages],
        )