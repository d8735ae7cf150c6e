"""Codebase files and file-pattern selections."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any


@dataclass
class CodebaseFile:
    """A file of the codebase with its path relative to the root."""

    path: str
    content: str

    def extension(self) -> str:
        """Return the text after the last dot of the path (the whole path if none)."""
        return self.path.split(".")[-1]

    def is_python(self) -> bool:
        """True for Python source files."""
        return self.extension() == "py"


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str] | None:
    """Translate a glob into a regular expression; None if the glob is invalid."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                return None
            if run == 2:
                if i > 0 and pattern[i - 1] != "/":
                    return None
                if j == n:
                    out.append(".*")
                    i = j
                elif pattern[j] == "/":
                    out.append("(?:.*/)?")
                    i = j + 1
                else:
                    return None
                continue
            out.append(".*")
            i = j
        elif char == "?":
            out.append(".")
            i += 1
        elif char == "[":
            j = i + 1
            negate = j < n and pattern[j] == "!"
            if negate:
                j += 1
            start = j
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                return None
            body = "".join(c if c == "-" else re.escape(c) for c in pattern[start:j])
            out.append(f"[{'^' if negate else ''}{body}]")
            i = j + 1
        else:
            out.append(re.escape(char))
            i += 1
    return re.compile("".join(out), re.DOTALL)


@dataclass
class FilePatternSelection:
    """File paths, directories (ending in '/') and globs chosen for a problem."""

    patterns: list[str] = field(default_factory=list)

    def matches(self, file_path: str) -> bool:
        """True when the path matches any pattern."""
        path = file_path.removeprefix("./")
        for raw in self.patterns:
            pattern = raw.removeprefix("./")
            if pattern == path:
                return True
            if pattern.endswith("/") and path.startswith(pattern):
                return True
            if "*" in pattern:
                regex = _compile_glob(pattern)
                if regex is not None and regex.fullmatch(path):
                    return True
        return False

    def to_dict(self) -> dict[str, list[str]]:
        """Return the JSON object form."""
        return {"patterns": list(self.patterns)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilePatternSelection:
        """Build a selection from its JSON object form."""
        if not isinstance(data, dict) or "patterns" not in data:
            raise ValueError("missing field `patterns`")
        patterns = data["patterns"]
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ValueError("field `patterns` must be a list of strings")
        return cls(list(patterns))