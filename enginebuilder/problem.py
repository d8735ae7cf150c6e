"""A problem to solve against a codebase, with scanning and tree rendering."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any

from .exclusion import ExclusionConfig
from .files import CodebaseFile

logger = logging.getLogger(__name__)

PathArg = str | os.PathLike

_BRANCH = "├── "
_LAST_BRANCH = "└── "


def _translate(glob: str) -> str:
    """Translate one gitignore glob into a regular expression body."""
    out: list[str] = []
    i = 0
    n = len(glob)
    while i < n:
        char = glob[i]
        if char == "\\":
            if i + 1 >= n:
                raise ValueError(f"dangling escape in pattern {glob!r}")
            out.append(re.escape(glob[i + 1]))
            i += 2
        elif char == "*":
            j = i
            while j < n and glob[j] == "*":
                j += 1
            at_boundary = i == 0 or glob[i - 1] == "/"
            if j - i >= 2 and at_boundary and (j == n or glob[j] == "/"):
                if j == n:
                    out.append(".*")
                    i = j
                else:
                    out.append("(?:.*/)?")
                    i = j + 1
            else:
                out.append("[^/]*")
                i = j
        elif char == "?":
            out.append("[^/]")
            i += 1
        elif char == "[":
            j = i + 1
            negate = j < n and glob[j] in "!^"
            if negate:
                j += 1
            start = j
            if j < n and glob[j] == "]":
                j += 1
            while j < n and glob[j] != "]":
                j += 1
            if j >= n:
                raise ValueError(f"unclosed character class in pattern {glob!r}")
            body = "".join(c if c == "-" else re.escape(c) for c in glob[start:j])
            out.append(f"[^/{body}]" if negate else f"[{body}]")
            i = j + 1
        else:
            out.append(re.escape(char))
            i += 1
    return "".join(out)


@dataclass(frozen=True)
class _Rule:
    regex: re.Pattern[str]
    negated: bool
    dir_only: bool


def _parse_rule(line: str) -> _Rule | None:
    if not line or line.startswith("#"):
        return None
    stripped = line.rstrip(" ")
    if stripped.endswith("\\") and len(stripped) < len(line):
        stripped += " "
    line = stripped
    if not line:
        return None

    negated = False
    if line.startswith("!"):
        negated = True
        line = line[1:]
    elif line.startswith(("\\!", "\\#")):
        line = line[1:]

    dir_only = line.endswith("/") and not line.endswith("\\/")
    if dir_only:
        line = line[:-1]
    if not line:
        return None

    anchored = "/" in line
    if line.startswith("/"):
        line = line[1:]
    body = _translate(line)
    pattern = body if anchored else f"(?:.*/)?{body}"
    return _Rule(re.compile(pattern, re.DOTALL), negated, dir_only)


@dataclass
class GitignoreMatcher:
    """Patterns of one .gitignore file, matched relative to a root directory."""

    root: PurePath
    rules: list[_Rule] = field(default_factory=list)

    @classmethod
    def from_file(cls, path: PathArg, root: PathArg) -> GitignoreMatcher:
        """Read the patterns of a .gitignore file; invalid globs raise ValueError."""
        try:
            with open(path, encoding="utf-8") as handle:
                content = handle.read()
        except OSError as exc:
            raise OSError(
                exc.errno, f"Failed to add gitignore file: {os.fspath(path)}: {exc.strerror}"
            ) from exc
        rules = []
        for line in content.splitlines():
            rule = _parse_rule(line)
            if rule is not None:
                rules.append(rule)
        return cls(PurePath(os.fspath(root)), rules)

    def _relative(self, path: PathArg) -> str:
        candidate = PurePath(os.fspath(path))
        try:
            candidate = candidate.relative_to(self.root)
        except ValueError:
            pass
        text = candidate.as_posix()
        while text.startswith("./"):
            text = text[2:]
        text = text.lstrip("/")
        return "" if text == "." else text

    def matched(self, path: PathArg, is_dir: bool) -> bool:
        """True when the path itself (not its parents) is ignored; the last matching rule wins."""
        text = self._relative(path)
        if not text:
            return False
        for rule in reversed(self.rules):
            if rule.dir_only and not is_dir:
                continue
            if rule.regex.fullmatch(text):
                return not rule.negated
        return False


def _ancestor_names(path: PurePath) -> Iterator[str]:
    for ancestor in (path, *path.parents):
        name = ancestor.name
        if name and name != "..":
            yield name


def _walk(root: str) -> Iterator[tuple[str, bool]]:
    """Yield (path, is_dir) for the root and everything below it, following links."""
    yield root, True
    visited: set[str] = set()

    def _on_error(exc: OSError) -> None:
        logger.info("Error accessing path: %s", exc)

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_on_error):
        real = os.path.realpath(dirpath)
        if real in visited:
            dirnames.clear()
            continue
        visited.add(real)
        dirnames.sort()
        for name in dirnames:
            yield os.path.join(dirpath, name), True
        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            if os.path.isfile(full):
                yield full, False
            elif not os.path.exists(full):
                logger.info("Error accessing path: %s", full)


def _relative_posix(path: str, root: str) -> str:
    return PurePath(path).relative_to(PurePath(root)).as_posix()


@dataclass
class SWEBenchProblem:
    """A problem statement tied to a codebase whose files can be scanned and read."""

    id: str
    problem_statement: str
    metadata: dict[str, str] = field(default_factory=dict)
    exclusion_config: ExclusionConfig = field(default_factory=ExclusionConfig, compare=False)
    _codebase_path: Path | None = field(default=None, init=False, repr=False, compare=False)
    _file_cache: dict[str, CodebaseFile] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _cached_paths: list[str] = field(default_factory=list, init=False, repr=False, compare=False)
    _gitignore: GitignoreMatcher | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def codebase_path(self) -> Path | None:
        """Root directory of the codebase, if set."""
        return self._codebase_path

    def with_codebase_path(self, path: PathArg) -> SWEBenchProblem:
        """Set the codebase root and return the problem."""
        self._codebase_path = Path(os.fspath(path))
        return self

    def with_exclusion_config(self, config: ExclusionConfig) -> SWEBenchProblem:
        """Set the exclusion rules and return the problem."""
        self.exclusion_config = config
        return self

    def initialize(self) -> None:
        """Scan the codebase and cache the relative paths of all included files."""
        if self._codebase_path is None:
            return
        root = os.fspath(self._codebase_path)
        logger.info("Starting file tree traversal at: %s", root)

        gitignore_path = os.path.join(root, ".gitignore")
        if os.path.exists(gitignore_path):
            logger.info("Found .gitignore file at: %s", gitignore_path)
            try:
                self._gitignore = GitignoreMatcher.from_file(gitignore_path, root)
                logger.info("Successfully loaded .gitignore patterns")
            except (OSError, ValueError) as exc:
                logger.info("Failed to load .gitignore: %s", exc)
        else:
            logger.info("No .gitignore file found at: %s", gitignore_path)

        paths: list[str] = []
        dir_count = file_count = excluded_count = 0
        for path, is_dir in _walk(root):
            if is_dir:
                logger.debug("Exploring directory: %s", path)
                dir_count += 1
            if self.should_exclude(path, is_dir):
                logger.debug("Excluding path: %s", path)
                excluded_count += 1
                continue
            if not is_dir:
                logger.debug("Found file: %s", path)
                file_count += 1
                paths.append(_relative_posix(path, root))

        self._cached_paths = paths
        logger.info(
            "File tree traversal complete: %d directories, %d files processed, %d paths excluded",
            dir_count,
            file_count,
            excluded_count,
        )

    def should_exclude(self, path: PathArg, is_dir: bool | None = None) -> bool:
        """True when a scanned path is left out; is_dir is looked up when not given."""
        if is_dir is None:
            is_dir = os.path.isdir(path)
        pure = PurePath(os.fspath(path))
        text = os.fspath(path)

        if any(name == ".git" for name in _ancestor_names(pure)):
            logger.debug("Excluding .git directory or its contents: %s", text)
            return True

        name = pure.name
        in_temp_dir = "/tmp/" in text or "/.tmp" in text
        if in_temp_dir:
            if name == ".gitignore" and ("node_modules" in text or ".log" in text):
                return True
            if "node_modules" in text:
                return True
            if text.endswith(".log"):
                return True

        if self._gitignore is not None and self._gitignore.matched(pure, is_dir):
            logger.debug("Excluding due to .gitignore match: %s", text)
            return True

        if name.startswith(".") and name != ".gitignore":
            logger.debug("Excluding hidden file/directory: %s", text)
            return True

        if in_temp_dir:
            return False

        if self.exclusion_config.should_exclude(pure):
            logger.debug("Excluding path based on exclusion patterns: %s", text)
            return True
        return False

    def all_file_paths(self) -> list[str]:
        """Relative paths of all files found by the last scan."""
        return list(self._cached_paths)

    def generate_tree(self) -> str:
        """Render the scanned files and included directories as a text tree."""
        if self._codebase_path is None:
            logger.info("Cannot generate tree: codebase path not set")
            return ""
        root = os.fspath(self._codebase_path)

        all_dirs: set[str] = set()
        for path in self._cached_paths:
            parts = path.split("/")[:-1]
            for depth in range(1, len(parts) + 1):
                all_dirs.add("/".join(parts[:depth]))

        for path, is_dir in _walk(root):
            if not is_dir or self.should_exclude(path, True):
                continue
            relative = _relative_posix(path, root)
            if relative and relative != ".":
                all_dirs.add(relative)

        files_by_dir: dict[str, list[str]] = {}
        for path in self._cached_paths:
            parent, _, base = path.rpartition("/")
            files_by_dir.setdefault(parent, []).append(base)

        subdirs_by_dir: dict[str, list[str]] = {}
        for directory in all_dirs:
            parent, _, base = directory.rpartition("/")
            subdirs_by_dir.setdefault(parent, []).append(base)

        def render(directory: str, prefix: str, is_last: bool) -> Iterator[str]:
            name = directory.rpartition("/")[2] if directory else "."
            yield f"{prefix}{_LAST_BRANCH if is_last else _BRANCH}{name}/\n"
            child_prefix = f"{prefix}    " if is_last else f"{prefix}│   "

            entries = sorted(
                [(sub, True) for sub in subdirs_by_dir.get(directory, [])]
                + [(base, False) for base in files_by_dir.get(directory, [])],
                key=lambda entry: (not entry[1], entry[0]),
            )
            for index, (entry_name, entry_is_dir) in enumerate(entries):
                last = index == len(entries) - 1
                if entry_is_dir:
                    full = f"{directory}/{entry_name}" if directory else entry_name
                    yield from render(full, child_prefix, last)
                else:
                    yield f"{child_prefix}{_LAST_BRANCH if last else _BRANCH}{entry_name}\n"

        return "".join(render("", "", True))

    def get_file(self, path: str) -> CodebaseFile:
        """Read a file of the codebase, caching its content."""
        cached = self._file_cache.get(path)
        if cached is not None:
            return cached
        if self._codebase_path is None:
            raise ValueError("Codebase path not set")
        full_path = self._codebase_path / path
        try:
            with open(full_path, encoding="utf-8") as handle:
                content = handle.read()
        except OSError as exc:
            raise OSError(exc.errno, f"Failed to read file: {full_path}: {exc.strerror}") from exc
        file = CodebaseFile(path, content)
        self._file_cache[path] = file
        return file

    def list_files_in_directory(self, directory: str) -> list[str]:
        """Scanned files at or below a directory of the codebase."""
        if not self._cached_paths:
            logger.info("Cached paths is empty, initialization may not have been completed")
            return []
        prefix = directory if directory.endswith("/") else f"{directory}/"
        if self._codebase_path is None or not (self._codebase_path / directory).is_dir():
            logger.debug("Directory does not exist: %s", directory)
            return []
        return [p for p in self._cached_paths if p == directory or p.startswith(prefix)]

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form; the codebase state is not included."""
        return {
            "id": self.id,
            "problem_statement": self.problem_statement,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SWEBenchProblem:
        """Build a problem from its JSON object form."""
        if not isinstance(data, dict):
            raise ValueError("problem must be a JSON object")
        for name in ("id", "problem_statement", "metadata"):
            if name not in data:
                raise ValueError(f"missing field `{name}`")
        for name in ("id", "problem_statement"):
            if not isinstance(data[name], str):
                raise ValueError(f"field `{name}` must be a string")
        metadata = data["metadata"]
        if not isinstance(metadata, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in metadata.items()
        ):
            raise ValueError("field `metadata` must map strings to strings")
        return cls(data["id"], data["problem_statement"], dict(metadata))