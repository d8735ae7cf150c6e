"""Rules deciding which codebase paths are skipped during analysis."""

from __future__ import annotations

import errno
import json
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

_DEFAULT_EXTENSIONS = (
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".ico", ".svg",
    ".webp", ".heic",
    # Audio
    ".mp3", ".wav", ".wma", ".ogg", ".flac", ".m4a", ".aac", ".midi", ".mid",
    # Video
    ".mp4", ".avi", ".mkv", ".mov", ".wmv", ".m4v", ".3gp", ".3g2", ".rm",
    ".swf", ".flv", ".webm", ".mpg", ".mpeg",
    # Fonts
    ".otf", ".ttf",
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".rtf", ".odt",
    ".ods", ".odp",
    # Archives
    ".iso", ".bin", ".tar", ".zip", ".7z", ".gz", ".rar", ".bz2", ".xz",
    # Minified and source maps
    ".min.js", ".min.js.map", ".js.map", ".min.css", ".min.css.map",
    # Data and configuration
    ".tfstate", ".tfstate.backup", ".parquet", ".pyc", ".pub", ".pem", ".lock",
    ".sqlite", ".db", ".env", ".log",
    # Compiled code
    ".class", ".dll", ".exe",
    # Design files
    ".psd", ".ai", ".sketch",
    # 3D and CAD
    ".stl", ".obj", ".dwg",
    # Backup files
    ".bak", ".old", ".tmp",
)

_DEFAULT_FILES = (
    "pnpm-lock.yaml",
    "package-lock.json",
    ".DS_Store",
    ".gitignore",
    "bun.lockb",
    "npm-debug.log",
    "yarn-error.log",
    "Thumbs.db",
    "Gemfile.lock",
)

_DEFAULT_DIRECTORIES = (
    ".git",
    "node_modules",
    ".vscode",
    ".idea",
    "assets",
    "dist",
    "build",
    "coverage",
    "tmp",
    "temp",
    ".next",
    ".nuxt",
    ".cache",
)

_FIELDS = ("extensions_to_skip", "files_to_skip", "directories_to_skip")

PathArg = str | os.PathLike


def _extension(name: str) -> str | None:
    """Return the text after the last dot of a file name, as paths define it."""
    if name in ("", ".", ".."):
        return None
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return None
    return after


def _ancestor_names(path: PurePath) -> Iterator[str]:
    for ancestor in (path, *path.parents):
        name = ancestor.name
        if name and name != "..":
            yield name


def _in_temp_dir(path: PathArg) -> bool:
    text = os.fspath(path)
    return "/tmp/" in text or "/.tmp" in text


@dataclass
class ExclusionConfig:
    """Extensions, file names and directory names to leave out of a scan."""

    extensions_to_skip: list[str] = field(default_factory=lambda: list(_DEFAULT_EXTENSIONS))
    files_to_skip: list[str] = field(default_factory=lambda: list(_DEFAULT_FILES))
    directories_to_skip: list[str] = field(default_factory=lambda: list(_DEFAULT_DIRECTORIES))

    @classmethod
    def from_file(cls, path: PathArg) -> ExclusionConfig:
        """Load a configuration from a JSON file."""
        try:
            with open(path, encoding="utf-8") as handle:
                content = handle.read()
        except OSError as exc:
            raise OSError(
                exc.errno or errno.EIO,
                f"Failed to read exclusion config file: {os.fspath(path)}: {exc.strerror}",
            ) from exc
        try:
            return cls.from_dict(json.loads(content))
        except (ValueError, TypeError) as exc:
            raise ValueError(
                f"Failed to parse exclusion config file: {os.fspath(path)}: {exc}"
            ) from exc

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExclusionConfig:
        """Build a configuration from its JSON object form."""
        if not isinstance(data, dict):
            raise ValueError("exclusion config must be a JSON object")
        values = {}
        for name in _FIELDS:
            if name not in data:
                raise ValueError(f"missing field `{name}`")
            items = data[name]
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                raise ValueError(f"field `{name}` must be a list of strings")
            values[name] = list(items)
        return cls(**values)

    def to_dict(self) -> dict[str, list[str]]:
        """Return the JSON object form of the configuration."""
        return {name: list(getattr(self, name)) for name in _FIELDS}

    def should_exclude_by_extension(self, path: PathArg) -> bool:
        """True when the file's extension, or a minified suffix, is skipped."""
        name = PurePath(path).name
        ext = _extension(name)
        if ext is None:
            return False
        if f".{ext}" in self.extensions_to_skip:
            return True
        return any(
            ".min." in pattern and name.endswith(pattern)
            for pattern in self.extensions_to_skip
        )

    def should_exclude_by_filename(self, path: PathArg) -> bool:
        """True when the file name itself is skipped."""
        name = PurePath(path).name
        return bool(name) and name in self.files_to_skip

    def should_exclude_by_directory(self, path: PathArg) -> bool:
        """True when the path or one of its ancestors is a skipped directory."""
        names = _ancestor_names(PurePath(path))
        if _in_temp_dir(path):
            # Inside temporary directories only .git is ever skipped.
            return any(name == ".git" for name in names)
        return any(name in self.directories_to_skip for name in names)

    def should_exclude(self, path: PathArg) -> bool:
        """True when the path is excluded for any reason."""
        return (
            self.should_exclude_by_extension(path)
            or self.should_exclude_by_filename(path)
            or self.should_exclude_by_directory(path)
        )