import json
from pathlib import PurePosixPath

import pytest

from enginebuilder.exclusion import ExclusionConfig

ROOT = PurePosixPath("/mock/codebase")


def _filtered_files(config, entries):
    found = set()
    for rel, is_dir in entries:
        if is_dir:
            continue
        full = ROOT / rel
        if config.should_exclude(full):
            continue
        found.add(str(full.relative_to(ROOT)))
    return found


def test_loading_exclusion_file(tmp_path):
    path = tmp_path / "test_exclusions.json"
    path.write_text(
        """
    {
        "extensions_to_skip": [".png", ".jpg", ".pdf"],
        "files_to_skip": ["package-lock.json", ".DS_Store"],
        "directories_to_skip": [".git", "node_modules", "dist"]
    }
    """
    )
    config = ExclusionConfig.from_file(str(path))

    assert len(config.extensions_to_skip) == 3
    assert ".png" in config.extensions_to_skip
    assert ".jpg" in config.extensions_to_skip
    assert ".pdf" in config.extensions_to_skip
    assert len(config.files_to_skip) == 2
    assert "package-lock.json" in config.files_to_skip
    assert ".DS_Store" in config.files_to_skip
    assert len(config.directories_to_skip) == 3
    assert ".git" in config.directories_to_skip
    assert "node_modules" in config.directories_to_skip
    assert "dist" in config.directories_to_skip

    cases = [
        ("image.png", True),
        ("document.pdf", True),
        ("code.js", False),
        ("package-lock.json", True),
        (".DS_Store", True),
        ("README.md", False),
        (".git/config", True),
        ("node_modules/package.json", True),
        ("dist/bundle.js", True),
        ("src/main.js", False),
    ]
    for path_text, expected in cases:
        assert config.should_exclude(path_text) is expected, path_text


def test_invalid_exclusion_file(tmp_path):
    path = tmp_path / "invalid_exclusions.json"
    path.write_text("\n        not valid json\n    ")
    with pytest.raises(ValueError) as info:
        ExclusionConfig.from_file(str(path))
    assert "invalid_exclusions.json" in str(info.value)


def test_nonexistent_exclusion_file():
    with pytest.raises(FileNotFoundError) as info:
        ExclusionConfig.from_file("nonexistent_file.json")
    assert "nonexistent_file.json" in str(info.value)


def test_missing_field_is_an_error(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"extensions_to_skip": [], "files_to_skip": []}))
    with pytest.raises(ValueError, match="directories_to_skip"):
        ExclusionConfig.from_file(path)


def test_exclusion_patterns():
    config = ExclusionConfig()
    config.directories_to_skip = [d for d in config.directories_to_skip if d != "tests"]
    entries = [
        ("src", True),
        ("src/main.rs", False),
        ("docs", True),
        ("docs/readme.md", False),
        ("README.md", False),
        ("assets", True),
        ("assets/logo.png", False),
        ("assets/sound.mp3", False),
        ("docs/manual.pdf", False),
        ("src/script.min.js", False),
        ("package-lock.json", False),
        (".git", True),
        (".git/config", False),
        (".vscode", True),
        (".vscode/settings.json", False),
        ("node_modules", True),
        ("node_modules/package.json", False),
    ]
    found = _filtered_files(config, entries)

    assert "src/main.rs" in found
    assert "docs/readme.md" in found
    assert "README.md" in found
    for excluded in (
        "assets/logo.png",
        "assets/sound.mp3",
        "docs/manual.pdf",
        "src/script.min.js",
        "package-lock.json",
        ".git/config",
        ".vscode/settings.json",
        "node_modules/package.json",
    ):
        assert excluded not in found
    for prefix in (".git/", ".vscode/", "node_modules/", "assets/"):
        assert all(not p.startswith(prefix) for p in found)
    for suffix in (".png", ".mp3", ".pdf"):
        assert all(not p.endswith(suffix) for p in found)
    assert all(".min.js" not in p for p in found)


def test_git_directory_exclusion():
    entries = [
        ("src", True),
        ("src/main.rs", False),
        ("docs", True),
        ("docs/readme.md", False),
        (".git", True),
        (".git/config", False),
        (".git/objects", True),
        (".git/objects/somehash", False),
    ]
    found = _filtered_files(ExclusionConfig(), entries)
    assert "src/main.rs" in found
    assert "docs/readme.md" in found
    assert ".git/config" not in found
    assert ".git/objects/somehash" not in found
    assert all(not p.startswith(".git/") for p in found)


def test_git_directory_excluded_in_file_scan():
    entries = [
        ("src", True),
        ("src/main.rs", False),
        ("docs", True),
        ("docs/README.md", False),
        (".git", True),
        (".git/config", False),
        (".git/HEAD", False),
        (".git/objects", True),
        (".git/objects/somehash", False),
    ]
    found = _filtered_files(ExclusionConfig(), entries)
    assert "src/main.rs" in found
    assert "docs/README.md" in found
    assert ".git/config" not in found
    assert ".git/HEAD" not in found
    assert ".git/objects/somehash" not in found
    for path in found:
        assert not path.startswith(".git/")


def test_filename_rules():
    config = ExclusionConfig()
    assert config.should_exclude_by_filename("a/b/Gemfile.lock") is True
    assert config.should_exclude_by_filename("a/b/Gemfile") is False


def test_directory_rules_in_temporary_paths():
    config = ExclusionConfig()
    assert config.should_exclude_by_directory("/home/x/node_modules/a.js") is True
    assert config.should_exclude_by_directory("/var/tmp/node_modules/a.js") is False
    assert config.should_exclude_by_directory("/var/tmp/.git/config") is True
    assert config.should_exclude_by_directory("/repo/.tmp/dist/x.js") is False


def test_dict_round_trip():
    config = ExclusionConfig(
        extensions_to_skip=[".png"], files_to_skip=["x"], directories_to_skip=["y"]
    )
    restored = ExclusionConfig.from_dict(json.loads(json.dumps(config.to_dict())))
    assert restored == config


def test_default_round_trip_keeps_lists():
    config = ExclusionConfig()
    restored = ExclusionConfig.from_dict(config.to_dict())
    assert restored.extensions_to_skip == config.extensions_to_skip
    assert restored.files_to_skip == config.files_to_skip
    assert restored.directories_to_skip == config.directories_to_skip


def test_from_dict_rejects_non_string_items():
    with pytest.raises(ValueError):
        ExclusionConfig.from_dict(
            {"extensions_to_skip": [1], "files_to_skip": [], "directories_to_skip": []}
        )