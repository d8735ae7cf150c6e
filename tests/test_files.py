import json

import pytest

from enginebuilder.files import CodebaseFile, FilePatternSelection


def test_file_selection_patterns_round_trip_and_match():
    selection = FilePatternSelection(["src/main.rs", "src/lib.rs", "src/models/*.rs"])
    loaded = FilePatternSelection.from_dict(json.loads(json.dumps(selection.to_dict(), indent=2)))

    assert len(loaded.patterns) == len(selection.patterns)
    for i, pattern in enumerate(selection.patterns):
        assert loaded.patterns[i] == pattern

    assert loaded.matches("src/main.rs")
    assert loaded.matches("src/models/file.rs")
    assert not loaded.matches("src/utils/helper.rs")


def test_dot_slash_prefix_is_ignored():
    selection = FilePatternSelection(["./src/main.rs"])
    assert selection.matches("src/main.rs")
    assert selection.matches("./src/main.rs")
    assert not selection.matches("src/lib.rs")


def test_directory_pattern():
    selection = FilePatternSelection(["src/models/"])
    assert selection.matches("src/models/file.rs")
    assert selection.matches("src/models/deep/inner.rs")
    assert not selection.matches("src/main.rs")


def test_star_crosses_separators():
    selection = FilePatternSelection(["src/*.rs"])
    assert selection.matches("src/a/b.rs")
    assert not selection.matches("src/a/b.py")


def test_recursive_glob_matches_zero_or_more_directories():
    selection = FilePatternSelection(["src/**/mod.rs"])
    assert selection.matches("src/mod.rs")
    assert selection.matches("src/a/b/mod.rs")
    assert not selection.matches("lib/mod.rs")


def test_invalid_glob_never_matches():
    selection = FilePatternSelection(["src/a**.rs", "***"])
    assert not selection.matches("src/abc.rs")
    assert not selection.matches("anything")


def test_character_class_glob():
    selection = FilePatternSelection(["file[0-9]*.txt", "x[!a]*"])
    assert selection.matches("file3.txt")
    assert not selection.matches("fileA.txt")
    assert selection.matches("xb")
    assert not selection.matches("xa")


def test_question_mark_without_star_is_literal():
    selection = FilePatternSelection(["a?.txt"])
    assert not selection.matches("ab.txt")
    assert selection.matches("a?.txt")


def test_empty_selection_matches_nothing():
    assert FilePatternSelection().matches("src/main.rs") is False


def test_from_dict_missing_patterns():
    with pytest.raises(ValueError):
        FilePatternSelection.from_dict({})


def test_codebase_file_extension():
    assert CodebaseFile("pkg/module.py", "").extension() == "py"
    assert CodebaseFile("pkg/module.py", "").is_python()
    assert CodebaseFile("src/main.rs", "").is_python() is False
    assert CodebaseFile("Makefile", "").extension() == "Makefile"