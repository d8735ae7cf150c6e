# enginebuilder

Data models for scanning a codebase and recording what a staged analysis pipeline decides about it.

## Install

```
pip install enginebuilder
```

Install the test extra to run the test suite:

```
pip install "enginebuilder[test]"
```

## What it provides

- `enginebuilder.exclusion.ExclusionConfig`: lists of extensions, file names and directories to skip. It has sensible defaults and can be loaded from a JSON file with `ExclusionConfig.from_file(path)`. `should_exclude(path)` checks a path against all three lists.
- `enginebuilder.files.CodebaseFile` and `FilePatternSelection`: a file's path and content, and a set of patterns (exact paths, directory prefixes ending in `/`, or globs with `*`) that are tested with `matches(file_path)`.
- `enginebuilder.problem.SWEBenchProblem`: a problem statement tied to a codebase directory. `initialize()` walks the tree and honours `.gitignore` through `GitignoreMatcher` and the exclusion rules. After that you can call `all_file_paths()`, `list_files_in_directory(directory)`, `get_file(path)` and `generate_tree()`.
- `enginebuilder.relevance.RelevanceDecision` and `RelevanceStatus`: a per-file relevance verdict.
- `enginebuilder.ranking`: `RankedCodebaseFile`, `FileRanking`, `RelevantFileDataForPrompt` and `ProblemContext`.
- `enginebuilder.dockerfile.DockerfileConfig`: a description of a generated Dockerfile.
- `enginebuilder.overview.OverviewData`: reasoning collected from every stage. `to_markdown()` renders it as a report.

Every model converts to and from plain JSON-compatible data with `to_dict()` and `from_dict(data)`.

## Example

```python
from enginebuilder.problem import SWEBenchProblem
from enginebuilder.files import FilePatternSelection

problem = SWEBenchProblem("demo", "Fix the parser").with_codebase_path("path/to/repo")
problem.initialize()
print(problem.generate_tree())

selection = FilePatternSelection(["src/", "*.toml"])
chosen = [p for p in problem.all_file_paths() if selection.matches(p)]
```