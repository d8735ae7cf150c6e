[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "enginebuilder"
version = "0.1.0"
description = "Data models for codebase analysis pipelines: file exclusion, pattern selection, relevance, ranking and overview reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["codebase", "analysis", "exclusion", "gitignore", "ranking", "relevance"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["enginebuilder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
