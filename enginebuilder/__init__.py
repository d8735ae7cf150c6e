"""Models for codebase scanning, file selection, relevance, ranking and overview reports."""

__version__ = "0.1.0"

__all__ = ["dockerfile", "exclusion", "files", "overview", "problem", "ranking", "relevance"]