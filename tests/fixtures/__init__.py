"""Shared testing fixtures for the quiz_site test suite."""

from .workspace import WorkspaceBuilder, build_tree  # noqa: F401

__all__ = [
    "WorkspaceBuilder",
    "build_tree",
]
