"""Common file handling utilities shared across quiz_site modules."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "read_text_file",
    "write_text_file",
]


def read_text_file(path: Path) -> str:
    """Read a text file as strict UTF-8.

    Decode errors propagate as :class:`UnicodeDecodeError` so callers can
    report them instead of rendering replacement characters.
    """
    with Path(path).open("r", encoding="utf-8") as fh:
        return fh.read()


def write_text_file(path: Path, content: str) -> Path:
    """Write ``content`` as UTF-8, creating parent directories first."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps output byte-identical across platforms.
    with target.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
    return target
