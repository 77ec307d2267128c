"""Existence and shape checks for quiz files referenced by the manifest."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .loader import load_json

_LOGGER = logging.getLogger("quiz_site.build")


@dataclass(frozen=True)
class EntryCheck:
    """Result of checking a single manifest entry on disk."""

    file: str
    valid: bool
    reason: Optional[str] = None


def check_entry(
    file: str,
    *,
    data_dir: Path,
    logger: Optional[logging.Logger] = None,
) -> EntryCheck:
    """Confirm ``data_dir / file`` exists and holds a non-null ``questions``.

    ``questions`` is deliberately not required to be a list here; the page
    renderer applies that rule on its own. Absolute paths and ``..`` segments
    that land outside ``data_dir`` are rejected before anything is read.
    """

    log = logger or _LOGGER
    path = data_dir / file

    if not path.resolve().is_relative_to(data_dir.resolve()):
        log.warning(
            "Skipping file outside data directory",
            extra={"file": file, "path": str(path)},
        )
        return EntryCheck(
            file=file, valid=False, reason="file outside data directory"
        )

    if not path.exists():
        log.warning(
            "Skipping missing file", extra={"file": file, "path": str(path)}
        )
        return EntryCheck(file=file, valid=False, reason="file not found")

    loaded = load_json(path, logger=log)
    reason = _shape_problem(loaded.value) if loaded.ok else loaded.reason
    if reason is not None:
        log.warning(
            "Skipping corrupt JSON file",
            extra={"file": file, "path": str(path), "reason": reason},
        )
        return EntryCheck(file=file, valid=False, reason=reason)

    return EntryCheck(file=file, valid=True)


def is_valid_entry(
    file: str,
    *,
    data_dir: Path,
    logger: Optional[logging.Logger] = None,
) -> bool:
    return check_entry(file, data_dir=data_dir, logger=logger).valid


def _shape_problem(content: object) -> Optional[str]:
    if not isinstance(content, dict):
        return "content is not an object"
    if "questions" not in content:
        return "missing 'questions'"
    if content["questions"] is None:
        return "'questions' is null"
    return None


__all__ = ["EntryCheck", "check_entry", "is_valid_entry"]
