"""JSON loading with explicit, non-raising outcomes."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from quiz_site.core.files import read_text_file

_LOGGER = logging.getLogger("quiz_site.build")


class LoadStatus(Enum):
    """Outcome status for a single JSON load."""

    OK = "ok"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class JsonLoad:
    """Result of reading and parsing one JSON file.

    ``value`` is only meaningful when ``status`` is :attr:`LoadStatus.OK`;
    a successful load of the literal ``null`` still carries ``None``.
    """

    path: Path
    status: LoadStatus
    value: Any = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK


def load_json(
    path: Path, *, logger: Optional[logging.Logger] = None
) -> JsonLoad:
    """Read ``path`` as UTF-8 and parse it as JSON without raising."""

    log = logger or _LOGGER
    log.debug("Reading JSON file", extra={"path": str(path)})

    try:
        text = read_text_file(path)
    except FileNotFoundError as exc:
        return _failed(log, path, LoadStatus.NOT_FOUND, exc)
    except (OSError, UnicodeDecodeError) as exc:
        return _failed(log, path, LoadStatus.UNREADABLE, exc)

    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        return _failed(log, path, LoadStatus.PARSE_ERROR, exc)

    return JsonLoad(path=path, status=LoadStatus.OK, value=value)


def _failed(
    log: logging.Logger, path: Path, status: LoadStatus, exc: Exception
) -> JsonLoad:
    reason = _describe(exc)
    if status is LoadStatus.PARSE_ERROR:
        message = "Error parsing data as JSON"
    else:
        message = "Error reading file"
    log.error(
        message,
        extra={"path": str(path), "status": status.value, "reason": reason},
    )
    return JsonLoad(path=path, status=status, reason=reason)


def _describe(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


__all__ = ["JsonLoad", "LoadStatus", "load_json"]
