"""Index manifest model and shape validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

_LOGGER = logging.getLogger("quiz_site.build")

SOURCE_SUFFIX = ".json"
PAGE_SUFFIX = ".html"

RejectCallback = Callable[[int, Any, str], None]


@dataclass(frozen=True)
class IndexEntry:
    """One manifest row mapping a quiz file to its display title."""

    file: str
    title: str

    @property
    def page_name(self) -> str:
        """Output page name: ``file`` with ``.json`` swapped for ``.html``."""

        return self.file[: -len(SOURCE_SUFFIX)] + PAGE_SUFFIX


def validate_index(
    value: Any,
    *,
    on_reject: Optional[RejectCallback] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[tuple[IndexEntry, ...]]:
    """Filter a parsed manifest down to well-formed entries.

    Returns ``None`` when ``value`` is not a list. Malformed rows are dropped
    silently; ``on_reject`` receives ``(position, raw_entry, reason)`` for
    each of them.
    """

    if not isinstance(value, list):
        (logger or _LOGGER).error(
            "Index manifest is not an array",
            extra={"found": type(value).__name__},
        )
        return None

    entries: list[IndexEntry] = []
    for position, raw in enumerate(value):
        reason = _rejection_reason(raw)
        if reason is not None:
            if on_reject is not None:
                on_reject(position, raw, reason)
            continue
        entries.append(IndexEntry(file=raw["file"], title=raw["title"]))
    return tuple(entries)


def _rejection_reason(raw: Any) -> Optional[str]:
    if not isinstance(raw, dict):
        return "entry is not an object"
    file_value = raw.get("file")
    if not isinstance(file_value, str):
        return "'file' is not a string"
    if not isinstance(raw.get("title"), str):
        return "'title' is not a string"
    if not file_value.endswith(SOURCE_SUFFIX):
        return "'file' does not end in .json"
    return None


__all__ = ["IndexEntry", "RejectCallback", "validate_index"]
