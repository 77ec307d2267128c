"""Sequential executor for quiz site builds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Sequence

from quiz_site.core.files import write_text_file

from .assets import AssetOutcome, emit_assets
from .config import SiteConfig
from .loader import JsonLoad, load_json
from .manifest import IndexEntry, validate_index
from .pages import INDEX_PAGE, page_root, render_index_page, render_quiz_page
from .validator import check_entry


class PageStatus(Enum):
    """Outcome status for a single manifest entry."""

    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PageOutcome:
    """Result of processing (or attempting to process) one manifest entry."""

    entry: IndexEntry
    status: PageStatus
    output_path: Optional[Path] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class RejectedEntry:
    """Manifest row dropped by the shape filter."""

    position: int
    reason: str


@dataclass(frozen=True)
class BuildSummary:
    """Aggregated results for a build run.

    ``entries`` is ``None`` when the manifest was not an array; in that case
    only ``assets`` carries results.
    """

    manifest: JsonLoad
    entries: Optional[tuple[IndexEntry, ...]]
    rejected: tuple[RejectedEntry, ...]
    assets: tuple[AssetOutcome, ...]
    valid_entries: tuple[IndexEntry, ...]
    outcomes: tuple[PageOutcome, ...]
    index_path: Optional[Path]

    @property
    def fatal(self) -> bool:
        return self.entries is None

    @property
    def written_count(self) -> int:
        return _count(self.outcomes, PageStatus.WRITTEN)

    @property
    def skipped_count(self) -> int:
        return _count(self.outcomes, PageStatus.SKIPPED)

    @property
    def failure_count(self) -> int:
        return _count(self.outcomes, PageStatus.FAILED)

    @property
    def exit_code(self) -> int:
        if self.fatal or self.index_path is None or self.failure_count:
            return 1
        return 0


def build_site(config: SiteConfig, *, logger: logging.Logger) -> BuildSummary:
    """Generate the site described by ``config`` and return a summary."""

    logger.info(
        "Starting quiz site build",
        extra={
            "index_path": str(config.index_path),
            "data_dir": str(config.data_dir),
            "output_dir": str(config.output_dir),
        },
    )

    manifest = load_json(config.index_path, logger=logger)
    rejected: list[RejectedEntry] = []

    def record_rejection(position: int, raw: Any, reason: str) -> None:
        rejected.append(RejectedEntry(position=position, reason=reason))
        logger.debug(
            "Dropped malformed manifest entry",
            extra={"position": position, "reason": reason},
        )

    entries = validate_index(
        manifest.value if manifest.ok else None,
        on_reject=record_rejection,
        logger=logger,
    )
    # Assets are written even when the manifest is rejected.
    assets = emit_assets(config.output_dir, logger=logger)

    if entries is None:
        logger.error(
            "Index manifest is invalid; no pages generated",
            extra={"index_path": str(config.index_path)},
        )
        return BuildSummary(
            manifest=manifest,
            entries=None,
            rejected=tuple(rejected),
            assets=assets,
            valid_entries=(),
            outcomes=(),
            index_path=None,
        )

    outcomes: dict[int, PageOutcome] = {}
    valid: list[tuple[int, IndexEntry]] = []
    for position, entry in enumerate(entries):
        check = check_entry(
            entry.file, data_dir=config.data_dir, logger=logger
        )
        if check.valid:
            valid.append((position, entry))
        else:
            outcomes[position] = PageOutcome(
                entry=entry,
                status=PageStatus.SKIPPED,
                reason=check.reason,
            )

    valid_entries = tuple(entry for _, entry in valid)
    index_path = _write_index(valid_entries, config=config, logger=logger)

    for position, entry in valid:
        outcomes[position] = _build_page(entry, config=config, logger=logger)

    summary = BuildSummary(
        manifest=manifest,
        entries=entries,
        rejected=tuple(rejected),
        assets=assets,
        valid_entries=valid_entries,
        outcomes=tuple(outcomes[position] for position in sorted(outcomes)),
        index_path=index_path,
    )

    logger.info(
        "Completed quiz site build",
        extra={
            "written_count": summary.written_count,
            "skipped_count": summary.skipped_count,
            "failure_count": summary.failure_count,
            "rejected_count": len(summary.rejected),
        },
    )
    return summary


def _write_index(
    entries: Sequence[IndexEntry],
    *,
    config: SiteConfig,
    logger: logging.Logger,
) -> Optional[Path]:
    target = config.output_dir / INDEX_PAGE
    content = render_index_page(
        entries,
        site_title=config.site_title,
        escape_html=config.escape_html,
    )
    try:
        write_text_file(target, content)
    except OSError as exc:
        logger.error(
            "Error writing index page",
            extra={"path": str(target), "reason": str(exc)},
        )
        return None
    logger.info(
        "Index page generated",
        extra={"path": str(target), "entry_count": len(entries)},
    )
    return target


def _build_page(
    entry: IndexEntry,
    *,
    config: SiteConfig,
    logger: logging.Logger,
) -> PageOutcome:
    target = config.output_dir / entry.page_name
    if not target.resolve().is_relative_to(config.output_dir.resolve()):
        logger.warning(
            "Skipping page outside output directory",
            extra={"source": entry.file, "output_path": str(target)},
        )
        return PageOutcome(
            entry=entry,
            status=PageStatus.SKIPPED,
            reason="file outside output directory",
        )

    loaded = load_json(config.data_dir / entry.file, logger=logger)
    if not loaded.ok:
        return PageOutcome(
            entry=entry, status=PageStatus.SKIPPED, reason=loaded.reason
        )

    html = render_quiz_page(
        loaded.value,
        escape_html=config.escape_html,
        root=page_root(entry.page_name),
        source=entry.file,
        logger=logger,
    )
    if html is None:
        return PageOutcome(
            entry=entry,
            status=PageStatus.SKIPPED,
            reason="invalid quiz structure",
        )

    try:
        write_text_file(target, html)
    except OSError as exc:
        logger.error(
            "Error processing file",
            extra={"source": entry.file, "reason": str(exc)},
        )
        return PageOutcome(
            entry=entry, status=PageStatus.FAILED, reason=str(exc)
        )

    logger.info(
        "Quiz page generated",
        extra={"source": entry.file, "output_path": str(target)},
    )
    return PageOutcome(
        entry=entry, status=PageStatus.WRITTEN, output_path=target
    )


def _count(outcomes: Sequence[PageOutcome], status: PageStatus) -> int:
    return sum(1 for outcome in outcomes if outcome.status is status)


__all__ = [
    "BuildSummary",
    "PageOutcome",
    "PageStatus",
    "RejectedEntry",
    "build_site",
]
