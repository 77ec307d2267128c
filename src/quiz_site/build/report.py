"""Rich rendering of build summaries for the terminal."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .executor import BuildSummary, PageStatus

_STATUS_STYLES = {
    PageStatus.WRITTEN: "green",
    PageStatus.SKIPPED: "yellow",
    PageStatus.FAILED: "red",
}


def render_summary(
    console: Console,
    summary: BuildSummary,
    *,
    output_dir: Path,
    log_path: Optional[Path] = None,
) -> None:
    """Print per-entry outcomes and build totals to ``console``."""

    console.rule(Text("Quiz site build", style="bold magenta"))

    if summary.fatal:
        reason = summary.manifest.reason or "manifest is not an array"
        console.print(
            f"[bold red]Index manifest rejected:[/] {escape(reason)}. "
            "No pages were generated."
        )
    else:
        pages = Table(title="Pages", box=box.SIMPLE, expand=True)
        pages.add_column("#", justify="right")
        pages.add_column("Source", overflow="fold")
        pages.add_column("Title", overflow="fold")
        pages.add_column("Status")
        pages.add_column("Detail", overflow="fold")
        for idx, outcome in enumerate(summary.outcomes, start=1):
            style = _STATUS_STYLES[outcome.status]
            if outcome.output_path is not None:
                detail = outcome.output_path.name
            else:
                detail = outcome.reason or ""
            pages.add_row(
                str(idx),
                outcome.entry.file,
                outcome.entry.title,
                Text(outcome.status.value, style=style),
                detail,
            )
        console.print(pages)

    overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Written", str(summary.written_count))
    overview.add_row("Skipped", str(summary.skipped_count))
    overview.add_row("Failed", str(summary.failure_count))
    overview.add_row("Malformed manifest rows", str(len(summary.rejected)))
    assets_ok = sum(1 for asset in summary.assets if asset.written)
    overview.add_row("Assets", f"{assets_ok}/{len(summary.assets)}")
    console.print(overview)

    console.print(f"Output dir: {output_dir}", markup=False)
    if log_path is not None:
        console.print(f"Log file:   {log_path}", markup=False)


__all__ = ["render_summary"]
