"""Public APIs for the static quiz site build."""

from __future__ import annotations

from .assets import AssetOutcome, css_content, emit_assets, js_content
from .config import (
    ConfigOverrides,
    LoadResult,
    SiteConfig,
    SiteConfigError,
    load_config,
)
from .executor import (
    BuildSummary,
    PageOutcome,
    PageStatus,
    RejectedEntry,
    build_site,
)
from .loader import JsonLoad, LoadStatus, load_json
from .manifest import IndexEntry, validate_index
from .pages import page_root, render_index_page, render_quiz_page
from .validator import EntryCheck, check_entry, is_valid_entry

__all__ = [
    "AssetOutcome",
    "css_content",
    "emit_assets",
    "js_content",
    "ConfigOverrides",
    "LoadResult",
    "SiteConfig",
    "SiteConfigError",
    "load_config",
    "BuildSummary",
    "PageOutcome",
    "PageStatus",
    "RejectedEntry",
    "build_site",
    "JsonLoad",
    "LoadStatus",
    "load_json",
    "IndexEntry",
    "validate_index",
    "page_root",
    "render_index_page",
    "render_quiz_page",
    "EntryCheck",
    "check_entry",
    "is_valid_entry",
]
