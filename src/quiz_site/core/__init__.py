"""Core shared helpers for quiz_site commands."""

from __future__ import annotations

from .config import (
    TomlConfigError,
    load_toml,
    merge_defaults,
    write_toml_template,
)
from .config_templates import (
    ConfigTemplate,
    ConfigTemplateError,
    get_template,
    iter_templates,
)
from .files import read_text_file, write_text_file
from .logging import JsonLogFormatter, configure_logger

__all__ = [
    "TomlConfigError",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
    "ConfigTemplate",
    "ConfigTemplateError",
    "get_template",
    "iter_templates",
    "read_text_file",
    "write_text_file",
    "configure_logger",
    "JsonLogFormatter",
]
