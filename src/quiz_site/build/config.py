"""Configuration loader for the quiz site build."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from quiz_site.core import config as core_config

CONFIG_FILENAME = "quiz_site.toml"
ENV_PREFIX = "QUIZ_SITE_"
CONFIG_ENV = f"{ENV_PREFIX}CONFIG"

DEFAULT_INDEX_PATH = Path("data") / "index.json"
DEFAULT_DATA_DIR = Path("data")
DEFAULT_OUTPUT_DIR = Path("dist")
DEFAULT_LOG_DIR = Path(".quiz-site") / "logs"
DEFAULT_SITE_TITLE = "Quiz Navigation"
_DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class SiteConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class SiteConfig:
    """Fully resolved configuration for a build run."""

    index_path: Path
    data_dir: Path
    output_dir: Path
    site_title: str = DEFAULT_SITE_TITLE
    escape_html: bool = True
    log_level: str = _DEFAULT_LOG_LEVEL
    log_dir: Path = DEFAULT_LOG_DIR


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    index_path: Optional[Path] = None
    data_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    site_title: Optional[str] = None
    escape_html: Optional[bool] = None
    log_level: Optional[str] = None
    log_dir: Optional[Path] = None


@dataclass(frozen=True)
class LoadResult:
    """Result of loading configuration."""

    config: SiteConfig
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML > defaults.

    Relative paths from the TOML file resolve against the file's directory;
    relative paths from the CLI, environment or defaults resolve against
    ``cwd``.
    """

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env
    base_dir = (cwd or Path.cwd()).expanduser()

    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=base_dir / CONFIG_FILENAME,
        base_dir=base_dir,
    )

    defaults = _default_table()
    loaded_path: Optional[Path]

    if requested_path.is_file():
        loaded_path = requested_path
        try:
            parsed = core_config.load_toml(requested_path)
            core_config.merge_defaults(defaults, parsed)
        except core_config.TomlConfigError as exc:
            raise SiteConfigError(str(exc)) from exc
        file_dir = requested_path.parent
    else:
        loaded_path = None
        if config_path is not None or _has_env_config(env_map):
            raise SiteConfigError(f"Config file not found: {requested_path}")
        file_dir = base_dir

    paths = defaults["paths"]

    index_path = _resolve_path(
        overrides.index_path,
        _parse_env_path(env_map, "INDEX"),
        _coerce_optional_path(paths["index"], "paths.index"),
        default=DEFAULT_INDEX_PATH,
        base_dir=base_dir,
        file_dir=file_dir,
    )
    data_dir = _resolve_path(
        overrides.data_dir,
        _parse_env_path(env_map, "DATA_DIR"),
        _coerce_optional_path(paths["data_dir"], "paths.data_dir"),
        default=DEFAULT_DATA_DIR,
        base_dir=base_dir,
        file_dir=file_dir,
    )
    output_dir = _resolve_path(
        overrides.output_dir,
        _parse_env_path(env_map, "OUTPUT_DIR"),
        _coerce_optional_path(paths["output_dir"], "paths.output_dir"),
        default=DEFAULT_OUTPUT_DIR,
        base_dir=base_dir,
        file_dir=file_dir,
    )
    log_dir = _resolve_path(
        overrides.log_dir,
        _parse_env_path(env_map, "LOG_DIR"),
        _coerce_optional_path(defaults["logging"]["dir"], "logging.dir"),
        default=DEFAULT_LOG_DIR,
        base_dir=base_dir,
        file_dir=file_dir,
    )

    site_title = _resolve_site_title(
        _pick_first(
            overrides.site_title,
            _parse_env_string(env_map, "SITE_TITLE"),
            defaults["site"]["title"],
        )
    )

    escape_html = _resolve_escape(
        _pick_first(
            overrides.escape_html,
            _parse_env_bool(env_map, "ESCAPE_HTML"),
            defaults["render"]["escape_html"],
        )
    )

    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _parse_env_string(env_map, "LOG_LEVEL"),
            defaults["logging"]["level"],
        )
    )

    config = SiteConfig(
        index_path=index_path,
        data_dir=data_dir,
        output_dir=output_dir,
        site_title=site_title,
        escape_html=escape_html,
        log_level=log_level,
        log_dir=log_dir,
    )
    return LoadResult(config=config, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "paths": {"index": None, "data_dir": None, "output_dir": None},
        "site": {"title": DEFAULT_SITE_TITLE},
        "render": {"escape_html": True},
        "logging": {"level": _DEFAULT_LOG_LEVEL, "dir": None},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
    base_dir: Path,
) -> Path:
    if config_path is not None:
        candidate = config_path.expanduser()
    else:
        env_candidate = _parse_env_string(env_map, "CONFIG")
        if env_candidate is None:
            return default_path
        candidate = Path(env_candidate).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate


def _has_env_config(env_map: Mapping[str, str]) -> bool:
    return _parse_env_string(env_map, "CONFIG") is not None


def _resolve_path(
    override: Optional[Path],
    env_value: Optional[Path],
    file_value: Optional[Path],
    *,
    default: Path,
    base_dir: Path,
    file_dir: Path,
) -> Path:
    if override is not None:
        return _absolute(override, base_dir)
    if env_value is not None:
        return _absolute(env_value, base_dir)
    if file_value is not None:
        return _absolute(file_value, file_dir)
    return _absolute(default, base_dir)


def _absolute(candidate: Path, base: Path) -> Path:
    expanded = candidate.expanduser()
    if not expanded.is_absolute():
        expanded = base / expanded
    return expanded.resolve()


def _coerce_optional_path(value: object, key: str) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        return Path(raw)
    raise SiteConfigError(f"{key} must be a string when provided.")


def _resolve_site_title(candidate: object) -> str:
    if not isinstance(candidate, str):
        raise SiteConfigError("site.title must be a string.")
    title = candidate.strip()
    if not title:
        raise SiteConfigError("site.title must be a non-empty string.")
    return title


def _resolve_escape(candidate: object) -> bool:
    if not isinstance(candidate, bool):
        raise SiteConfigError("render.escape_html must be a boolean.")
    return candidate


def _resolve_log_level(candidate: object) -> str:
    if not isinstance(candidate, str):
        raise SiteConfigError("logging.level must be a string.")
    level = candidate.strip()
    if not level:
        raise SiteConfigError("logging.level must be a non-empty string.")
    return level.upper()


def _parse_env_bool(env_map: Mapping[str, str], key: str) -> Optional[bool]:
    raw = _parse_env_string(env_map, key)
    if raw is None:
        return None
    normalized = raw.lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise SiteConfigError(
        f"{ENV_PREFIX}{key} must be a boolean (true/false), got '{raw}'."
    )


def _parse_env_path(env_map: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _parse_env_string(env_map, key)
    if raw is None:
        return None
    return Path(raw)


def _parse_env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILENAME",
    "ConfigOverrides",
    "LoadResult",
    "SiteConfig",
    "SiteConfigError",
    "load_config",
]
