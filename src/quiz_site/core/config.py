"""TOML loading, strict default merging and template writing."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, MutableMapping

try:  # Python >= 3.11 ships ``tomllib`` in the stdlib.
    import tomllib
except ModuleNotFoundError as exc:  # pragma: no cover - interpreter guard
    raise RuntimeError("Python 3.11+ is required for tomllib support.") from exc

from .files import write_text_file

__all__ = [
    "TomlConfigError",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
]


class TomlConfigError(RuntimeError):
    """Raised when a config file cannot be read, parsed or written."""


def load_toml(path: Path) -> dict[str, Any]:
    """Parse the TOML file at ``path``.

    Read and decode problems become :class:`TomlConfigError`; callers wrap
    that in their own error type.
    """

    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise TomlConfigError(f"Config file not found: {path}") from exc
    except IsADirectoryError as exc:
        raise TomlConfigError(f"Config path is a directory: {path}") from exc
    except PermissionError as exc:
        raise TomlConfigError(f"Config file is not readable: {path}") from exc
    return _parse(raw, source=str(path))


def merge_defaults(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    """Overlay ``override`` onto ``base`` in place.

    Every key in ``override`` must already exist in ``base``. Tables in
    ``base`` only accept tables and are merged key by key.
    """

    pending = [(base, override, path)]
    while pending:
        target, incoming, prefix = pending.pop()
        for key, value in incoming.items():
            dotted = f"{prefix}{key}"
            if key not in target:
                raise TomlConfigError(f"Unknown configuration key '{dotted}'.")
            current = target[key]
            if not isinstance(current, MutableMapping):
                target[key] = value
            elif isinstance(value, Mapping):
                pending.append((current, value, f"{dotted}."))
            else:
                raise TomlConfigError(
                    f"Expected table for '{dotted}', "
                    f"found {type(value).__name__}."
                )


def write_toml_template(
    path: Path,
    *,
    template: str,
    overwrite: bool = False,
    mode: int = 0o644,
) -> Path:
    """Write ``template`` to ``path`` once it has been checked as TOML.

    An existing file is only replaced when ``overwrite`` is set.
    """

    _parse(template.encode("utf-8"), source="template")
    if path.exists() and not overwrite:
        raise TomlConfigError(f"Config already exists: {path}")
    written = write_text_file(path, template)
    try:
        written.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return written


def _parse(raw: bytes, *, source: str) -> dict[str, Any]:
    try:
        return tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise TomlConfigError(f"Config {source} is not UTF-8 text.") from exc
    except tomllib.TOMLDecodeError as exc:
        raise TomlConfigError(f"Failed to parse config TOML: {exc}") from exc
