from __future__ import annotations

import io
import json
import logging
import tempfile
from pathlib import Path

import pytest

from quiz_site.core import logging as core_logging


@pytest.fixture(autouse=True)
def _close_handlers():
    names: list[str] = []
    yield names
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def _console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        handler
        for handler in logger.handlers
        if getattr(handler, "_quiz_site_console", False)
    ]


def test_configure_logger_writes_json(tmp_path, _close_handlers):
    _close_handlers.append("quiz_site.test")
    log_dir = tmp_path / "logs"
    logger, log_path = core_logging.configure_logger(
        "quiz_site.test",
        log_dir=log_dir,
        level="INFO",
        filename="test.log",
        stream=io.StringIO(),
    )

    logger.debug("hidden")
    logger.info("hello world", extra={"event": "unit", "value": 3})

    class _Helper:
        def __repr__(self):  # noqa: D401
            return "helper"

    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception(
            "with error",
            extra={
                "value": {"items": [Path(log_dir), 1], "mapping": {"k": "v"}},
                "obj": _Helper(),
            },
        )

    contents = log_path.read_text(encoding="utf-8").strip().splitlines()
    first = json.loads(contents[0])
    assert first["message"] == "hello world"
    assert first["level"] == "INFO"
    assert first["extra"] == {"event": "unit", "value": 3}

    payload = json.loads(contents[-1])
    assert "ValueError: boom" in payload["exception"]
    assert payload["extra"]["obj"] == "helper"
    assert payload["extra"]["value"]["items"] == [str(log_dir), 1]
    assert len(contents) == 2


def test_console_echoes_warnings_only_by_default(tmp_path, _close_handlers):
    _close_handlers.append("quiz_site.test_console")
    stream = io.StringIO()
    logger, _ = core_logging.configure_logger(
        "quiz_site.test_console",
        log_dir=tmp_path,
        stream=stream,
    )

    logger.info("quiet")
    logger.warning("Skipping missing file", extra={"file": "a.json"})

    output = stream.getvalue()
    assert "quiet" not in output
    assert "WARNING Skipping missing file (file=a.json)" in output


def test_verbose_console_shows_debug(tmp_path, _close_handlers):
    _close_handlers.append("quiz_site.test_verbose")
    stream = io.StringIO()
    logger, log_path = core_logging.configure_logger(
        "quiz_site.test_verbose",
        log_dir=tmp_path,
        level="ERROR",
        verbose=True,
        stream=stream,
    )

    logger.debug("details")

    assert "DEBUG details" in stream.getvalue()
    # verbose also lowers the file threshold.
    assert "details" in log_path.read_text(encoding="utf-8")


def test_reconfiguring_replaces_console_handler(tmp_path, _close_handlers):
    name = "quiz_site.test_toggle"
    _close_handlers.append(name)

    logger, _ = core_logging.configure_logger(
        name, log_dir=tmp_path, verbose=True, stream=io.StringIO()
    )
    assert len(_console_handlers(logger)) == 1
    assert _console_handlers(logger)[0].level == logging.DEBUG

    core_logging.configure_logger(
        name, log_dir=tmp_path, verbose=False, stream=io.StringIO()
    )
    handlers = _console_handlers(logger)
    assert len(handlers) == 1
    assert handlers[0].level == logging.WARNING


def test_reconfiguring_reuses_file_handler_for_same_path(
    tmp_path, _close_handlers
):
    name = "quiz_site.test_reuse"
    _close_handlers.append(name)

    logger, first = core_logging.configure_logger(
        name, log_dir=tmp_path, stream=io.StringIO()
    )
    _, second = core_logging.configure_logger(
        name, log_dir=tmp_path, stream=io.StringIO()
    )
    _, moved = core_logging.configure_logger(
        name, log_dir=tmp_path / "other", stream=io.StringIO()
    )

    file_handlers = [
        h for h in logger.handlers if getattr(h, "_quiz_site_file", False)
    ]
    assert first == second
    assert moved.parent == tmp_path / "other"
    assert len(file_handlers) == 1


def test_configure_logger_fallback_directory(
    tmp_path, monkeypatch, _close_handlers
):
    _close_handlers.append("quiz_site.test_blocked")
    target = tmp_path / "blocked"
    monkeypatch.setattr(
        core_logging, "_fallback_log_dir", lambda: tmp_path / "fallback"
    )

    original_mkdir = Path.mkdir

    def fake_mkdir(self, *args, **kwargs):  # noqa: ANN001
        if self == target:
            raise PermissionError("denied")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", fake_mkdir)

    _, log_path = core_logging.configure_logger(
        "quiz_site.test_blocked",
        log_dir=target,
        filename="blocked.log",
        stream=io.StringIO(),
    )

    assert log_path == tmp_path / "fallback" / "blocked.log"
    assert log_path.exists()


def test_configure_logger_rotating_handler_fallback(
    tmp_path, monkeypatch, _close_handlers
):
    _close_handlers.append("quiz_site.test_rotating_fallback")
    calls = {"count": 0}
    fallback_dir = tmp_path / "rotate-fallback"
    original_handler = core_logging.RotatingFileHandler

    def fake_handler(path, *args, **kwargs):  # noqa: ANN001
        calls["count"] += 1
        if calls["count"] == 1:
            raise PermissionError("denied")
        return original_handler(path, *args, **kwargs)

    monkeypatch.setattr(core_logging, "RotatingFileHandler", fake_handler)
    monkeypatch.setattr(core_logging, "_fallback_log_dir", lambda: fallback_dir)

    _, log_path = core_logging.configure_logger(
        "quiz_site.test_rotating_fallback",
        log_dir=tmp_path / "primary",
        filename="rotate.log",
        stream=io.StringIO(),
    )

    assert log_path.parent == fallback_dir
    assert calls["count"] == 2


def test_fallback_log_dir_uses_tempdir(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path))

    assert core_logging._fallback_log_dir() == tmp_path / "quiz-site-logs"


def test_coerce_level_defaults():
    assert core_logging._coerce_level("bogus") == logging.INFO
    assert core_logging._coerce_level("warning") == logging.WARNING
