from __future__ import annotations

import logging

from quiz_site.build import loader


def test_load_json_returns_parsed_value(workspace, logger):
    path = workspace.write_json("data/quiz.json", {"title": "T", "questions": []})

    result = loader.load_json(path, logger=logger)

    assert result.ok
    assert result.status is loader.LoadStatus.OK
    assert result.value == {"title": "T", "questions": []}
    assert result.reason is None


def test_load_json_null_is_a_successful_load(workspace, logger):
    path = workspace.write("null.json", "null")

    result = loader.load_json(path, logger=logger)

    assert result.ok
    assert result.value is None


def test_load_json_missing_file_reports_not_found(tmp_path, logger, caplog):
    missing = tmp_path / "missing.json"

    result = loader.load_json(missing, logger=logger)

    assert not result.ok
    assert result.status is loader.LoadStatus.NOT_FOUND
    assert result.value is None
    assert result.reason
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors and errors[0].getMessage() == "Error reading file"
    assert errors[0].path == str(missing)


def test_load_json_parse_error(workspace, logger, caplog):
    path = workspace.write("broken.json", "{not json")

    result = loader.load_json(path, logger=logger)

    assert result.status is loader.LoadStatus.PARSE_ERROR
    assert result.value is None
    assert any(
        r.getMessage() == "Error parsing data as JSON" for r in caplog.records
    )


def test_load_json_directory_is_unreadable(tmp_path, logger):
    directory = tmp_path / "folder.json"
    directory.mkdir()

    result = loader.load_json(directory, logger=logger)

    assert result.status is loader.LoadStatus.UNREADABLE


def test_load_json_invalid_utf8_is_unreadable(workspace, logger):
    path = workspace.write("latin.json", b'"caf\xe9"')

    result = loader.load_json(path, logger=logger)

    assert result.status is loader.LoadStatus.UNREADABLE
