from __future__ import annotations

from pathlib import Path

import pytest

from quiz_site.build import config as cfg


def test_load_config_defaults_resolve_against_cwd(tmp_path):
    result = cfg.load_config(env={}, cwd=tmp_path)

    assert result.config_path is None
    config = result.config
    assert config.index_path == (tmp_path / "data" / "index.json").resolve()
    assert config.data_dir == (tmp_path / "data").resolve()
    assert config.output_dir == (tmp_path / "dist").resolve()
    assert config.log_dir == (tmp_path / ".quiz-site" / "logs").resolve()
    assert config.site_title == "Quiz Navigation"
    assert config.escape_html is True
    assert config.log_level == "INFO"


def test_load_config_reads_default_file_in_cwd(tmp_path):
    (tmp_path / cfg.CONFIG_FILENAME).write_text(
        """
        [paths]
        index = "content/manifest.json"
        output_dir = "public"

        [site]
        title = "Pub Quiz"

        [render]
        escape_html = false

        [logging]
        level = "debug"
        """.strip()
        + "\n",
        encoding="utf-8",
    )

    result = cfg.load_config(env={}, cwd=tmp_path)

    assert result.config_path == tmp_path / cfg.CONFIG_FILENAME
    config = result.config
    assert config.index_path == (tmp_path / "content/manifest.json").resolve()
    assert config.data_dir == (tmp_path / "data").resolve()
    assert config.output_dir == (tmp_path / "public").resolve()
    assert config.site_title == "Pub Quiz"
    assert config.escape_html is False
    assert config.log_level == "DEBUG"


def test_file_paths_resolve_relative_to_config_file(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    config_file = site / "custom.toml"
    config_file.write_text('[paths]\ndata_dir = "quizzes"\n', encoding="utf-8")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()

    result = cfg.load_config(config_path=config_file, env={}, cwd=elsewhere)

    assert result.config.data_dir == (site / "quizzes").resolve()
    assert result.config.output_dir == (elsewhere / "dist").resolve()


def test_env_overrides_file_and_cli_overrides_env(tmp_path):
    (tmp_path / cfg.CONFIG_FILENAME).write_text(
        '[paths]\noutput_dir = "from-file"\n[site]\ntitle = "File"\n',
        encoding="utf-8",
    )
    env = {
        "QUIZ_SITE_OUTPUT_DIR": "from-env",
        "QUIZ_SITE_SITE_TITLE": "Env",
        "QUIZ_SITE_ESCAPE_HTML": "no",
        "QUIZ_SITE_LOG_LEVEL": "warning",
    }

    env_only = cfg.load_config(env=env, cwd=tmp_path).config
    assert env_only.output_dir == (tmp_path / "from-env").resolve()
    assert env_only.site_title == "Env"
    assert env_only.escape_html is False
    assert env_only.log_level == "WARNING"

    overrides = cfg.ConfigOverrides(
        output_dir=Path("from-cli"),
        site_title="Cli",
        escape_html=True,
        log_level="error",
    )
    cli = cfg.load_config(env=env, cwd=tmp_path, overrides=overrides).config
    assert cli.output_dir == (tmp_path / "from-cli").resolve()
    assert cli.site_title == "Cli"
    assert cli.escape_html is True
    assert cli.log_level == "ERROR"


def test_config_env_variable_points_at_file(tmp_path):
    config_file = tmp_path / "elsewhere.toml"
    config_file.write_text('[site]\ntitle = "From env file"\n', "utf-8")

    result = cfg.load_config(
        env={cfg.CONFIG_ENV: str(config_file)}, cwd=tmp_path
    )

    assert result.config_path == config_file
    assert result.config.site_title == "From env file"


def test_explicit_missing_config_is_an_error(tmp_path):
    with pytest.raises(cfg.SiteConfigError, match="not found"):
        cfg.load_config(config_path=tmp_path / "nope.toml", env={}, cwd=tmp_path)

    with pytest.raises(cfg.SiteConfigError, match="not found"):
        cfg.load_config(env={cfg.CONFIG_ENV: "nope.toml"}, cwd=tmp_path)


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("[paths]\nunknown = 1\n", "Unknown configuration key 'paths.unknown'"),
        ("paths = 3\n", "Expected table for 'paths'"),
        ("[paths]\nindex = 3\n", "paths.index must be a string"),
        ('[render]\nescape_html = "yes"\n', "render.escape_html must be"),
        ('[site]\ntitle = "  "\n', "site.title must be a non-empty"),
        ("[logging]\nlevel = 10\n", "logging.level must be a string"),
        ("[paths\n", "Failed to parse config TOML"),
    ],
)
def test_invalid_config_values(tmp_path, content, message):
    (tmp_path / cfg.CONFIG_FILENAME).write_text(content, encoding="utf-8")

    with pytest.raises(cfg.SiteConfigError, match=message):
        cfg.load_config(env={}, cwd=tmp_path)


def test_invalid_env_boolean(tmp_path):
    with pytest.raises(cfg.SiteConfigError, match="QUIZ_SITE_ESCAPE_HTML"):
        cfg.load_config(env={"QUIZ_SITE_ESCAPE_HTML": "maybe"}, cwd=tmp_path)
