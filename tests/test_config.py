"""Tests for src/folio/config.py — FolioConfig, TOML loading, overrides."""

from pathlib import Path

import pytest
from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.errors import ConfigError

ENV_VARS = ("FOLIO_CONTENT_DIR", "FOLIO_OUTPUT_DIR", "FOLIO_BASE_URL", "FOLIO_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    """Isolate tests from the caller's env vars and config files."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("folio.config.GLOBAL_CONFIG", tmp_path / "no-global.toml")


class TestDefaults:
    def test_defaults(self):
        cfg = FolioConfig()
        assert cfg.content_dir == Path("./content")
        assert cfg.output_dir == Path("./dist")
        assert cfg.render.max_tags == 3
        assert cfg.render.latest_count == 3
        assert cfg.render.excerpt_length == 160
        assert cfg.logging.level == "WARNING"


class TestLoadConfig:
    def test_no_file_gives_defaults(self):
        assert load_config() == FolioConfig()

    def test_explicit_path(self, tmp_path: Path):
        path = tmp_path / "site.toml"
        path.write_text(
            '[site]\ntitle = "Jane Doe"\nbase_url = "https://jane.dev"\n'
            "[render]\nmax_tags = 5\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.site.title == "Jane Doe"
        assert cfg.site.base_url == "https://jane.dev"
        assert cfg.render.max_tags == 5

    def test_cwd_file(self, tmp_path: Path):
        (tmp_path / ".folio.toml").write_text(
            '[content]\ndirectory = "posts"\n', encoding="utf-8"
        )
        assert load_config().content.directory == "posts"

    def test_missing_explicit_path(self, tmp_path: Path):
        assert load_config(tmp_path / "missing.toml") == FolioConfig()

    def test_invalid_toml_falls_back(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("[site\ntitle = ", encoding="utf-8")
        assert load_config(path) == FolioConfig()

    def test_out_of_range_value(self, tmp_path: Path):
        path = tmp_path / "site.toml"
        path.write_text("[render]\nmax_tags = -1\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="max_tags"):
            load_config(path)

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "site.toml"
        path.write_text('[output]\ndirectory = "public"\n', encoding="utf-8")
        monkeypatch.setenv("FOLIO_OUTPUT_DIR", "/srv/www")
        monkeypatch.setenv("FOLIO_BASE_URL", "https://env.example")
        cfg = load_config(path)
        assert cfg.output.directory == "/srv/www"
        assert cfg.site.base_url == "https://env.example"


class TestMergeCliOverrides:
    def test_none_values_ignored(self):
        cfg = merge_cli_overrides(FolioConfig(), output_directory=None)
        assert cfg.output.directory == "./dist"

    def test_paths_become_strings(self):
        cfg = merge_cli_overrides(
            FolioConfig(), content_directory=Path("src/content"), log_level="DEBUG"
        )
        assert cfg.content_dir == Path("src/content")
        assert cfg.logging.level == "DEBUG"
