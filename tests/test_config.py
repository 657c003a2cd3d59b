"""Tests for configuration loading."""

import os

import pytest

from codemeasure.config import DistributionConfig, MeasureSettings, load_config
from codemeasure.exceptions import InvalidConfigError, InvalidPathError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run each test with an empty home, cwd and CODEMEASURE_* environment."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CODEMEASURE_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_default_bounds(self):
        settings = load_config()
        assert settings.distributions.function_bottom_limits == (1, 2, 4, 6, 8, 10, 12, 20, 30)
        assert settings.distributions.file_bottom_limits == (0, 5, 10, 20, 30, 60, 90)

    def test_default_scanner_settings(self):
        settings = load_config()
        assert settings.defines == ()
        assert settings.include_directories == ()
        assert settings.verbosity == "normal"

    def test_effective_workers_auto(self):
        assert MeasureSettings().effective_workers >= 1
        assert MeasureSettings(workers=3).effective_workers == 3


class TestValidation:
    def test_bad_workers(self):
        with pytest.raises(InvalidConfigError, match="workers"):
            MeasureSettings(workers=0)

    def test_bad_verbosity(self):
        with pytest.raises(InvalidConfigError):
            MeasureSettings(verbosity="loud")

    def test_defines_must_be_list(self):
        with pytest.raises(InvalidConfigError, match="defines"):
            MeasureSettings(defines="NDEBUG")

    def test_bad_bounds(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            DistributionConfig(file_bottom_limits=(0, 10, 5))
        assert exc_info.value.key == "distributions.file_bottom_limits"

    def test_unknown_override(self):
        with pytest.raises(InvalidConfigError):
            load_config(colour="blue")


class TestSources:
    def test_project_file(self, tmp_path):
        (tmp_path / "codemeasure.toml").write_text(
            'defines = ["NDEBUG"]\n'
            'include_directories = ["include"]\n'
            "workers = 2\n"
            "\n"
            "[distributions]\n"
            "file_bottom_limits = [0, 50]\n"
        )
        settings = load_config()
        assert settings.defines == ("NDEBUG",)
        assert settings.include_directories == ("include",)
        assert settings.workers == 2
        assert settings.distributions.file_bottom_limits == (0, 50)
        assert settings.distributions.function_bottom_limits == (1, 2, 4, 6, 8, 10, 12, 20, 30)

    def test_explicit_file_beats_project_file(self, tmp_path):
        (tmp_path / "codemeasure.toml").write_text("workers = 2\n")
        explicit = tmp_path / "other.toml"
        explicit.write_text("workers = 5\n")
        assert load_config(config_file=explicit).workers == 5

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(InvalidPathError):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        broken = tmp_path / "broken.toml"
        broken.write_text("workers = [\n")
        with pytest.raises(InvalidConfigError):
            load_config(config_file=broken)

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("CODEMEASURE_DEFINES", "A=1, B")
        monkeypatch.setenv("CODEMEASURE_WORKERS", "3")
        monkeypatch.setenv("CODEMEASURE_VERBOSITY", "verbose")
        settings = load_config()
        assert settings.defines == ("A=1", "B")
        assert settings.workers == 3
        assert settings.verbosity == "verbose"

    def test_env_bad_int(self, monkeypatch):
        monkeypatch.setenv("CODEMEASURE_WORKERS", "many")
        with pytest.raises(InvalidConfigError, match="CODEMEASURE_WORKERS"):
            load_config()

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("CODEMEASURE_WORKERS", "3")
        assert load_config(workers=6).workers == 6

    def test_verbose_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_log_file_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CODEMEASURE_LOG_FILE", str(tmp_path / "cm.log"))
        assert load_config().log_file == str(tmp_path / "cm.log")

    def test_log_file_must_be_string(self):
        with pytest.raises(InvalidConfigError, match="log_file"):
            MeasureSettings(log_file=3)
