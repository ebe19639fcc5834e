"""Tests for source_metrics.config."""

import os

import pytest

from source_metrics.config import AnalysisConfig, ThresholdConfig, load_config
from source_metrics.exceptions import ConfigurationError


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """No global or project config files and no SOURCE_METRICS_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for name in list(os.environ):
        if name.startswith("SOURCE_METRICS_"):
            monkeypatch.delenv(name)
    return tmp_path


class TestDefaults:
    def test_threshold_defaults(self):
        t = ThresholdConfig()
        assert t.high_complexity == 10.0
        assert t.high_nesting == 3.0
        assert t.high_branch_density == 5.0
        assert t.high_pattern_matching == 5.0
        assert t.high_parameter_count == 5.0
        assert t.low_documentation == 50.0

    def test_analysis_defaults(self, isolated):
        config = load_config()
        assert config == AnalysisConfig()
        assert config.include_patterns == ["*.py"]
        assert config.max_file_size_bytes == 10 * 1024 * 1024

    def test_effective_workers(self):
        assert AnalysisConfig(workers=3).effective_workers == 3
        assert 1 <= AnalysisConfig().effective_workers <= 8


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": 0},
            {"parallel_min_files": 0},
            {"max_file_size_mb": 0},
            {"include_patterns": []},
            {"project_name": ""},
        ],
    )
    def test_invalid_analysis_config(self, kwargs):
        with pytest.raises(ValueError):
            AnalysisConfig(**kwargs)

    def test_negative_threshold(self):
        with pytest.raises(ValueError, match="high_nesting"):
            ThresholdConfig(high_nesting=-1)

    def test_documentation_range(self):
        with pytest.raises(ValueError):
            ThresholdConfig(low_documentation=101)


class TestLoadConfig:
    def test_explicit_file(self, isolated):
        path = isolated / "custom.toml"
        path.write_text(
            'project_name = "demo"\nworkers = 2\n\n[thresholds]\nhigh_complexity = 15\n'
        )
        config = load_config(path)
        assert config.project_name == "demo"
        assert config.workers == 2
        assert config.thresholds.high_complexity == 15
        assert config.thresholds.high_nesting == 3.0

    def test_project_file_discovered(self, isolated):
        (isolated / "work" / "source-metrics.toml").write_text("parallel_min_files = 4\n")
        assert load_config().parallel_min_files == 4

    def test_global_file_discovered(self, isolated):
        (isolated / "home" / ".source-metrics.toml").write_text('project_id = "g"\n')
        assert load_config().project_id == "g"

    def test_project_overrides_global(self, isolated):
        (isolated / "home" / ".source-metrics.toml").write_text("workers = 2\n")
        (isolated / "work" / "source-metrics.toml").write_text("workers = 3\n")
        assert load_config().workers == 3

    def test_env_overrides_file(self, isolated, monkeypatch):
        path = isolated / "custom.toml"
        path.write_text("workers = 2\n")
        monkeypatch.setenv("SOURCE_METRICS_WORKERS", "6")
        monkeypatch.setenv("SOURCE_METRICS_FOLLOW_SYMLINKS", "yes")
        monkeypatch.setenv("SOURCE_METRICS_MAX_FILE_SIZE_MB", "1.5")
        config = load_config(path)
        assert config.workers == 6
        assert config.follow_symlinks is True
        assert config.max_file_size_mb == 1.5

    def test_list_env_vars_ignored(self, isolated, monkeypatch):
        monkeypatch.setenv("SOURCE_METRICS_INCLUDE_PATTERNS", "*.scala")
        assert load_config().include_patterns == ["*.py"]

    def test_overrides_win(self, isolated, monkeypatch):
        monkeypatch.setenv("SOURCE_METRICS_WORKERS", "6")
        assert load_config(workers=1).workers == 1

    def test_none_overrides_ignored(self, isolated):
        (isolated / "work" / "source-metrics.toml").write_text('project_name = "kept"\n')
        assert load_config(project_name=None).project_name == "kept"


class TestLoadConfigErrors:
    def test_missing_file(self, isolated):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(isolated / "missing.toml")

    def test_malformed_toml(self, isolated):
        path = isolated / "bad.toml"
        path.write_text("workers = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_unknown_key(self, isolated):
        path = isolated / "bad.toml"
        path.write_text("colour = 'blue'\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_value(self, isolated):
        with pytest.raises(ConfigurationError):
            load_config(workers=0)

    def test_invalid_threshold_table(self, isolated):
        path = isolated / "bad.toml"
        path.write_text("[thresholds]\nlow_documentation = 150\n")
        with pytest.raises(ConfigurationError, match="thresholds"):
            load_config(path)

    def test_thresholds_must_be_table(self, isolated):
        path = isolated / "bad.toml"
        path.write_text("thresholds = 3\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_bad_env_value(self, isolated, monkeypatch):
        monkeypatch.setenv("SOURCE_METRICS_FOLLOW_SYMLINKS", "maybe")
        with pytest.raises(ConfigurationError, match="SOURCE_METRICS_FOLLOW_SYMLINKS"):
            load_config()
