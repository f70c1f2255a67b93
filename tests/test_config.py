"""Tests for YAML configuration loading."""

import logging
from pathlib import Path

from react_cycles.config import DEFAULT_CONFIG_NAME, AnalyzerConfig, load_config


def test_defaults_when_no_file(tmp_path):
    config = load_config(cwd=tmp_path)
    assert config == AnalyzerConfig()
    assert config.entry is None
    assert config.ignore == []
    assert config.max_sessions == 10


def test_default_file_in_cwd(tmp_path):
    (tmp_path / DEFAULT_CONFIG_NAME).write_text(
        "entry: src\nignore:\n  - storybook\n  - __generated__\nmax_sessions: 3\n"
    )
    config = load_config(cwd=tmp_path)
    assert config.entry == "src"
    assert config.ignore == ["storybook", "__generated__"]
    assert config.max_sessions == 3


def test_explicit_path(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("ignore: [legacy]\n")
    assert load_config(path).ignore == ["legacy"]


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == AnalyzerConfig()


def test_invalid_values_logged_and_ignored(tmp_path, caplog):
    path = tmp_path / "bad.yaml"
    path.write_text("max_sessions: 0\n")
    with caplog.at_level(logging.WARNING):
        config = load_config(path)
    assert config.max_sessions == 10
    assert "Could not load config file" in caplog.text


def test_non_mapping_and_malformed_yaml(tmp_path):
    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n")
    broken = tmp_path / "broken.yaml"
    broken.write_text("ignore: [unclosed\n")
    assert load_config(listing) == AnalyzerConfig()
    assert load_config(broken) == AnalyzerConfig()


def test_missing_explicit_file(tmp_path):
    assert load_config(Path(tmp_path / "nope.yaml")) == AnalyzerConfig()
