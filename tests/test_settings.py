"""
tests/test_settings.py — YAML settings, overrides and validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from geoexplorer.config import ConfigurationError, ExplorerSettings, load_settings
from geoexplorer.config.settings import DEFAULT_POLL_INTERVAL_MS


def test_defaults():
    settings = load_settings()
    assert settings.data_dir == Path("data")
    assert settings.gdp_path == Path("data") / "dataPKB" / "pkb.csv"
    assert settings.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS
    assert settings.seed is None
    assert settings.log_file is None
    assert settings.verbose is False


def test_gdp_path_follows_data_dir():
    settings = ExplorerSettings(data_dir="/srv/geo")
    assert settings.gdp_path == Path("/srv/geo/dataPKB/pkb.csv")


def test_yaml_file_is_loaded(tmp_path):
    config = tmp_path / "explorer.yml"
    config.write_text(
        "data_dir: /srv/geo\n"
        "gdp_path: /srv/pkb.csv\n"
        "poll_interval_ms: 250\n"
        "seed: 42\n",
        encoding="utf-8",
    )
    settings = load_settings(config)

    assert settings.data_dir == Path("/srv/geo")
    assert settings.gdp_path == Path("/srv/pkb.csv")
    assert settings.poll_interval_ms == 250
    assert settings.seed == 42


def test_overrides_win_over_file(tmp_path):
    config = tmp_path / "explorer.yml"
    config.write_text("data_dir: /srv/geo\nseed: 1\n", encoding="utf-8")

    settings = load_settings(config, data_dir=tmp_path, seed=None, verbose=True)
    assert settings.data_dir == tmp_path
    assert settings.seed == 1
    assert settings.verbose is True


def test_empty_yaml_file_gives_defaults(tmp_path):
    config = tmp_path / "explorer.yml"
    config.write_text("", encoding="utf-8")
    assert load_settings(config) == ExplorerSettings()


@pytest.mark.parametrize("content", [
    "colour: blue\n",
    "poll_interval_ms: 0\n",
    "poll_interval_ms: fast\n",
    "seed: abc\n",
    "- just\n- a list\n",
    "data_dir: [unclosed\n",
])
def test_invalid_configuration(tmp_path, content):
    config = tmp_path / "explorer.yml"
    config.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(config)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "absent.yml")
