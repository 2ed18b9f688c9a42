from pathlib import Path

import pytest

from hospital.config import DEFAULT_DATA_DIR, load_settings
from hospital.errors import ConfigError


def test_defaults():
    settings = load_settings({})
    assert settings.backend == "json"
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.data_key is None
    assert settings.history_limit == 50


def test_overrides(tmp_path):
    settings = load_settings({
        "HMS_STORAGE_BACKEND": "SQLite",
        "HMS_DATA_DIR": str(tmp_path),
        "APP_DATA_KEY": "abc",
        "HMS_HISTORY_LIMIT": "10",
        "HMS_LOG_LEVEL": "debug",
    })
    assert settings.backend == "sqlite"
    assert settings.sqlite_path == Path(tmp_path) / "hospital.db"
    assert settings.data_key == "abc"
    assert settings.history_limit == 10
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("env", [
    {"HMS_STORAGE_BACKEND": "redis"},
    {"HMS_HISTORY_LIMIT": "many"},
    {"HMS_HISTORY_LIMIT": "0"},
])
def test_invalid_settings(env):
    with pytest.raises(ConfigError):
        load_settings(env)
