"""Tests for wordtally.core.config."""

import json
import os

import pytest
import yaml

from wordtally.core.config import Config, get_config, reset_config
from wordtally.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("paths.data_dir").endswith(".wordtally-data")
        assert config.get("tracking.debounce_seconds") == 0.4
        assert config.get("tracking.save_interval_seconds") == 1.0
        assert config.get("storage.state_key") == "state.json"
        assert config.get("watch.extensions") == [".md", ".txt"]

    def test_custom_data_dir(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("paths.data_dir") == tmp_dir
        assert config.get("paths.storage_dir") == os.path.join(tmp_dir, "storage")

    def test_yaml_config_file(self, tmp_config_file, tmp_dir):
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        assert config.get("tracking.debounce_seconds") == 0.05
        # untouched defaults survive the merge
        assert config.get("tracking.save_interval_seconds") == 1.0

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"storage": {"compress": True}}, f)

        config = Config(config_file=config_path, data_dir=tmp_dir)
        assert config.get("storage.compress") is True
        assert config.get("storage.state_key") == "state.json"

    def test_invalid_yaml_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("tracking: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            Config(config_file=config_path, data_dir=tmp_dir)

    def test_non_mapping_file_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump(["a", "b"], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=config_path, data_dir=tmp_dir)

    def test_env_overrides_file(self, tmp_config_file, tmp_dir, monkeypatch):
        monkeypatch.setenv("WORDTALLY_TRACKING__DEBOUNCE_SECONDS", "1.5")
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        assert config.get("tracking.debounce_seconds") == "1.5"
        assert config.get_float("tracking.debounce_seconds") == 1.5

    def test_custom_env_prefix(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MYAPP_STORAGE__STATE_KEY", "other.json")
        config = Config(env_prefix="MYAPP_", data_dir=tmp_dir)
        assert config.get("storage.state_key") == "other.json"

    def test_get_float_rejects_garbage(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("tracking.debounce_seconds", "soon")
        with pytest.raises(ConfigurationError, match="number"):
            config.get_float("tracking.debounce_seconds")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False), (True, True), (False, False)],
    )
    def test_get_bool(self, tmp_dir, raw, expected):
        config = Config(data_dir=tmp_dir)
        config.set("storage.compress", raw)
        assert config.get_bool("storage.compress") is expected

    def test_get_list_from_env_string(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("WORDTALLY_WATCH__EXTENSIONS", ".md, .rst")
        config = Config(data_dir=tmp_dir)
        assert config.get_list("watch.extensions") == [".md", ".rst"]

    def test_get_list_single_env_value(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("WORDTALLY_WATCH__EXTENSIONS", ".md")
        config = Config(data_dir=tmp_dir)
        assert config.get_list("watch.extensions") == [".md"]

    def test_get_list_default_and_file_values(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get_list("watch.extensions") == [".md", ".txt"]
        assert config.get_list("nonexistent.key") == []

    def test_get_list_rejects_scalars(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("watch.extensions", 3)
        with pytest.raises(ConfigurationError, match="list"):
            config.get_list("watch.extensions")

    def test_get_missing_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_ensure_directories(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.ensure_directories()
        assert os.path.isdir(os.path.join(tmp_dir, "storage"))
        assert os.path.isdir(os.path.join(tmp_dir, "logs"))

    def test_extra_defaults(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"tracking": {"debounce_seconds": 2}})
        assert config.get("tracking.debounce_seconds") == 2
        assert config.get("tracking.save_interval_seconds") == 1.0


class TestGetConfig:
    def test_singleton(self, tmp_dir):
        c1 = get_config(data_dir=tmp_dir)
        c2 = get_config()
        assert c1 is c2

    def test_reset_clears_singleton(self, tmp_dir):
        c1 = get_config(data_dir=tmp_dir)
        reset_config()
        c2 = get_config(data_dir=tmp_dir)
        assert c1 is not c2
