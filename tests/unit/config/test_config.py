"""Tests for Config loading."""

import logging
from pathlib import Path

import pytest

from indexsync.config import (
    Config,
    ConnectionConfig,
    SearchConfig,
    configure_client_logging,
)
from indexsync.domain.shared.error import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("INDEXSYNC_CONFIG_FILE", raising=False)
    monkeypatch.delenv("INDEXSYNC_INDEX__NAME", raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self):
        config = Config()

        assert config.index.name == "indexsync"
        assert config.index.indexables == []
        assert config.search.connection.hosts == ["http://localhost:9200"]
        assert config.alerts.slack.webhook is None

    def test_env_prefix(self):
        assert Config.model_config.get("env_prefix") == "INDEXSYNC_"


class TestSources:
    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("INDEXSYNC_INDEX__NAME", "companies")

        assert Config().index.name == "companies"

    def test_yaml_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        config_file = tmp_path / "indexsync.yaml"
        config_file.write_text(
            """
index:
  name: directory
  settings:
    number_of_shards: 2
  mappings:
    properties:
      name: {type: text}
  indexables:
    - app.models:Company
search:
  default_connection: primary
  connections:
    primary:
      hosts: ["http://es-1:9200", "http://es-2:9200"]
      logging: true
alerts:
  slack:
    webhook: https://hooks.slack.test/T000/B000
    channel: "#search"
"""
        )
        monkeypatch.setenv("INDEXSYNC_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.index.name == "directory"
        assert config.index.settings == {"number_of_shards": 2}
        assert config.index.indexables == ["app.models:Company"]
        assert config.search.connection.hosts == ["http://es-1:9200", "http://es-2:9200"]
        assert config.search.connection.logging is True
        assert config.alerts.slack.channel == "#search"

    def test_env_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        config_file = tmp_path / "indexsync.yaml"
        config_file.write_text("index:\n  name: from-yaml\n")
        monkeypatch.setenv("INDEXSYNC_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("INDEXSYNC_INDEX__NAME", "from-env")

        assert Config().index.name == "from-env"

    def test_missing_yaml_file_is_ignored(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("INDEXSYNC_CONFIG_FILE", str(tmp_path / "missing.yaml"))

        assert Config().index.name == "indexsync"


class TestSearchConfig:
    def test_unknown_default_connection(self):
        search = SearchConfig(default_connection="replica")

        with pytest.raises(ConfigurationError):
            search.connection


class TestClientLogging:
    def test_disabled_adds_no_handler(self, tmp_path: Path):
        before = list(logging.getLogger("elastic_transport").handlers)

        configure_client_logging(ConnectionConfig(log_path=tmp_path / "es.log"))

        assert logging.getLogger("elastic_transport").handlers == before

    def test_enabled_writes_to_log_path(self, tmp_path: Path):
        log_path = tmp_path / "logs" / "es.log"

        configure_client_logging(ConnectionConfig(logging=True, log_path=log_path))
        try:
            handlers = [
                h
                for h in logging.getLogger("elasticsearch").handlers
                if isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path)
            ]
            assert len(handlers) == 1
            assert log_path.parent.is_dir()
        finally:
            for name in ("elasticsearch", "elastic_transport"):
                client_logger = logging.getLogger(name)
                for h in client_logger.handlers[:]:
                    if isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path):
                        client_logger.removeHandler(h)
                        h.close()
