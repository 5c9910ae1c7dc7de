import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from indexsync.domain.shared.error import ConfigurationError


# =============================================================================
# Search Engine Configuration
# =============================================================================


class ConnectionConfig(BaseModel):
    """Connection to one search cluster."""

    hosts: list[str] = ["http://localhost:9200"]
    logging: bool = False  # Write client request logs to log_path
    log_path: Path = Path("~/.local/state/indexsync/logs/elasticsearch.log")
    request_timeout: float = 10.0
    username: str | None = None
    password: str | None = None


class SearchConfig(BaseModel):
    default_connection: str = "default"
    connections: dict[str, ConnectionConfig] = {"default": ConnectionConfig()}

    @property
    def connection(self) -> ConnectionConfig:
        """The connection named by default_connection."""
        try:
            return self.connections[self.default_connection]
        except KeyError:
            raise ConfigurationError(
                f"Unknown search connection '{self.default_connection}'"
            ) from None


# =============================================================================
# Index Configuration
# =============================================================================


class IndexConfig(BaseModel):
    """The index kept in sync with the database."""

    name: str = "indexsync"
    settings: dict[str, Any] = {}  # Passed to the engine unmodified
    mappings: dict[str, Any] = {}  # Passed to the engine unmodified
    indexables: list[str] = []  # "package.module:ClassName" import paths


# =============================================================================
# Alert Configuration
# =============================================================================


class SlackConfig(BaseModel):
    webhook: str | None = None  # Incoming webhook URL, None disables forwarding
    channel: str | None = None
    username: str = "indexsync"
    icon_emoji: str = ":rotating_light:"
    timeout: float = 5.0


class AlertConfig(BaseModel):
    slack: SlackConfig = SlackConfig()


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by INDEXSYNC_CONFIG_FILE env var."""

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("INDEXSYNC_CONFIG_FILE")
        if config_file:
            path = Path(config_file).expanduser()
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///~/.local/share/indexsync/indexsync.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from INDEXSYNC_LOG_FILE env var."""
        return os.environ.get("INDEXSYNC_LOG_FILE")


class Config(BaseSettings):
    search: SearchConfig = SearchConfig()
    index: IndexConfig = IndexConfig()
    alerts: AlertConfig = AlertConfig()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="INDEXSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows INDEXSYNC_INDEX__NAME override
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - INDEXSYNC_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so all loggers pick up
    the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)


def configure_client_logging(connection: ConnectionConfig) -> None:
    """Send Elasticsearch client request logs to the connection's log file."""
    if not connection.logging:
        return

    log_path = connection.log_path.expanduser().absolute()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter(LoggingConfig().format))

    for name in ("elasticsearch", "elastic_transport"):
        client_logger = logging.getLogger(name)
        client_logger.setLevel(logging.INFO)
        # Skip if this file is already attached
        if any(
            isinstance(h, logging.FileHandler) and h.baseFilename == handler.baseFilename
            for h in client_logger.handlers
        ):
            continue
        client_logger.addHandler(handler)
