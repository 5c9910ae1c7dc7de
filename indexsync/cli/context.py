"""Builds the application container for CLI commands."""

import logfire
from dishka import Container

from indexsync.application.di import create_container
from indexsync.config import Config, configure_logging


def open_container() -> Container:
    config = Config()
    configure_logging(config.logging)
    # Spans are exported only when a Logfire token is configured
    logfire.configure(send_to_logfire="if-token-present", console=False)
    logfire.instrument_httpx()
    return create_container(config)
