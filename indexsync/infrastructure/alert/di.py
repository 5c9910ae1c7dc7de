"""Dependency injection provider for failure reporting."""

from collections.abc import Iterable

from dishka import Provider, Scope, provide

from indexsync.config import Config
from indexsync.domain.index.port.reporter import FailureReporter
from indexsync.infrastructure.alert.logger import AlertLogger
from indexsync.infrastructure.alert.slack import SlackWebhook


class AlertProvider(Provider):
    @provide(scope=Scope.APP)
    def get_reporter(self, config: Config) -> Iterable[FailureReporter]:
        slack = config.alerts.slack
        webhook = SlackWebhook(slack) if slack.webhook else None
        yield AlertLogger(remote=webhook)
        if webhook is not None:
            webhook.close()
