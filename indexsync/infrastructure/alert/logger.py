"""AlertLogger - dual-sink failure reporter."""

import logging

from indexsync.domain.index.port.reporter import AlertChannel, FailureReporter

ALERT_LOGGER = "indexsync.alerts"


class AlertLogger(FailureReporter):
    """Writes every failure locally and forwards it to a remote channel.

    The local write always happens. Remote delivery is best-effort: a
    failure to forward is logged locally and never raised, so reporting a
    synchronization failure cannot fail the caller's own operation.
    """

    def __init__(
        self,
        remote: AlertChannel | None = None,
        local: logging.Logger | None = None,
    ) -> None:
        self._remote = remote
        self._local = local or logging.getLogger(ALERT_LOGGER)

    def report(self, message: str) -> None:
        self._local.error(message)

        if self._remote is None:
            return

        try:
            self._remote.send(message)
        except Exception as e:
            self._local.warning("Failed to forward alert to %s: %s", self._remote.name, e)
