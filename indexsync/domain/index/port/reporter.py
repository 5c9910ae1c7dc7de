from abc import abstractmethod
from typing import Protocol


class FailureReporter(Protocol):
    """Terminal path for synchronization and administration failures.

    report() must never raise.
    """

    @abstractmethod
    def report(self, message: str) -> None: ...


class AlertChannel(Protocol):
    """Remote destination for failure reports (e.g. a chat webhook)."""

    @property
    def name(self) -> str: ...

    @abstractmethod
    def send(self, message: str) -> None: ...
