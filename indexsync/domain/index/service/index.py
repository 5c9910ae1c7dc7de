"""Index - administrative lifecycle of the physical search index."""

import logging

import logfire

from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.model.value import OperationResult
from indexsync.domain.index.port.reporter import FailureReporter
from indexsync.domain.index.port.search_client import SearchClient
from indexsync.domain.shared.error import (
    IndexAlreadyExistsError,
    IndexNotFoundError,
    IndexOperationError,
    SearchEngineError,
)

logger = logging.getLogger(__name__)


class Index:
    """Creates, deletes and flushes the index described by IndexSettings.

    Operations are safe to re-run: creating an existing index and deleting a
    missing one both succeed. Any other engine failure is reported and raised
    as IndexOperationError. Nothing is retried.
    """

    def __init__(
        self,
        client: SearchClient,
        settings: IndexSettings,
        reporter: FailureReporter,
    ) -> None:
        self._client = client
        self._settings = settings
        self._reporter = reporter

    @property
    def settings(self) -> IndexSettings:
        return self._settings

    @property
    def name(self) -> str:
        return self._settings.name

    def create(self) -> OperationResult:
        try:
            with logfire.span("CreateIndex", index=self.name):
                self._client.create_index(
                    self.name, self._settings.settings, self._settings.mappings
                )
        except IndexAlreadyExistsError:
            logger.info("Index '%s' already exists, nothing to create", self.name)
            return OperationResult(summary=f"Index '{self.name}' already exists")
        except SearchEngineError as e:
            raise self._failed("create", e) from e

        logger.info("Created index '%s'", self.name)
        return OperationResult(summary=f"Created index '{self.name}'")

    def delete(self) -> OperationResult:
        try:
            with logfire.span("DeleteIndex", index=self.name):
                self._client.delete_index(self.name)
        except IndexNotFoundError:
            logger.info("Index '%s' does not exist, nothing to delete", self.name)
            return OperationResult(summary=f"Index '{self.name}' does not exist")
        except SearchEngineError as e:
            raise self._failed("delete", e) from e

        logger.info("Deleted index '%s'", self.name)
        return OperationResult(summary=f"Deleted index '{self.name}'")

    def flush(self) -> OperationResult:
        """Delete and recreate the index with the current settings and mappings."""
        deleted = self.delete()
        created = self.create()
        return OperationResult(summary=f"{deleted.summary}; {created.summary}")

    def exists(self) -> bool:
        try:
            return self._client.index_exists(self.name)
        except SearchEngineError as e:
            raise self._failed("exists", e) from e

    def health(self) -> str:
        try:
            return self._client.health(self.name)
        except SearchEngineError as e:
            raise self._failed("health", e) from e

    def _failed(self, operation: str, error: SearchEngineError) -> IndexOperationError:
        failure = IndexOperationError(operation, self.name, error.cause or error)
        self._reporter.report(failure.message)
        return failure
