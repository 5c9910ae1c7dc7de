"""ReindexService - rebuilds documents for every stored indexable."""

import logging
from collections.abc import Iterable

import logfire
from pydantic import BaseModel

from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.port.source import IndexableSource
from indexsync.domain.index.service.indexer import DocumentIndexer
from indexsync.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)


class TypeReport(BaseModel):
    entity_type: str
    indexed: int = 0
    failed: int = 0


class ReindexReport(BaseModel):
    types: list[TypeReport] = []

    @property
    def indexed(self) -> int:
        return sum(t.indexed for t in self.types)

    @property
    def failed(self) -> int:
        return sum(t.failed for t in self.types)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def summary(self) -> str:
        if not self.types:
            return "No indexable types registered"
        parts = [f"{t.entity_type}: {t.indexed} indexed, {t.failed} failed" for t in self.types]
        return "; ".join(parts)


class ReindexService:
    """Indexes every instance of the registered types.

    Repairs drift left by reported synchronization failures. Individual
    failures are reported by the DocumentIndexer and counted here.
    """

    def __init__(
        self,
        settings: IndexSettings,
        indexer: DocumentIndexer,
        source: IndexableSource,
    ) -> None:
        self._settings = settings
        self._indexer = indexer
        self._source = source

    def reindex(self, types: Iterable[type] | None = None) -> ReindexReport:
        """Reindex the given registered types, or all of them.

        Raises:
            ConfigurationError: If a requested type is not registered.
        """
        selected = self._select(types)
        report = ReindexReport()

        for entity_type in selected:
            type_report = TypeReport(entity_type=entity_type.__name__)
            with logfire.span("Reindex", entity_type=type_report.entity_type):
                for entity in self._source.iter_all(entity_type):
                    if self._indexer.index_document(entity):
                        type_report.indexed += 1
                    else:
                        type_report.failed += 1
            logger.info(
                "Reindexed %s: %d indexed, %d failed",
                type_report.entity_type,
                type_report.indexed,
                type_report.failed,
            )
            report.types.append(type_report)

        return report

    def _select(self, types: Iterable[type] | None) -> tuple[type, ...]:
        registered = self._settings.get_indexables()
        if types is None:
            return registered

        selected = tuple(types)
        for entity_type in selected:
            if entity_type not in registered:
                raise ConfigurationError(
                    f"{entity_type.__name__} is not registered on '{self._settings.name}'"
                )
        return selected
