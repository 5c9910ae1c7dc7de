"""Unit tests for ReindexService."""

from collections.abc import Iterator

import pytest
from conftest import INDEX_NAME, AuditEntry, Company, FakeSearchClient, Note, RecordingReporter

from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.service.indexer import DocumentIndexer
from indexsync.domain.index.service.reindex import ReindexService
from indexsync.domain.shared.error import ConfigurationError, SearchEngineError


class FakeSource:
    def __init__(self, entities: dict[type, list]) -> None:
        self._entities = entities

    def iter_all(self, entity_type: type) -> Iterator:
        return iter(self._entities.get(entity_type, []))


@pytest.fixture
def source() -> FakeSource:
    trashed = Note(id=12, title="Old")
    trashed.soft_delete()
    return FakeSource(
        {
            Company: [Company(id=1, name="Acme"), Company(id=2, name="Globex")],
            Note: [Note(id=11, title="New"), trashed],
        }
    )


@pytest.fixture
def service(
    index_settings: IndexSettings, indexer: DocumentIndexer, source: FakeSource
) -> ReindexService:
    return ReindexService(index_settings, indexer, source)


class TestReindex:
    def test_indexes_every_instance_of_every_type(
        self, service: ReindexService, search_client: FakeSearchClient
    ):
        report = service.reindex()

        assert report.ok
        assert report.indexed == 4
        assert [t.entity_type for t in report.types] == ["Company", "Note"]
        assert len(search_client.calls_of("index_document")) == 4
        assert search_client.documents[INDEX_NAME]["12"]["deleted_at"] is not None

    def test_subset_of_types(self, service: ReindexService):
        report = service.reindex([Company])

        assert [t.entity_type for t in report.types] == ["Company"]
        assert report.indexed == 2

    def test_unregistered_type_is_rejected(self, service: ReindexService):
        with pytest.raises(ConfigurationError):
            service.reindex([AuditEntry])

    def test_failures_are_counted(
        self,
        service: ReindexService,
        search_client: FakeSearchClient,
        reporter: RecordingReporter,
    ):
        search_client.failures["index_document"] = SearchEngineError("red cluster")

        report = service.reindex()

        assert not report.ok
        assert report.failed == 4
        assert len(reporter.messages) == 4
        assert "Company: 0 indexed, 2 failed" in report.summary

    def test_no_registered_types(self, indexer: DocumentIndexer, source: FakeSource):
        service = ReindexService(IndexSettings("empty"), indexer, source)

        report = service.reindex()

        assert report.ok
        assert report.summary == "No indexable types registered"
