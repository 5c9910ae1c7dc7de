"""Shared fakes and fixtures for indexsync tests."""

from collections.abc import Iterator
from typing import Any

import pytest
from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from indexsync.config import DatabaseConfig
from indexsync.domain.index.listener.indexable_observer import IndexableObserver
from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.service.index import Index
from indexsync.domain.index.service.indexer import DocumentIndexer
from indexsync.domain.shared.error import (
    DocumentNotFoundError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    SearchEngineError,
)
from indexsync.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from indexsync.infrastructure.persistence.lifecycle import LifecycleSubscription
from indexsync.infrastructure.persistence.model import IndexableMixin, SoftDeleteMixin


# =============================================================================
# Models
# =============================================================================


class Base(DeclarativeBase):
    pass


class Company(IndexableMixin, Base):
    """Hard-delete-only indexable."""

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))


class Note(SoftDeleteMixin, IndexableMixin, Base):
    """Soft-deletable indexable."""

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100))


class AuditEntry(Base):
    """Mapped but not indexable."""

    __tablename__ = "audit_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    action: Mapped[str] = mapped_column(String(50))


# =============================================================================
# Fakes
# =============================================================================


class FakeSearchClient:
    """In-memory search engine recording every call.

    Set `failures[operation]` to an exception to make that operation raise.
    """

    def __init__(self) -> None:
        self.indexes: dict[str, dict[str, Any]] = {}
        self.documents: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[tuple[str, ...]] = []
        self.failures: dict[str, Exception] = {}

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error

    def index_document(self, index: str, id: str, body: dict[str, Any]) -> None:
        self.calls.append(("index_document", index, id))
        self._maybe_fail("index_document")
        self.documents.setdefault(index, {})[id] = dict(body)

    def delete_document(self, index: str, id: str) -> None:
        self.calls.append(("delete_document", index, id))
        self._maybe_fail("delete_document")
        if id not in self.documents.get(index, {}):
            raise DocumentNotFoundError(f"Document {id} not found in '{index}'")
        del self.documents[index][id]

    def create_index(
        self, name: str, settings: dict[str, Any], mappings: dict[str, Any]
    ) -> None:
        self.calls.append(("create_index", name))
        self._maybe_fail("create_index")
        if name in self.indexes:
            raise IndexAlreadyExistsError(f"Index '{name}' already exists")
        self.indexes[name] = {"settings": settings, "mappings": mappings}
        self.documents[name] = {}

    def delete_index(self, name: str) -> None:
        self.calls.append(("delete_index", name))
        self._maybe_fail("delete_index")
        if name not in self.indexes:
            raise IndexNotFoundError(f"Index '{name}' not found")
        del self.indexes[name]
        self.documents.pop(name, None)

    def index_exists(self, name: str) -> bool:
        self._maybe_fail("index_exists")
        return name in self.indexes

    def health(self, name: str) -> str:
        self._maybe_fail("health")
        return "green"

    def calls_of(self, operation: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == operation]


class RecordingReporter:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def report(self, message: str) -> None:
        self.messages.append(message)


# =============================================================================
# Fixtures
# =============================================================================

INDEX_NAME = "test-index"


@pytest.fixture
def search_client() -> FakeSearchClient:
    return FakeSearchClient()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def index_settings() -> IndexSettings:
    settings = IndexSettings(
        INDEX_NAME,
        settings={"number_of_shards": 1},
        mappings={"properties": {"name": {"type": "text"}}},
    )
    settings.register_indexables([Company, Note])
    return settings


@pytest.fixture
def index(
    search_client: FakeSearchClient,
    index_settings: IndexSettings,
    reporter: RecordingReporter,
) -> Index:
    return Index(search_client, index_settings, reporter)


@pytest.fixture
def indexer(
    search_client: FakeSearchClient, index: Index, reporter: RecordingReporter
) -> DocumentIndexer:
    return DocumentIndexer(search_client, index, reporter)


@pytest.fixture
def observer(indexer: DocumentIndexer, index_settings: IndexSettings) -> IndexableObserver:
    return IndexableObserver(indexer, index_settings)


@pytest.fixture
def session_factory() -> Iterator[sessionmaker[Session]]:
    engine = create_db_engine(DatabaseConfig(url="sqlite://"))
    Base.metadata.create_all(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def subscription(
    index_settings: IndexSettings,
    observer: IndexableObserver,
    reporter: RecordingReporter,
) -> Iterator[LifecycleSubscription]:
    subscription = LifecycleSubscription(index_settings, observer, reporter)
    subscription.attach()
    yield subscription
    subscription.detach()
