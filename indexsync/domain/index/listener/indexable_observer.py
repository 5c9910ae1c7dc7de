"""IndexableObserver - maps entity lifecycle notifications to index writes."""

from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.model.value import DeletePolicy, Lifecycle, SyncOperation
from indexsync.domain.index.port.indexable import Indexable
from indexsync.domain.index.service.indexer import DocumentIndexer


class IndexableObserver:
    """Turns each lifecycle notification into exactly one indexer call.

    Soft-deleted entities stay in the index with their deletion marker;
    hard-deleted ones are removed.
    """

    def __init__(self, indexer: DocumentIndexer, settings: IndexSettings) -> None:
        self._indexer = indexer
        self._settings = settings

    def created(self, entity: Indexable) -> None:
        self.notify(Lifecycle.CREATED, entity)

    def updated(self, entity: Indexable) -> None:
        self.notify(Lifecycle.UPDATED, entity)

    def deleted(self, entity: Indexable, *, permanent: bool = False) -> None:
        self.notify(Lifecycle.DELETED, entity, permanent=permanent)

    def restored(self, entity: Indexable) -> None:
        self.notify(Lifecycle.RESTORED, entity)

    def notify(
        self, lifecycle: Lifecycle, entity: Indexable, *, permanent: bool = False
    ) -> None:
        if self.operation_for(lifecycle, entity, permanent=permanent) is SyncOperation.DELETE:
            self._indexer.delete_document(entity)
        else:
            self._indexer.index_document(entity)

    def operation_for(
        self, lifecycle: Lifecycle, entity: Indexable, *, permanent: bool = False
    ) -> SyncOperation:
        if lifecycle is not Lifecycle.DELETED:
            return SyncOperation.UPSERT
        if not permanent and self._is_soft_deleted(entity):
            return SyncOperation.UPSERT
        return SyncOperation.DELETE

    def _is_soft_deleted(self, entity: Indexable) -> bool:
        policy = self._settings.delete_policy(type(entity))
        return policy is DeletePolicy.SOFT_DELETABLE and entity.is_trashed()  # type: ignore[attr-defined]
