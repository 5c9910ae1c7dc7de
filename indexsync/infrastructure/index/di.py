"""Dependency injection provider for the index synchronization core."""

from dishka import Provider, Scope, provide

from indexsync.config import Config
from indexsync.domain.index.listener.indexable_observer import IndexableObserver
from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.service.index import Index
from indexsync.domain.index.service.indexer import DocumentIndexer
from indexsync.domain.index.service.reindex import ReindexService
from indexsync.infrastructure.index.discovery import resolve_indexables
from indexsync.infrastructure.persistence.lifecycle import LifecycleSubscription


class IndexProvider(Provider):
    """Provides the index descriptor and the services built on it."""

    @provide(scope=Scope.APP)
    def get_settings(self, config: Config) -> IndexSettings:
        settings = IndexSettings(
            config.index.name,
            config.index.settings,
            config.index.mappings,
        )
        settings.register_indexables(resolve_indexables(config.index.indexables))
        return settings

    index = provide(Index, scope=Scope.APP)
    indexer = provide(DocumentIndexer, scope=Scope.APP)
    observer = provide(IndexableObserver, scope=Scope.APP)
    reindex = provide(ReindexService, scope=Scope.APP)
    subscription = provide(LifecycleSubscription, scope=Scope.APP)
