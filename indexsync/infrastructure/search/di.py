"""Dependency injection provider for the search engine client."""

from collections.abc import Iterable

from dishka import Provider, Scope, provide
from elasticsearch import Elasticsearch

from indexsync.config import Config, configure_client_logging
from indexsync.domain.index.port.search_client import SearchClient
from indexsync.infrastructure.search.elasticsearch import (
    ElasticsearchSearchClient,
    create_elasticsearch_client,
)


class SearchProvider(Provider):
    @provide(scope=Scope.APP)
    def get_elasticsearch(self, config: Config) -> Iterable[Elasticsearch]:
        connection = config.search.connection
        configure_client_logging(connection)
        client = create_elasticsearch_client(connection)
        yield client
        client.close()

    search_client = provide(
        ElasticsearchSearchClient, scope=Scope.APP, provides=SearchClient
    )
