"""SearchClient implementation over the official Elasticsearch client."""

import logging
from typing import Any

from elasticsearch import ApiError, Elasticsearch, NotFoundError, TransportError

from indexsync.config import ConnectionConfig
from indexsync.domain.index.port.search_client import SearchClient
from indexsync.domain.shared.error import (
    DocumentNotFoundError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    SearchEngineError,
)

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "resource_already_exists_exception"
INDEX_NOT_FOUND = "index_not_found_exception"


def create_elasticsearch_client(connection: ConnectionConfig) -> Elasticsearch:
    """Create configured Elasticsearch client."""
    kwargs: dict[str, Any] = {
        "hosts": connection.hosts,
        "request_timeout": connection.request_timeout,
    }
    if connection.username:
        kwargs["basic_auth"] = (connection.username, connection.password or "")
    return Elasticsearch(**kwargs)


class ElasticsearchSearchClient(SearchClient):
    """Translates engine exceptions into indexsync errors."""

    def __init__(self, client: Elasticsearch) -> None:
        self._client = client

    def index_document(self, index: str, id: str, body: dict[str, Any]) -> None:
        try:
            self._client.index(index=index, id=id, document=body)
        except (ApiError, TransportError) as e:
            raise SearchEngineError(f"Indexing {id} into '{index}' failed: {e}", e) from e

    def delete_document(self, index: str, id: str) -> None:
        try:
            self._client.delete(index=index, id=id)
        except NotFoundError as e:
            # A missing index also means the document is absent
            raise DocumentNotFoundError(f"Document {id} not found in '{index}'") from e
        except (ApiError, TransportError) as e:
            raise SearchEngineError(f"Deleting {id} from '{index}' failed: {e}", e) from e

    def create_index(
        self, name: str, settings: dict[str, Any], mappings: dict[str, Any]
    ) -> None:
        try:
            self._client.indices.create(
                index=name,
                settings=settings or None,
                mappings=mappings or None,
            )
        except ApiError as e:
            if _error_type(e) == ALREADY_EXISTS:
                raise IndexAlreadyExistsError(f"Index '{name}' already exists") from e
            raise SearchEngineError(f"Creating index '{name}' failed: {e}", e) from e
        except TransportError as e:
            raise SearchEngineError(f"Creating index '{name}' failed: {e}", e) from e

    def delete_index(self, name: str) -> None:
        try:
            self._client.indices.delete(index=name)
        except NotFoundError as e:
            raise IndexNotFoundError(f"Index '{name}' not found") from e
        except (ApiError, TransportError) as e:
            raise SearchEngineError(f"Deleting index '{name}' failed: {e}", e) from e

    def index_exists(self, name: str) -> bool:
        try:
            return bool(self._client.indices.exists(index=name))
        except (ApiError, TransportError) as e:
            raise SearchEngineError(f"Checking index '{name}' failed: {e}", e) from e

    def health(self, name: str) -> str:
        try:
            response = self._client.cluster.health(index=name)
        except NotFoundError as e:
            raise IndexNotFoundError(f"Index '{name}' not found") from e
        except (ApiError, TransportError) as e:
            raise SearchEngineError(f"Health check for '{name}' failed: {e}", e) from e
        return str(response["status"])


def _error_type(error: ApiError) -> str | None:
    """Extract the engine error type (e.g. resource_already_exists_exception)."""
    body = error.body
    if isinstance(body, dict):
        detail = body.get("error")
        if isinstance(detail, dict):
            return detail.get("type")
        if isinstance(detail, str):
            return detail
    return error.message if isinstance(error.message, str) else None
