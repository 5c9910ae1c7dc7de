"""SearchClient port - the search engine calls the sync core depends on."""

from abc import abstractmethod
from typing import Any, Protocol


class SearchClient(Protocol):
    """Synchronous document and index administration calls.

    Implementations raise DocumentNotFoundError, IndexNotFoundError and
    IndexAlreadyExistsError for those conditions and SearchEngineError for
    every other engine or transport failure.
    """

    @abstractmethod
    def index_document(self, index: str, id: str, body: dict[str, Any]) -> None:
        """Create or replace the document with this id."""
        ...

    @abstractmethod
    def delete_document(self, index: str, id: str) -> None: ...

    @abstractmethod
    def create_index(
        self, name: str, settings: dict[str, Any], mappings: dict[str, Any]
    ) -> None: ...

    @abstractmethod
    def delete_index(self, name: str) -> None: ...

    @abstractmethod
    def index_exists(self, name: str) -> bool: ...

    @abstractmethod
    def health(self, name: str) -> str:
        """Cluster health status for the index (green, yellow or red)."""
        ...
