"""IndexableSource port - enumerates stored entities for reindexing."""

from abc import abstractmethod
from collections.abc import Iterator
from typing import Protocol

from indexsync.domain.index.port.indexable import Indexable


class IndexableSource(Protocol):
    @abstractmethod
    def iter_all(self, entity_type: type) -> Iterator[Indexable]:
        """Yield every stored instance of entity_type, soft-deleted ones included."""
        ...
