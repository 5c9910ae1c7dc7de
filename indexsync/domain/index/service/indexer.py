"""DocumentIndexer - mirrors single entities into the search index."""

import logging

from indexsync.domain.index.model.value import Document
from indexsync.domain.index.port.indexable import Indexable
from indexsync.domain.index.port.reporter import FailureReporter
from indexsync.domain.index.port.search_client import SearchClient
from indexsync.domain.index.service.index import Index
from indexsync.domain.shared.error import DocumentNotFoundError

logger = logging.getLogger(__name__)


class DocumentIndexer:
    """Upserts and deletes one document per call.

    Runs inline with the datastore write that triggered it, so failures are
    reported and swallowed: the database stays the system of record and the
    index is allowed to fall behind until the next write or a reindex.
    """

    def __init__(
        self,
        client: SearchClient,
        index: Index,
        reporter: FailureReporter,
    ) -> None:
        self._client = client
        self._index = index
        self._reporter = reporter

    def index_document(self, entity: Indexable) -> bool:
        """Create or replace the entity's document. Returns False on failure."""
        try:
            document = Document.from_indexable(entity)
            self._client.index_document(self._index.name, document.id, document.body)
        except Exception as e:
            self._reporter.report(
                f"Failed to index {_describe(entity)} into '{self._index.name}': {e}"
            )
            return False

        logger.debug("Indexed %s into '%s'", _describe(entity), self._index.name)
        return True

    def delete_document(self, entity: Indexable) -> bool:
        """Remove the entity's document. A missing document counts as deleted."""
        try:
            self._client.delete_document(self._index.name, entity.get_document_key())
        except DocumentNotFoundError:
            logger.debug("%s was not in '%s'", _describe(entity), self._index.name)
        except Exception as e:
            self._reporter.report(
                f"Failed to delete {_describe(entity)} from '{self._index.name}': {e}"
            )
            return False

        logger.debug("Deleted %s from '%s'", _describe(entity), self._index.name)
        return True


def _describe(entity: Indexable) -> str:
    try:
        key = entity.get_document_key()
    except Exception:
        key = "?"
    return f"{type(entity).__name__} {key}"
