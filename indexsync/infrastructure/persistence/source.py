"""SQLAlchemy implementation of IndexableSource."""

from collections.abc import Iterator

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from indexsync.domain.index.port.indexable import Indexable
from indexsync.domain.index.port.source import IndexableSource


class SqlAlchemyIndexableSource(IndexableSource):
    """Streams mapped instances in chunks of yield_per rows."""

    def __init__(self, session_factory: sessionmaker[Session], chunk_size: int = 500) -> None:
        self._session_factory = session_factory
        self._chunk_size = chunk_size

    def iter_all(self, entity_type: type) -> Iterator[Indexable]:
        stmt = select(entity_type).execution_options(yield_per=self._chunk_size)
        with self._session_factory() as session:
            yield from session.scalars(stmt)
