from dishka import Provider, Scope, provide
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from indexsync.config import Config
from indexsync.domain.index.port.source import IndexableSource
from indexsync.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from indexsync.infrastructure.persistence.source import SqlAlchemyIndexableSource


class PersistenceProvider(Provider):
    # Factories require method syntax
    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> Engine:
        return create_db_engine(config.database)

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: Engine) -> sessionmaker[Session]:
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_source(self, session_factory: sessionmaker[Session]) -> IndexableSource:
        return SqlAlchemyIndexableSource(session_factory)
