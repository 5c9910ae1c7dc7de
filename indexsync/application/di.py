from dishka import Container, Provider, Scope, from_context, make_container

from indexsync.config import Config
from indexsync.infrastructure.alert.di import AlertProvider
from indexsync.infrastructure.index.di import IndexProvider
from indexsync.infrastructure.persistence.di import PersistenceProvider
from indexsync.infrastructure.search.di import SearchProvider


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None, *overrides: Provider) -> Container:
    """Build the application container.

    Providers in `overrides` come last and replace earlier bindings, e.g. a
    fake SearchClient in tests.
    """
    config = config or Config()

    return make_container(
        ConfigProvider(),
        SearchProvider(),
        AlertProvider(),
        PersistenceProvider(),
        IndexProvider(),
        *overrides,
        context={Config: config},
    )
