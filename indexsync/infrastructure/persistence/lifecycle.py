"""Wires IndexableObserver to SQLAlchemy mapper events."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import event, inspect
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Mapper

from indexsync.domain.index.listener.indexable_observer import IndexableObserver
from indexsync.domain.index.model.settings import IndexSettings
from indexsync.domain.index.model.value import DeletePolicy, Lifecycle
from indexsync.domain.index.port.reporter import FailureReporter
from indexsync.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)

MapperHandler = Callable[[Mapper[Any], Connection, Any], None]


class LifecycleSubscription:
    """Attaches the observer to every registered mapped class.

    Handlers run inside the session flush, on the flushing thread. Inserts
    become `created`, deletes become permanent `deleted`. Updates of a
    soft-deletable type are classified by the change to its soft-delete
    attribute: newly set is `deleted`, newly cleared is `restored`,
    anything else is `updated`.

    Every registered type is validated before any listener is installed, so
    a misconfigured type leaves nothing attached.
    """

    def __init__(
        self,
        settings: IndexSettings,
        observer: IndexableObserver,
        reporter: FailureReporter,
    ) -> None:
        self._settings = settings
        self._observer = observer
        self._reporter = reporter
        self._listeners: list[tuple[type, str, MapperHandler]] = []

    @property
    def attached(self) -> bool:
        return bool(self._listeners)

    def attach(self) -> None:
        """Install the mapper listeners.

        Raises:
            ConfigurationError: If a registered type is not mapped, or is
                soft-deletable without a mapped soft-delete attribute.
        """
        if self.attached:
            return

        self._settings.seal()
        plan = [
            (entity_type, self._handlers_for(entity_type))
            for entity_type in self._settings.get_indexables()
        ]
        for entity_type, handlers in plan:
            for identifier, handler in handlers.items():
                event.listen(entity_type, identifier, handler, propagate=True)
                self._listeners.append((entity_type, identifier, handler))
        logger.info(
            "Observing %d indexable type(s) for index '%s'",
            len(plan),
            self._settings.name,
        )

    def detach(self) -> None:
        for entity_type, identifier, handler in self._listeners:
            event.remove(entity_type, identifier, handler)
        self._listeners.clear()

    def _handlers_for(self, entity_type: type) -> dict[str, MapperHandler]:
        mapper = inspect(entity_type, raiseerr=False)
        if mapper is None:
            raise ConfigurationError(f"{entity_type.__name__} is not a mapped class")

        handlers: dict[str, MapperHandler] = {
            "after_insert": self._after_insert,
            "after_update": self._after_update,
            "after_delete": self._after_delete,
        }
        if self._settings.delete_policy(entity_type) is DeletePolicy.SOFT_DELETABLE:
            attribute = getattr(entity_type, "__soft_delete_attribute__", "deleted_at")
            if attribute not in mapper.attrs:
                raise ConfigurationError(
                    f"{entity_type.__name__} is soft-deletable but has no mapped "
                    f"'{attribute}' attribute; set __soft_delete_attribute__"
                )
            handlers["after_update"] = self._soft_delete_aware(attribute)
        return handlers

    def _after_insert(self, mapper: Mapper[Any], connection: Connection, target: Any) -> None:
        self._observer.created(target)

    def _after_update(self, mapper: Mapper[Any], connection: Connection, target: Any) -> None:
        self._observer.updated(target)

    def _after_delete(self, mapper: Mapper[Any], connection: Connection, target: Any) -> None:
        self._observer.deleted(target, permanent=True)

    def _soft_delete_aware(self, attribute: str) -> MapperHandler:
        def after_update(mapper: Mapper[Any], connection: Connection, target: Any) -> None:
            try:
                lifecycle = _classify_update(target, attribute)
            except Exception as e:
                self._reporter.report(
                    f"Could not classify update of {type(target).__name__} "
                    f"via '{attribute}', indexing as updated: {e}"
                )
                lifecycle = Lifecycle.UPDATED
            self._observer.notify(lifecycle, target)

        return after_update


def _classify_update(target: Any, attribute: str) -> Lifecycle:
    history = inspect(target).attrs[attribute].history
    if not history.has_changes():
        return Lifecycle.UPDATED
    if getattr(target, attribute) is not None:
        return Lifecycle.DELETED
    return Lifecycle.RESTORED
