"""IndexSettings - descriptor of one search index and the types it tracks."""

import copy
import logging
from collections.abc import Iterable
from typing import Any

from indexsync.domain.index.model.value import DeletePolicy
from indexsync.domain.index.port.indexable import Indexable
from indexsync.domain.shared.error import ConfigurationError, InvalidStateError

logger = logging.getLogger(__name__)


class IndexSettings:
    """Name, engine settings, mappings and registered indexable types.

    Name, settings and mappings are fixed at construction. The indexable
    registry may grow until seal() is called, which happens when the
    lifecycle subscription attaches.
    """

    def __init__(
        self,
        name: str,
        settings: dict[str, Any] | None = None,
        mappings: dict[str, Any] | None = None,
    ) -> None:
        self._name = name
        self._settings = copy.deepcopy(settings or {})
        self._mappings = copy.deepcopy(mappings or {})
        self._indexables: dict[type, DeletePolicy] = {}
        self._sealed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def settings(self) -> dict[str, Any]:
        return copy.deepcopy(self._settings)

    @property
    def mappings(self) -> dict[str, Any]:
        return copy.deepcopy(self._mappings)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register_indexables(self, types: Iterable[type]) -> None:
        """Track the given entity types. Types already registered are skipped."""
        if self._sealed:
            raise InvalidStateError(
                f"Index '{self._name}' is already observed; register indexables before wiring"
            )

        for entity_type in types:
            if not isinstance(entity_type, type) or not issubclass(entity_type, Indexable):
                raise ConfigurationError(f"{entity_type!r} does not implement Indexable")
            if entity_type in self._indexables:
                continue
            policy = DeletePolicy.for_type(entity_type)
            self._indexables[entity_type] = policy
            logger.debug(
                "Registered indexable %s (%s) on '%s'",
                entity_type.__name__,
                policy,
                self._name,
            )

    def get_indexables(self) -> tuple[type, ...]:
        return tuple(self._indexables)

    def delete_policy(self, entity_type: type) -> DeletePolicy:
        """Delete policy resolved at registration, following subclasses."""
        for t in entity_type.__mro__:
            policy = self._indexables.get(t)
            if policy is not None:
                return policy
        return DeletePolicy.for_type(entity_type)

    def seal(self) -> None:
        self._sealed = True

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._indexables)
        return f"IndexSettings(name={self._name!r}, indexables=[{names}])"
