"""Capability protocols implemented by indexable entity types."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Indexable(Protocol):
    """An entity that is mirrored into the search index."""

    def get_document_key(self) -> str:
        """Stable document identity, derived from the entity's primary key."""
        ...

    def to_document(self) -> dict[str, Any]:
        """Fields sent to the index, consistent with the index mappings."""
        ...


@runtime_checkable
class SoftDeletable(Indexable, Protocol):
    """An indexable entity whose deletions may keep the record with a marker."""

    def is_trashed(self) -> bool: ...
