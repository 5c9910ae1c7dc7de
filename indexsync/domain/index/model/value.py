"""Index synchronization value objects."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from indexsync.domain.index.port.indexable import Indexable, SoftDeletable


class Lifecycle(StrEnum):
    """Lifecycle notifications fired by the datastore for an entity."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    RESTORED = "restored"


class SyncOperation(StrEnum):
    """What a lifecycle notification means for the index."""

    UPSERT = "upsert"
    DELETE = "delete"


class DeletePolicy(StrEnum):
    """How deletions of an entity type are mirrored.

    Resolved once per type when the type is registered.
    """

    HARD_DELETE_ONLY = "hard_delete_only"
    SOFT_DELETABLE = "soft_deletable"

    @classmethod
    def for_type(cls, entity_type: type) -> "DeletePolicy":
        if issubclass(entity_type, SoftDeletable):
            return cls.SOFT_DELETABLE
        return cls.HARD_DELETE_ONLY


class Document(BaseModel):
    """Search-engine projection of one indexable entity."""

    model_config = ConfigDict(frozen=True)

    id: str
    body: dict[str, Any]

    @classmethod
    def from_indexable(cls, entity: Indexable) -> "Document":
        return cls(id=entity.get_document_key(), body=entity.to_document())


class OperationResult(BaseModel):
    """Outcome of an administrative command, for display to the operator."""

    model_config = ConfigDict(frozen=True)

    ok: bool = True
    summary: str
