"""Mixins that make SQLAlchemy mapped classes indexable."""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

from sqlalchemy import DateTime, inspect
from sqlalchemy.orm import Mapped, mapped_column


class IndexableMixin:
    """Implements Indexable from the mapped primary key and columns.

    Set __document_fields__ to restrict the columns sent to the index, or
    override to_document() for a custom projection.
    """

    __document_fields__: ClassVar[tuple[str, ...] | None] = None

    def get_document_key(self) -> str:
        mapper = inspect(type(self))
        identity = mapper.primary_key_from_instance(self)
        if any(value is None for value in identity):
            raise ValueError(f"{type(self).__name__} has no primary key yet")
        return "-".join(str(value) for value in identity)

    def to_document(self) -> dict[str, Any]:
        fields = self.__document_fields__
        if fields is None:
            fields = tuple(attr.key for attr in inspect(type(self)).column_attrs)
        return {field: _to_json(getattr(self, field)) for field in fields}


class SoftDeleteMixin:
    """Adds a nullable deleted_at marker; a set marker means soft deleted."""

    __soft_delete_attribute__: ClassVar[str] = "deleted_at"

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    def is_trashed(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self) -> None:
        self.deleted_at = None


def _to_json(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value
