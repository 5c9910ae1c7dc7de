"""SQLAlchemy side of index synchronization."""

from indexsync.infrastructure.persistence.di import PersistenceProvider
from indexsync.infrastructure.persistence.lifecycle import LifecycleSubscription
from indexsync.infrastructure.persistence.model import IndexableMixin, SoftDeleteMixin

__all__ = [
    "IndexableMixin",
    "LifecycleSubscription",
    "PersistenceProvider",
    "SoftDeleteMixin",
]
