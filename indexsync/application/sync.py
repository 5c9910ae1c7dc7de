"""Service start hook: enable index synchronization."""

import logging

from dishka import Container

from indexsync.infrastructure.persistence.lifecycle import LifecycleSubscription

logger = logging.getLogger(__name__)


def enable_index_sync(container: Container) -> LifecycleSubscription:
    """Attach the observer to all registered indexable types.

    Call once at startup, before the application writes any indexable
    entity. Writes that happen earlier are not mirrored.
    """
    subscription = container.get(LifecycleSubscription)
    subscription.attach()
    return subscription
