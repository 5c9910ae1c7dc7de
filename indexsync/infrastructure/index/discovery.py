"""Resolves configured indexable type paths to classes."""

from __future__ import annotations

import logging
from importlib import import_module

from indexsync.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_indexables(paths: list[str]) -> list[type]:
    """Import each "package.module:ClassName" (or dotted) path.

    Raises:
        ConfigurationError: If a module or attribute cannot be loaded, or the
            attribute is not a class.
    """
    return [_resolve(path) for path in paths]


def _resolve(path: str) -> type:
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")

    if not module_name or not attr:
        raise ConfigurationError(f"Invalid indexable path '{path}'")

    try:
        module = import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import '{module_name}' for '{path}': {e}") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ConfigurationError(f"'{module_name}' has no attribute '{attr}'") from None

    if not isinstance(obj, type):
        raise ConfigurationError(f"'{path}' is not a class")

    logger.debug("Resolved indexable %s -> %s", path, obj.__qualname__)
    return obj
