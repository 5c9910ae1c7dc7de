"""Error hierarchy for indexsync.

Error layers:
- IndexSyncError: Base class for all indexsync errors
- DomainError: Rule violations and expected engine conditions (missing index,
  missing document, index already present)
- InfrastructureError: System-level failures like cluster/network issues

Administrative commands surface these to the operator. Per-document
synchronization never raises them past the DocumentIndexer.
"""


class IndexSyncError(Exception):
    """Base class for all indexsync errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(IndexSyncError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class IndexNotFoundError(NotFoundError):
    """The physical index does not exist."""


class DocumentNotFoundError(NotFoundError):
    """The document does not exist in the index."""


class ConflictError(DomainError):
    """Resource already exists."""


class IndexAlreadyExistsError(ConflictError):
    """The physical index already exists."""


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(IndexSyncError):
    """Base class for infrastructure/system errors."""


class SearchEngineError(InfrastructureError):
    """The search engine rejected a call or could not be reached."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class IndexOperationError(InfrastructureError):
    """An administrative index operation failed."""

    def __init__(self, operation: str, index: str, cause: BaseException) -> None:
        super().__init__(f"Index {operation} failed for '{index}': {cause}")
        self.operation = operation
        self.index = index
        self.cause = cause


class AlertDeliveryError(InfrastructureError):
    """A remote alert channel could not deliver a message."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
