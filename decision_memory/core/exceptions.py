class DecisionMemoryError(Exception):
    """Base exception for the decision cache and sync layer."""

    pass


class NetworkError(DecisionMemoryError):
    """Raised when a remote call fails or returns a non-2xx status.

    The message is the server's error message, passed through verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None, endpoint: str | None = None):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ValidationError(DecisionMemoryError):
    """Raised when a local check fails before any request is issued."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)


class TransitionError(DecisionMemoryError):
    """Raised when a status change is not a valid forward transition."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot transition decision from {current} to {requested}")


class NotFoundError(DecisionMemoryError):
    """Raised when an entity is not present in the cache."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found in cache")


class FeatureDisabledError(DecisionMemoryError):
    """Raised when a gated operation runs while its flag is off or not yet fetched."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Feature '{key}' is not enabled")
