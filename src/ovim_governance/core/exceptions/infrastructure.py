"""Infrastructure exceptions raised by adapters (database, cache, cluster API)."""

from .base import GovernanceError


class ConfigurationError(GovernanceError):
    """Raised when there's a configuration issue."""
    pass


class DatabaseError(GovernanceError):
    """Raised when a database operation fails unexpectedly."""
    pass


class CacheError(GovernanceError):
    """Raised when the dashboard cache cannot be read or written."""
    pass


class NamespaceLookupError(GovernanceError):
    """Raised when the orchestration API cannot answer a namespace lookup."""
    pass
