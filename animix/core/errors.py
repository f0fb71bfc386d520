"""Error taxonomy shared by clients, services and tools."""

from typing import Optional


class CatalogError(Exception):
    """Base exception for every catalog failure."""

    def __init__(self, message: str, source: str = "animix"):
        super().__init__(message)
        self.message = message
        self.source = source


class ValidationError(CatalogError):
    """Raised when a required identifier or query is missing or unparsable."""

    pass


class UpstreamError(CatalogError):
    """Raised on a non-success response or an undecodable provider payload."""

    def __init__(self, message: str, source: str = "animix", status_code: Optional[int] = None):
        super().__init__(message, source)
        self.status_code = status_code


class NotFoundError(CatalogError):
    """Raised when a provider reports that the entity does not exist."""

    pass
