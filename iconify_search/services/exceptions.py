"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class IconifyServiceError(ServiceError):
    """Raised when the Iconify API fails or returns an unusable payload."""


class InvalidIconIdentifier(ServiceError, ValueError):
    """Raised when an icon id is not of the form ``prefix:name``."""
