from app.core.exceptions.base import AppException


class ValidationError(AppException):
    """A business rule rejected the input, e.g. wrong login credentials."""


class ResourceNotFoundError(AppException):
    """No live row matches; soft deleted rows count as missing."""


class DuplicateResourceError(AppException):
    """A unique key such as the user email is already taken."""
