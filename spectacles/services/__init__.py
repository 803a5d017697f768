"""Service layer — composes DAO reads with the timeline logic."""


class ServiceError(Exception):
    """Base service exception."""


class NotFoundError(ServiceError):
    """Resource not found (-> HTTP 404)."""


class ValidationError(ServiceError):
    """Input validation error (-> HTTP 422)."""
