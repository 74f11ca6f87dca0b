"""Service layer — business logic orchestration."""


class ServiceError(Exception):
    """Base service exception."""


class NotFoundError(ServiceError):
    """Resource not found (-> HTTP 404)."""


class ValidationError(ServiceError):
    """Missing or malformed input, or a change that breaks an invariant (-> HTTP 400)."""


class DurableMediumError(ServiceError):
    """Database unreachable or a read/write failed (-> HTTP 500)."""
