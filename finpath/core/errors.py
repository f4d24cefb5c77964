from typing import Any, Dict, Optional


class FinPathError(Exception):
    """Base for errors surfaced to API callers as an ApiError envelope."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, target: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.target = target
        self.details = details


class ValidationError(FinPathError):
    status_code = 400
    code = "invalid_parameters"


class NotFoundError(FinPathError):
    status_code = 404
    code = "not_found"


class PreconditionError(FinPathError):
    status_code = 400
    code = "precondition_failed"


class ForbiddenError(FinPathError):
    status_code = 403
    code = "forbidden"


class ServiceUnavailableError(FinPathError):
    status_code = 503
    code = "service_unavailable"
