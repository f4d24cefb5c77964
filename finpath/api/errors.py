from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from finpath.api.common import ApiError
from finpath.core.correlation import get_correlation_id, get_request_id
from finpath.core.errors import FinPathError
from finpath.core.logging import logger

def code_for_status(status: int) -> str:
    if status == 400: return "invalid_parameters"
    if status == 401: return "unauthorized"
    if status == 403: return "forbidden"
    if status == 404: return "not_found"
    if status == 405: return "method_not_allowed"
    if status == 409: return "conflict"
    if status == 422: return "validation_error"
    if status == 503: return "service_unavailable"
    return "internal_error"

def error_response(status_code: int, code: str, message: str, target=None, details=None) -> JSONResponse:
    ae = ApiError(
        code=code,
        message=message,
        target=target,
        details=details,
        request_id=get_request_id(),
        correlation_id=get_correlation_id(),
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(ae))

def finpath_error_handler(request: Request, exc: FinPathError):
    logger.warning("request_failed", code=exc.code, message=exc.message, path=request.url.path)
    return error_response(exc.status_code, exc.code, exc.message, target=exc.target, details=exc.details)

def http_exception_handler(request: Request, exc: StarletteHTTPException):
    msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
    logger.warning("http_exception", status=exc.status_code, message=msg, path=request.url.path)
    return error_response(exc.status_code, code_for_status(exc.status_code), msg)

def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("validation_error", path=request.url.path)
    return error_response(422, "validation_error", "Validation failed", details={"errors": jsonable_encoder(exc.errors())})

def global_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", error=exc.__class__.__name__, path=request.url.path, exc_info=True)
    return error_response(500, "internal_error", "Internal server error", details={"error": exc.__class__.__name__})
