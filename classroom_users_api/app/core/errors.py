"""
Error envelope and exception handlers.

Every error leaving the API has the same JSON shape::

    {"error": {"message": "...", "code": "...", "details": [...]}}

Routes raise ``ApiError`` (or one of its helpers) for expected
failures.  Request validation errors are converted to HTTP 400 with a
``details`` entry per offending field.  Anything unexpected becomes an
opaque HTTP 500 and its traceback goes to the log only.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
USER_NOT_FOUND = "USER_NOT_FOUND"
ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
HTTP_ERROR = "HTTP_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Friendly messages for common validation failures, keyed by field and
# pydantic error type.  Anything not listed falls back to pydantic's own
# message.
VALIDATION_MESSAGES: Dict[Tuple[str, str], str] = {
    ("name", "missing"): "Name is required",
    ("name", "string_too_short"): "Name must be at least 2 characters long",
    ("name", "string_too_long"): "Name must not exceed 50 characters",
    ("name", "string_type"): "Name must be a string",
    ("email", "missing"): "Email is required",
    ("email", "value_error"): "Please provide a valid email address",
    ("email", "string_type"): "Please provide a valid email address",
    ("role", "enum"): 'Role must be either "student" or "instructor"',
}
INVALID_JSON_MESSAGE = "Request body must be valid JSON"


class ApiError(Exception):
    """An error with a status code and machine readable ``code``."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or []


def user_not_found(user_id: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND, f"User with ID {user_id} not found")


def validation_error(message: str, details: Optional[List[Dict[str, Any]]] = None) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, message, details)


def error_body(message: str, code: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return {"error": {"message": message, "code": code, "details": details or []}}


def validation_details(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic errors into ``[{"field", "message"}]``.

    The request location prefix (``body``, ``query``, ``path``) is
    dropped so ``("body", "email")`` becomes ``"email"``.
    """
    details = []
    for error in errors:
        if error.get("type") == "json_invalid":
            # The location of a JSON syntax error is a character offset,
            # not a field.
            details.append({"field": "", "message": INVALID_JSON_MESSAGE})
            continue
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in {"body", "query", "path", "header"}:
            loc = loc[1:]
        field = ".".join(loc)
        message = VALIDATION_MESSAGES.get((field, error.get("type", "")), error.get("msg", "Invalid value"))
        details.append({"field": field, "message": message})
    return details


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.code, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = validation_details(exc.errors())
    logger.debug("Validation failed for %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", VALIDATION_ERROR, details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path with an unsupported method is reported like an unknown
    # route.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        message = f"Route {request.method} {request.url.path} not found"
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body(message, ROUTE_NOT_FOUND))
    body = error_body(str(exc.detail), HTTP_ERROR)
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", INTERNAL_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
