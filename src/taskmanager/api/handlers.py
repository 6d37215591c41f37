"""Exception handlers translating errors into enveloped responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.api.responses import envelope_response
from taskmanager.core.exceptions import TaskManagerError

logger = logging.getLogger(__name__)

UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


async def task_manager_error_handler(request: Request, exc: TaskManagerError) -> JSONResponse:
    """Map an application error to its status and ``"<kind>: <message>"``."""
    logger.warning(
        f"Handling {exc.kind} | Status: {exc.status_code} | Path: {request.url.path}"
    )
    headers = UNAUTHORIZED_HEADERS if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return envelope_response(status_code=exc.status_code, error=exc.detail, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and path parameters are illegal arguments."""
    messages = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Request validation failed | Path: {request.url.path} | {messages}")
    return envelope_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error=f"IllegalArgument: {messages}",
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-level HTTP errors, such as unmatched routes."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = f"NoHandlerFound: No endpoint {request.method} {request.url.path}"
    else:
        error = f"HttpError: {exc.detail}"
    return envelope_response(status_code=exc.status_code, error=error, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return envelope_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="InternalServerError: Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all handlers on the application."""
    app.add_exception_handler(TaskManagerError, task_manager_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
