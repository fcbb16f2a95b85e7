"""Error Handlers: map every failure to the TaskboardError envelope.

Invariants:
    - TaskboardError -> its own envelope and HTTP status
    - RequestValidationError -> 400 VALIDATION_ERROR, one detail per offending field
    - Exception (catch-all) -> 500 INTERNAL_ERROR, never leaks internal details
    - Every envelope carries the project/task/member ids found in the request path
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, TaskboardError, ValidationError,
)

logger = logging.getLogger(__name__)

# Where FastAPI says a bad value came from; the rest of loc is the field path
_REQUEST_PARTS = {"body", "path", "query", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, handle_taskboard_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


def _path_context(request: Request) -> ErrorContext:
    params = request.path_params
    return ErrorContext(
        project_id=params.get("project_id"),
        task_id=params.get("task_id"),
        member_id=params.get("member_id"),
        operation=f"{request.method} {request.url.path}",
    )


def _field_detail(error: dict) -> dict:
    loc = [str(part) for part in error["loc"]]
    source = loc.pop(0) if loc and loc[0] in _REQUEST_PARTS else "body"
    return {
        "source": source,
        "field": ".".join(loc) or source,
        "message": error["msg"],
    }


async def handle_taskboard_error(request: Request, exc: TaskboardError):
    log = logger.error if exc.http_status >= 500 else logger.info
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "project_id": exc.context.project_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [_field_detail(e) for e in exc.errors()]
    first = details[0]["field"] if details else "body"
    error = ValidationError(
        f"Invalid value for '{first}'", field=first, context=_path_context(request),
    )
    logger.info(
        f"Rejected {request.method} {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    content = error.to_response()
    content["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=content)


async def handle_unexpected(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    error = TaskboardError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, _path_context(request), 500,
    )
    return JSONResponse(status_code=500, content=error.to_response())
