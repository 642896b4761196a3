"""
Custom exception handlers for FastAPI.

Response shapes:
- validation failures: 400 {"errors": [{"param", "msg", "location", "value"}]}
- missing profile / record: 400 {"msg": ...} (not 404; clients key on 400)
- HTTP errors (401 etc.): {"detail", "status_code"}
- store and unexpected failures: 500 with a generic message only

Request IDs are logged server-side for tracing but not exposed in bodies.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

import structlog

from core.errors import (
    InvalidReference,
    ProfileNotFound,
    RecordNotFound,
    StoreFailure,
    ValidationFailed,
)
from core.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """Current request ID from the logging context, for server-side logs only."""
    try:
        ctx = structlog.contextvars.get_contextvars()
        return ctx.get("request_id", "-")
    except Exception:
        return "-"


def _response_payload(detail: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
    }


def _request_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten FastAPI's body/path errors into the field-error shape."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        errors.append(
            {
                "param": loc[-1] if len(loc) > 1 else (loc[0] if loc else ""),
                "msg": error.get("msg", "Invalid value"),
                "location": loc[0] if loc else "body",
                "value": error.get("input") if isinstance(error.get("input"), (str, int, float, bool)) else "",
            }
        )
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _request_errors(exc)
        logger.warning("request_validation_error", errors=errors, request_id=_get_request_id())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed):
        logger.info(
            "validation_failed",
            params=[e["param"] for e in exc.errors],
            request_id=_get_request_id(),
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.errors})

    @app.exception_handler(ProfileNotFound)
    async def profile_not_found_handler(request: Request, exc: ProfileNotFound):
        if isinstance(exc, InvalidReference):
            logger.info("invalid_owner_reference", raw_id=str(exc.raw_id)[:64])
        else:
            logger.info("profile_not_found", owner_id=exc.owner_id)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"msg": exc.message})

    @app.exception_handler(RecordNotFound)
    async def record_not_found_handler(request: Request, exc: RecordNotFound):
        logger.info("record_not_found", kind=exc.kind, record_id=exc.record_id[:64])
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"msg": exc.message})

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure):
        # Cause already logged with traceback where it was caught
        logger.error("store_failure_response", operation=exc.operation, request_id=_get_request_id())
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_response_payload("Internal server error", 500),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_response_payload("Internal server error", 500),
        )
