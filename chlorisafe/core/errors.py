# chlorisafe/core/errors.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

__all__ = ["register_exception_handlers"]


def _build_problem_response(
    *,
    status_code: int,
    code: str,
    message: str,
    detail: Any | None = None,
) -> JSONResponse:
    """Common error body for the whole application."""
    payload: dict[str, Any] = {
        "code": code,
        "message": message,
    }
    if detail is not None:
        payload["detail"] = detail

    return JSONResponse(
        status_code=status_code,
        content=payload,
        headers={
            "Content-Type": "application/problem+json",
        },
    )


def _convert_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """RequestValidationError -> flat list of {loc, msg, type}."""
    return [
        {
            "loc": list(e.get("loc") or ()),
            "msg": e.get("msg"),
            "type": e.get("type"),
        }
        for e in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the global exception handlers.

    - RequestValidationError: malformed process state (422)
    - ValueError: a state the engine cannot evaluate, e.g. an unregistered tank type (400)
    - HTTPException / StarletteHTTPException: regular HTTP errors (404 etc.)
    - Exception: anything else (500)
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = _convert_validation_errors(exc)

        logger.warning(
            "Request validation failed: {} {} ({} errors)",
            request.method,
            request.url.path,
            len(errors),
        )

        return _build_problem_response(
            status_code=422,
            code="INVALID_INPUT",
            message="Input validation failed",
            detail=errors,
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(
        request: Request,
        exc: ValueError,
    ) -> JSONResponse:
        logger.warning(
            "Rejected process state: {} {} ({})",
            request.method,
            request.url.path,
            exc,
        )

        return _build_problem_response(
            status_code=400,
            code="INVALID_PROCESS_STATE",
            message=str(exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        logger.warning(
            "HTTPException: {} {} -> {} ({})",
            request.method,
            request.url.path,
            exc.status_code,
            exc.detail,
        )

        return _build_problem_response(
            status_code=exc.status_code,
            code="HTTP_ERROR",
            message=str(exc.detail) if exc.detail else "HTTP error",
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Last resort: wrap anything unexpected into a 500."""
        logger.opt(exception=exc).error(
            "Unhandled exception: {} {}",
            request.method,
            request.url.path,
        )

        return _build_problem_response(
            status_code=500,
            code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred.",
        )
