from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.store.errors import DocumentNotFoundError, QueryError, StoreError


logger = logging.getLogger("app.errors")

GENERIC_SERVER_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Failure envelope: ``{code, message}`` and nothing else."""
    return JSONResponse(status_code=status_code, content={"code": status_code, "message": message})


def _validation_message(exc: RequestValidationError) -> str:
    problems: list[str] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in {"body", "query", "path"}]
        label = ".".join(location) or "request"
        problems.append(f"{label}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems) or "Invalid request"


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


async def _query_error_handler(request: Request, exc: QueryError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _not_found_handler(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Resource not found")


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store.error", exc_info=exc, extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled.error", exc_info=exc, extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(QueryError, _query_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DocumentNotFoundError, _not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StoreError, _store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)
