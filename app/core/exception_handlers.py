from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.constants import ErrorCode
from app.core.exceptions.base import HTTPException
from app.core.responses import ErrorResponse


def _error_code_for_status(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return ErrorCode.INTERNAL_ERROR


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []

    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))

    return "; ".join(messages) or "Invalid request"


async def app_http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render application HTTP exceptions as ``{error, message}``."""
    body = ErrorResponse(error=exc.error_code, message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework raised HTTP errors (unknown route, wrong method...)."""
    if isinstance(exc, HTTPException):
        return await app_http_exception_handler(request, exc)

    body = ErrorResponse(error=_error_code_for_status(exc.status_code), message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request body, query and path validation failures are client errors (400)."""
    message = _format_validation_errors(exc)
    logger.debug(f"Request validation failed on {request.url.path}: {message}")
    body = ErrorResponse(error=ErrorCode.VALIDATION_ERROR, message=message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, app_http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
