"""
FastAPI exception handlers.

Services raise `ticket_logger.exceptions.base` errors; the status code and body
come from the exception itself (`http_status()` / `to_payload()`), so these
handlers stay tiny. Request validation failures are reshaped into the same body
with status 400.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ticket_logger.exceptions.base import AppError
from ticket_logger.i18n import get_message, negotiate_locale

logger = logging.getLogger(__name__)


def _locale(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    default = settings.DEFAULT_LOCALE if settings else "en"
    return negotiate_locale(request.headers.get("accept-language"), default=default)


def _field_name(loc: tuple | list) -> str:
    # ("body", "region", "id") -> "region.id"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "form", "cookie")]
    return ".".join(parts) or "request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status = exc.http_status()
    context = {
        "method": request.method,
        "path": request.url.path,
        "error_code": exc.error_code,
        "fields": exc.fields,
        "status_code": status,
    }
    if status >= 500:
        # the cause chain holds the real failure
        logger.error("http.app_error", extra=context, exc_info=exc)
    else:
        logger.info("http.app_error", extra=context)
    return JSONResponse(status_code=status, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    fields = list(dict.fromkeys(e["field"] for e in errors))
    logger.info(
        "http.validation_error",
        extra={"method": request.method, "path": request.url.path, "fields": fields},
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": get_message("validation.failed", _locale(request)),
            "code": "validation",
            "fields": fields,
            "errors": errors,
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "http.unhandled_error",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": get_message("error.unexpected", _locale(request)), "code": "unexpected_error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
