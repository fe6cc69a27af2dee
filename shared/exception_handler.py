import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core.exceptions import InventoryError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _failure(message: str, status_code: str, data=None) -> dict:
    return JsonOutResult(
        data=data,
        status="Failure",
        status_code=status_code,
        message=message
    ).model_dump()


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(request: Request, exc: InventoryError):
        if exc.http_status >= 500:
            logger.error("Request %s %s failed: %s",
                         request.method, request.url.path, exc.message)
        data = {"field": exc.field} if exc.field else None
        return JSONResponse(
            content=_failure(exc.message, exc.status_code, data),
            status_code=exc.http_status)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # error_response() already wraps the detail
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail):
            content = exc.detail
        else:
            content = _failure(str(exc.detail), str(exc.status_code))
        return JSONResponse(content=content, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        # drop the "body"/"query" prefix from the location
        loc = [str(part) for part in first.get("loc", ())][1:]
        field = ".".join(loc) or None
        return JSONResponse(
            content=_failure(
                first.get("msg", "Invalid input"),
                AppStatusCode.INVALID_INPUT,
                {"field": field} if field else None),
            status_code=400)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return JSONResponse(
            content=_failure("Internal server error",
                             AppStatusCode.OPERATION_FAILED),
            status_code=500)
