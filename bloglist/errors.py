import logging

from bson.errors import InvalidId
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """A path-addressed record does not exist."""

    def __init__(self, message: str = "not found"):
        super().__init__(message)
        self.message = message


def format_validation_errors(title: str, errors) -> str:
    parts = []
    for error in errors:
        # drop FastAPI's "body" prefix so the field name reads first
        loc = [p for p in error["loc"] if p != "body"]
        if error["type"] == "json_invalid":
            # a decode error locates by character offset, not by field
            loc = [p for p in loc if not isinstance(p, int)]
        loc = [str(p) for p in loc]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return f"{title} validation failed: " + ", ".join(parts)


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(InvalidId)
    async def malformatted_id_handler(request: Request, exc: InvalidId):
        logger.error(str(exc))
        return _error(status.HTTP_400_BAD_REQUEST, "malformatted id")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        message = format_validation_errors(exc.title, exc.errors())
        logger.error(message)
        return _error(status.HTTP_400_BAD_REQUEST, message)

    # malformed JSON or a body that fails a route's declared model
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = format_validation_errors("Request", exc.errors())
        logger.error(message)
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        logger.error(str(exc))
        return _error(status.HTTP_400_BAD_REQUEST, "expected `username` to be unique")

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.error(exc.message)
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.error("%s %s: %s", request.method, request.url.path, exc.detail)
        # a known path with an unsupported method is also an unknown endpoint
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, "unknown endpoint")
        return _error(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))
