# app/core/errors.py
"""
Application error taxonomy and the FastAPI handlers that render it.

Route handlers raise these exceptions instead of building error responses
inline, so every failure of a given kind has the same status code and body:

- ValidationError  -> 400 {"errors": [{"msg", "param", "location"}, ...]}
- ConflictError    -> 400 {"errors": [{"msg"}]}
- AuthError        -> 401 {"msg"}
- ForbiddenError   -> 403 {"msg"}
- NotFoundError    -> 404 {"msg"}
- ServerError      -> 500 {"msg"}
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from tortoise.exceptions import BaseORMException

logger = logging.getLogger("uvicorn.error")

SERVER_ERROR_MSG = "Server Error"


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, msg: str = SERVER_ERROR_MSG):
        super().__init__(msg)
        self.msg = msg

    def to_content(self) -> dict:
        return {"msg": self.msg}


class ValidationError(ApiError):
    """Request payload failed one or more field checks."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict]):
        super().__init__(errors[0]["msg"] if errors else "Invalid request")
        self.errors = errors

    def to_content(self) -> dict:
        return {"errors": self.errors}


class ConflictError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST

    def to_content(self) -> dict:
        return {"errors": [{"msg": self.msg}]}


class AuthError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def field_error(param: str, msg: str, location: str = "body") -> dict:
    """Build one entry of a ValidationError list."""
    return {"msg": msg, "param": param, "location": location}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Render framework-level body/path parsing errors (wrong types, malformed
    dates, invalid JSON) in the same shape as our own field checks.
    """
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc else "body"
        param = ".".join(loc[1:]) if len(loc) > 1 else location
        errors.append(field_error(param, err.get("msg", "Invalid value"), location))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def store_error_handler(request: Request, exc: BaseORMException) -> JSONResponse:
    logger.exception("[store] %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=ServerError().to_content())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[server] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=ServerError().to_content())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(BaseORMException, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
