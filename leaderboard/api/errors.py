"""Exception handlers -- every failure becomes a JSON ``{error}`` body."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from leaderboard.domain.errors import LeaderboardError, StorageError

log = logging.getLogger("leaderboard.api")

INTERNAL_ERROR = "Internal server error."


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


async def leaderboard_error_handler(request: Request, exc: LeaderboardError) -> JSONResponse:
    if isinstance(exc, StorageError):
        log.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Invalid request.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LeaderboardError, leaderboard_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
