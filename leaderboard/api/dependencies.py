"""FastAPI dependencies -- application state, repository, raw JSON body."""
import json
from typing import Any

from fastapi import HTTPException, Request

from leaderboard.application.state import AppState
from leaderboard.infrastructure.repositories.leaderboard_repository import LeaderboardRepository

MAX_BODY_BYTES = 64 * 1024


def get_app_state(request: Request) -> AppState:
    return request.app.state.leaderboard


def get_repository(request: Request) -> LeaderboardRepository:
    return request.app.state.repository


def require_ready(request: Request) -> None:
    """Readiness gate. Raises NotReadyError (503) before any other work."""
    get_app_state(request).require_ready()


def _too_large() -> HTTPException:
    return HTTPException(status_code=413, detail="Request body too large.")


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON, capped at 64 KB.

    An empty body parses as ``{}``. Content-Type is not enforced.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > MAX_BODY_BYTES:
        raise _too_large()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > MAX_BODY_BYTES:
            raise _too_large()

    if not body.strip():
        return {}
    try:
        return json.loads(bytes(body))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body.")
