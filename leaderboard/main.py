"""Entry point. Builds the FastAPI app, wires storage, serves the frontend.

Boot:     lifespan startup runs the storage initializer; a failure aborts
          startup and the process exits non-zero.
Shutdown: lifespan shutdown drains in-flight requests, then closes storage.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest

from leaderboard.api.errors import INTERNAL_ERROR, error_response, register_error_handlers
from leaderboard.api.routes.health_routes import router as health_router
from leaderboard.api.routes.leaderboard_routes import router as leaderboard_router
from leaderboard.application.lifecycle import LifecycleManager
from leaderboard.application.state import AppState
from leaderboard.config import Settings, load_settings
from leaderboard.infrastructure.database.connection import initialize_storage
from leaderboard.infrastructure.repositories.leaderboard_repository import LeaderboardRepository

log = logging.getLogger("leaderboard.api")

_NO_CACHE = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


class RequestLifecycleMiddleware(BaseHTTPMiddleware):
    """Count in-flight requests, refuse new ones while draining, and turn
    any unexpected exception into a generic 500 for that request only."""

    async def dispatch(self, request: StarletteRequest, call_next):
        lifecycle: LifecycleManager = request.app.state.lifecycle
        if not lifecycle.request_started():
            return error_response(503, "Server is shutting down.", headers={"Connection": "close"})
        try:
            return await call_next(request)
        except Exception:
            log.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(500, INTERNAL_ERROR)
        finally:
            lifecycle.request_finished()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    lifecycle: LifecycleManager = app.state.lifecycle
    lifecycle.start()
    log.info("Server running at http://localhost:%s", settings.port)
    yield
    await run_in_threadpool(lifecycle.shutdown)


def create_app(
    settings: Settings | None = None,
    initializer: Callable[[AppState], object] | None = None,
) -> FastAPI:
    """Build the app. `initializer` defaults to opening settings.db_path."""
    settings = settings or load_settings()
    if initializer is None:
        def initializer(state: AppState):
            return initialize_storage(state, settings.db_path)

    state = AppState()

    app = FastAPI(
        title="Leaderboard",
        description="Persistent cash / sales / burn leaderboard.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.leaderboard = state
    app.state.lifecycle = LifecycleManager(state, initializer, settings.drain_timeout)
    app.state.repository = LeaderboardRepository(state)

    app.add_middleware(RequestLifecycleMiddleware)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(leaderboard_router)

    if os.path.isdir(settings.static_dir):
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str):
        """Serve the fallback page for every other GET path."""
        if os.path.isfile(settings.fallback_path):
            return FileResponse(settings.fallback_path, headers=_NO_CACHE)
        return JSONResponse({"message": "Leaderboard API is running. No frontend found."})

    return app


app = create_app()
