"""Health check route."""
from fastapi import APIRouter, Depends

from leaderboard.api.dependencies import get_app_state
from leaderboard.application.state import AppState

router = APIRouter(tags=["health"])


@router.get("/health")
def health(state: AppState = Depends(get_app_state)):
    return {"ok": True, "db": state.is_ready()}
