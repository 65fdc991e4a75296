"""Leaderboard API routes -- list, submit, reset."""
from typing import Any

from fastapi import APIRouter, Depends

from leaderboard.api.dependencies import get_repository, read_json_body, require_ready
from leaderboard.domain.validation import validate_entry
from leaderboard.infrastructure.repositories.leaderboard_repository import LeaderboardRepository

# The readiness gate runs before the body is read or validated.
router = APIRouter(prefix="/api", tags=["leaderboard"], dependencies=[Depends(require_ready)])


@router.get("/leaderboard")
def api_get_leaderboard(repo: LeaderboardRepository = Depends(get_repository)):
    """Top 50 entries, best first."""
    return [entry.to_public_dict() for entry in repo.list_top()]


@router.post("/leaderboard", status_code=201)
def api_submit_entry(
    payload: Any = Depends(read_json_body),
    repo: LeaderboardRepository = Depends(get_repository),
):
    """Validate and store a new entry."""
    entry = validate_entry(payload)
    entry_id = repo.insert(entry)
    return {"ok": True, "id": entry_id}


@router.delete("/leaderboard")
def api_reset_leaderboard(repo: LeaderboardRepository = Depends(get_repository)):
    """Delete every entry. No access control at this layer."""
    return {"ok": True, "deleted": repo.reset_all()}
