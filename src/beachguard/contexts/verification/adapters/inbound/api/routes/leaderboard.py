from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from beachguard.contexts.verification.application.use_cases import SyncLeaderboardEntryUseCase


class LeaderboardSyncRequest(BaseModel):
    """
    LeaderboardSyncRequest — API request payload for `POST /leaderboard/sync`.
    """

    user_id: str | None = Field(default=None, alias="userId")


class LeaderboardSyncResponse(BaseModel):
    """
    LeaderboardSyncResponse — `{ok: true}` on write, `{skipped: true, reason}` on outage.
    """

    ok: bool | None = None
    skipped: bool | None = None
    reason: str | None = None


def build_leaderboard_router(*, sync_use_case: SyncLeaderboardEntryUseCase) -> APIRouter:
    """
    Build router exposing the leaderboard write-path mirror endpoint.

    Args:
        sync_use_case: Leaderboard mirror use-case.
    Returns:
        APIRouter: Router with `/leaderboard/sync`.
    Assumptions:
        Store outages are answered with 200 and a skip marker.
    Raises:
        ValueError: If required dependency is missing.
    Side Effects:
        None.
    """
    if sync_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_leaderboard_router requires sync_use_case")

    router = APIRouter(prefix="/leaderboard", tags=["verification"])

    @router.post(
        "/sync",
        response_model=LeaderboardSyncResponse,
        response_model_exclude_none=True,
    )
    def post_leaderboard_sync(request: LeaderboardSyncRequest) -> LeaderboardSyncResponse:
        result = sync_use_case.sync(user_id=request.user_id or "")
        if result.skipped:
            return LeaderboardSyncResponse(skipped=True, reason=result.reason)
        return LeaderboardSyncResponse(ok=True)

    return router
