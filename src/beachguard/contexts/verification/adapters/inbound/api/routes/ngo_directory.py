from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from beachguard.contexts.verification.application.use_cases import MirrorNgoEntryUseCase


class MirrorNgoAdminRequest(BaseModel):
    """
    MirrorNgoAdminRequest — API request payload for `POST /ngos/mirror-admin`.
    """

    uid: str | None = None


class MirrorNgoAdminResponse(BaseModel):
    success: bool


def build_ngo_directory_router(*, mirror_use_case: MirrorNgoEntryUseCase) -> APIRouter:
    """
    Build router publishing verified admin profiles into the NGO directory.

    Args:
        mirror_use_case: NGO directory mirror use-case.
    Returns:
        APIRouter: Router with `/ngos/mirror-admin`.
    Assumptions:
        `uid` is the authenticated caller; access is checked against its profile.
    Raises:
        ValueError: If required dependency is missing.
    Side Effects:
        None.
    """
    if mirror_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_ngo_directory_router requires mirror_use_case")

    router = APIRouter(prefix="/ngos", tags=["verification"])

    @router.post("/mirror-admin", response_model=MirrorNgoAdminResponse)
    def post_mirror_admin(request: MirrorNgoAdminRequest) -> MirrorNgoAdminResponse:
        mirror_use_case.mirror(uid=request.uid or "")
        return MirrorNgoAdminResponse(success=True)

    return router
