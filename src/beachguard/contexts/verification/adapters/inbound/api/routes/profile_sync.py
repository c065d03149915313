from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

from beachguard.contexts.verification.application.errors import ValidationError
from beachguard.contexts.verification.application.use_cases import (
    EnsureProfileUseCase,
    LoadSessionProfileUseCase,
    SyncVerificationMirrorUseCase,
)
from beachguard.contexts.verification.domain.entities import UserProfile


class SyncVerificationRequest(BaseModel):
    """
    SyncVerificationRequest — API request payload for `POST /users/sync-verification`.
    """

    uid: str | None = None


class SyncVerificationResponse(BaseModel):
    """
    SyncVerificationResponse — reconciliation result, `patched` or `reason` is set.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/sync_verification_mirror.py
      - apps/api/routes/verification.py
    """

    success: bool
    patched: list[str] | None = None
    reason: str | None = None


class EnsureProfileRequest(BaseModel):
    """
    EnsureProfileRequest — API request payload for `POST /users/ensure-profile`.
    """

    uid: str | None = None
    email: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")


class SessionProfileRequest(BaseModel):
    """
    SessionProfileRequest — API request payload for `POST /users/session`.
    """

    uid: str | None = None
    email: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")


class ProfileResponse(BaseModel):
    """
    ProfileResponse — public projection of a durable profile.
    """

    uid: str
    email: str
    full_name: str
    role: str
    is_verified: bool
    is_admin_verified: bool
    points: int
    avatar_url: str
    created_at: datetime
    updated_at: datetime


class EnsureProfileResponse(BaseModel):
    """
    EnsureProfileResponse — provisioning result with stored profile.
    """

    success: bool
    created: bool
    profile: ProfileResponse


class SessionProfileResponse(BaseModel):
    """
    SessionProfileResponse — session profile, `null` in the degraded state.
    """

    uid: str
    profile: ProfileResponse | None


def build_profile_sync_router(
    *,
    sync_use_case: SyncVerificationMirrorUseCase,
    ensure_use_case: EnsureProfileUseCase,
    session_use_case: LoadSessionProfileUseCase,
) -> APIRouter:
    """
    Build router exposing profile reconciliation and provisioning endpoints.

    Args:
        sync_use_case: Mirror-to-profile reconciliation use-case.
        ensure_use_case: Profile provisioning use-case.
        session_use_case: Session-start profile resolution use-case.
    Returns:
        APIRouter: Router with `/users/*` endpoints.
    Assumptions:
        `VerificationOperationError` is mapped by an app-level exception handler.
    Raises:
        ValueError: If required dependencies are missing.
    Side Effects:
        None.
    """
    if sync_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_profile_sync_router requires sync_use_case")
    if ensure_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_profile_sync_router requires ensure_use_case")
    if session_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_profile_sync_router requires session_use_case")

    router = APIRouter(prefix="/users", tags=["verification"])

    @router.post(
        "/sync-verification",
        response_model=SyncVerificationResponse,
        response_model_exclude_none=True,
    )
    def post_sync_verification(request: SyncVerificationRequest) -> SyncVerificationResponse:
        result = sync_use_case.sync(uid=request.uid or "")
        if not result.success:
            return SyncVerificationResponse(success=False, reason=result.reason)
        return SyncVerificationResponse(success=True, patched=list(result.patched))

    @router.post("/ensure-profile", response_model=EnsureProfileResponse)
    def post_ensure_profile(request: EnsureProfileRequest) -> EnsureProfileResponse:
        result = ensure_use_case.ensure(
            uid=request.uid or "",
            email=request.email,
            display_name=request.display_name,
        )
        return EnsureProfileResponse(
            success=True,
            created=result.created,
            profile=_profile_response(profile=result.profile),
        )

    @router.post("/session", response_model=SessionProfileResponse)
    def post_session_profile(request: SessionProfileRequest) -> SessionProfileResponse:
        """
        Resolve profile for a new session, tolerating replication lag.

        Args:
            request: Authenticated uid plus optional provisioning data.
        Returns:
            SessionProfileResponse: Profile or `null` when still not visible.
        Assumptions:
            Degraded state is a successful response.
        Raises:
            ValidationError: If uid is missing.
        Side Effects:
            May reconcile mirror flags and provision a profile.
        """
        if request.uid is None or not request.uid.strip():
            raise ValidationError("uid is required")
        uid = request.uid.strip()
        profile = session_use_case.load(
            uid=uid,
            email=request.email,
            display_name=request.display_name,
        )
        return SessionProfileResponse(
            uid=uid,
            profile=_profile_response(profile=profile) if profile is not None else None,
        )

    return router


def _profile_response(*, profile: UserProfile) -> ProfileResponse:
    return ProfileResponse(
        uid=profile.uid,
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role.value,
        is_verified=profile.is_verified,
        is_admin_verified=profile.is_admin_verified,
        points=profile.points,
        avatar_url=profile.avatar_url,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
