"""
Verification API routes.

Composes OTP issuance/verification, profile reconciliation, leaderboard and NGO
directory mirror routers into one facade for the application composition root.
"""

from __future__ import annotations

from fastapi import APIRouter

from beachguard.contexts.verification.adapters.inbound.api.routes import (
    build_leaderboard_router,
    build_ngo_directory_router,
    build_otp_verification_router,
    build_profile_sync_router,
)
from beachguard.contexts.verification.application.use_cases import (
    EnsureProfileUseCase,
    IssueOtpChallengeUseCase,
    LoadSessionProfileUseCase,
    MirrorNgoEntryUseCase,
    SyncLeaderboardEntryUseCase,
    SyncVerificationMirrorUseCase,
    VerifyOtpChallengeUseCase,
)


def build_verification_router(
    *,
    issue_use_case: IssueOtpChallengeUseCase,
    verify_use_case: VerifyOtpChallengeUseCase,
    sync_use_case: SyncVerificationMirrorUseCase,
    ensure_use_case: EnsureProfileUseCase,
    session_use_case: LoadSessionProfileUseCase,
    leaderboard_use_case: SyncLeaderboardEntryUseCase,
    ngo_mirror_use_case: MirrorNgoEntryUseCase,
) -> APIRouter:
    """
    Build verification router facade for FastAPI app composition root.

    Related:
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/otp_verification.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/profile_sync.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/leaderboard.py
      - src/beachguard/contexts/verification/adapters/inbound/api/routes/ngo_directory.py
      - apps/api/wiring/modules/verification.py

    Args:
        issue_use_case: OTP issuance use-case.
        verify_use_case: OTP verification use-case.
        sync_use_case: Mirror-to-profile reconciliation use-case.
        ensure_use_case: Profile provisioning use-case.
        session_use_case: Session profile loader use-case.
        leaderboard_use_case: Leaderboard mirror use-case.
        ngo_mirror_use_case: NGO directory mirror use-case.
    Returns:
        APIRouter: Configured verification router.
    Assumptions:
        Use-cases share the same store adapters.
    Raises:
        ValueError: If one of the nested router builders rejects its dependencies.
    Side Effects:
        None.
    """
    router = APIRouter()
    router.include_router(
        build_otp_verification_router(
            issue_use_case=issue_use_case,
            verify_use_case=verify_use_case,
        )
    )
    router.include_router(
        build_profile_sync_router(
            sync_use_case=sync_use_case,
            ensure_use_case=ensure_use_case,
            session_use_case=session_use_case,
        )
    )
    router.include_router(build_leaderboard_router(sync_use_case=leaderboard_use_case))
    router.include_router(build_ngo_directory_router(mirror_use_case=ngo_mirror_use_case))
    return router
