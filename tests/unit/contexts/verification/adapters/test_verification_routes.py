from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from beachguard.contexts.verification.adapters.inbound.api import (
    build_leaderboard_router,
    build_ngo_directory_router,
    build_otp_verification_router,
    build_profile_sync_router,
    register_verification_exception_handler,
)
from beachguard.contexts.verification.application import (
    AdminAccessDeniedError,
    ExpiredError,
    MismatchError,
    StoreUnavailableError,
)
from beachguard.contexts.verification.application.use_cases.ensure_profile import (
    EnsureProfileResult,
)
from beachguard.contexts.verification.application.use_cases.sync_leaderboard_entry import (
    SyncLeaderboardEntryResult,
)
from beachguard.contexts.verification.application.use_cases.sync_verification_mirror import (
    SyncVerificationMirrorResult,
)
from beachguard.contexts.verification.domain import ProfileRole, UserProfile

_NOW = datetime(2026, 10, 17, 9, 0, 0, tzinfo=timezone.utc)


@dataclass
class _StubIssueUseCase:
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def issue_for_admin(self, *, user_id: str, email: str) -> None:
        self.calls.append(("admin", {"user_id": user_id, "email": email}))

    def issue_for_volunteer(self, *, email: str, name: str) -> None:
        self.calls.append(("volunteer", {"email": email, "name": name}))


@dataclass
class _StubVerifyUseCase:
    error: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def verify_admin(self, *, user_id: str, code: str) -> None:
        self.calls.append({"user_id": user_id, "code": code})
        if self.error is not None:
            raise self.error

    def verify_volunteer(self, *, email: str, code: str, user_id: str | None) -> None:
        self.calls.append({"email": email, "code": code, "user_id": user_id})
        if self.error is not None:
            raise self.error


@dataclass
class _StubSyncUseCase:
    result: SyncVerificationMirrorResult

    def sync(self, *, uid: str) -> SyncVerificationMirrorResult:
        return self.result


@dataclass
class _StubEnsureUseCase:
    result: EnsureProfileResult

    def ensure(
        self,
        *,
        uid: str,
        email: str | None,
        display_name: str | None,
    ) -> EnsureProfileResult:
        return self.result


@dataclass
class _StubSessionUseCase:
    profile: UserProfile | None

    def load(
        self,
        *,
        uid: str,
        email: str | None,
        display_name: str | None,
    ) -> UserProfile | None:
        return self.profile


@dataclass
class _StubLeaderboardUseCase:
    result: SyncLeaderboardEntryResult

    def sync(self, *, user_id: str) -> SyncLeaderboardEntryResult:
        return self.result


@dataclass
class _StubNgoMirrorUseCase:
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def mirror(self, *, uid: str) -> None:
        self.calls.append(uid)
        if self.error is not None:
            raise self.error


def _profile() -> UserProfile:
    return UserProfile(
        uid="123",
        email="v@beach.org",
        full_name="Vera",
        role=ProfileRole.VOLUNTEER,
        is_verified=True,
        is_admin_verified=False,
        points=40,
        avatar_url="",
        created_at=_NOW,
        updated_at=_NOW,
    )


def _client(
    *,
    issue: _StubIssueUseCase | None = None,
    verify: _StubVerifyUseCase | None = None,
    sync: _StubSyncUseCase | None = None,
    session: _StubSessionUseCase | None = None,
    leaderboard: _StubLeaderboardUseCase | None = None,
    ngo_mirror: _StubNgoMirrorUseCase | None = None,
) -> TestClient:
    app = FastAPI()
    register_verification_exception_handler(app=app)
    app.include_router(
        build_otp_verification_router(
            issue_use_case=issue or _StubIssueUseCase(),  # type: ignore[arg-type]
            verify_use_case=verify or _StubVerifyUseCase(),  # type: ignore[arg-type]
        )
    )
    app.include_router(
        build_profile_sync_router(
            sync_use_case=sync  # type: ignore[arg-type]
            or _StubSyncUseCase(result=SyncVerificationMirrorResult(success=True)),
            ensure_use_case=_StubEnsureUseCase(  # type: ignore[arg-type]
                result=EnsureProfileResult(profile=_profile(), created=True)
            ),
            session_use_case=session  # type: ignore[arg-type]
            or _StubSessionUseCase(profile=_profile()),
        )
    )
    app.include_router(
        build_leaderboard_router(
            sync_use_case=leaderboard  # type: ignore[arg-type]
            or _StubLeaderboardUseCase(result=SyncLeaderboardEntryResult(entry=None)),
        )
    )
    app.include_router(
        build_ngo_directory_router(
            mirror_use_case=ngo_mirror or _StubNgoMirrorUseCase(),  # type: ignore[arg-type]
        )
    )
    return TestClient(app)


def test_send_verification_otp_returns_success_message() -> None:
    issue = _StubIssueUseCase()
    client = _client(issue=issue)

    response = client.post(
        "/auth/send-verification-otp",
        json={"email": "admin@beach.org", "uid": "123"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Verification OTP sent successfully."}
    assert issue.calls == [("admin", {"user_id": "123", "email": "admin@beach.org"})]


def test_send_volunteer_otp_passes_missing_fields_as_blank() -> None:
    issue = _StubIssueUseCase()
    client = _client(issue=issue)

    response = client.post("/auth/send-volunteer-otp", json={"email": "v@beach.org"})

    assert response.status_code == 200
    assert response.json() == {"message": "OTP sent successfully"}
    assert issue.calls == [("volunteer", {"email": "v@beach.org", "name": ""})]


def test_verify_routes_return_success_payloads() -> None:
    verify = _StubVerifyUseCase()
    client = _client(verify=verify)

    admin = client.post("/auth/verify-otp", json={"uid": "123", "otp": "123456"})
    volunteer = client.post(
        "/auth/verify-volunteer-otp",
        json={"email": "v@beach.org", "otp": "654321"},
    )

    assert admin.json() == {"success": True, "message": "Account verified successfully."}
    assert volunteer.json() == {"verified": True, "message": "OTP verified successfully"}
    assert verify.calls[1] == {"email": "v@beach.org", "code": "654321", "user_id": None}


def test_verify_errors_are_mapped_to_flat_error_payload() -> None:
    """
    Verify domain failures map to `{error, message}` with the status carried by the error.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Client-caused failures are 400, store outages are 500.
    Raises:
        AssertionError: If status or payload mapping differs.
    Side Effects:
        None.
    """
    mismatch = _client(verify=_StubVerifyUseCase(error=MismatchError())).post(
        "/auth/verify-otp",
        json={"uid": "123", "otp": "000000"},
    )
    expired = _client(verify=_StubVerifyUseCase(error=ExpiredError())).post(
        "/auth/verify-otp",
        json={"uid": "123", "otp": "000000"},
    )
    outage = _client(
        verify=_StubVerifyUseCase(error=StoreUnavailableError(store="otp challenge store"))
    ).post("/auth/verify-otp", json={"uid": "123", "otp": "000000"})

    assert mismatch.status_code == 400
    assert mismatch.json() == {"error": "code_mismatch", "message": "Invalid verification code."}
    assert expired.status_code == 400
    assert expired.json()["error"] == "challenge_expired"
    assert outage.status_code == 500
    assert outage.json() == {
        "error": "store_unavailable",
        "message": "otp challenge store is unavailable.",
    }


def test_sync_verification_omits_unset_fields() -> None:
    patched = _client(
        sync=_StubSyncUseCase(
            result=SyncVerificationMirrorResult(success=True, patched=("is_verified", "updated_at"))
        )
    ).post("/users/sync-verification", json={"uid": "123"})
    skipped = _client(
        sync=_StubSyncUseCase(
            result=SyncVerificationMirrorResult(success=False, reason="no_mirror_record")
        )
    ).post("/users/sync-verification", json={"uid": "123"})

    assert patched.json() == {"success": True, "patched": ["is_verified", "updated_at"]}
    assert skipped.json() == {"success": False, "reason": "no_mirror_record"}


def test_ensure_profile_returns_profile_projection() -> None:
    response = _client().post(
        "/users/ensure-profile",
        json={"uid": "123", "email": "v@beach.org", "displayName": "Vera"},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["created"] is True
    assert body["profile"]["role"] == "volunteer"
    assert body["profile"]["points"] == 40


def test_session_route_reports_degraded_state_and_requires_uid() -> None:
    client = _client(session=_StubSessionUseCase(profile=None))

    degraded = client.post("/users/session", json={"uid": " 123 "})
    missing = client.post("/users/session", json={})

    assert degraded.status_code == 200
    assert degraded.json() == {"uid": "123", "profile": None}
    assert missing.status_code == 400
    assert missing.json() == {"error": "invalid_request", "message": "uid is required"}


def test_leaderboard_sync_reports_ok_or_skipped() -> None:
    ok = _client().post("/leaderboard/sync", json={"userId": "v-7"})
    skipped = _client(
        leaderboard=_StubLeaderboardUseCase(
            result=SyncLeaderboardEntryResult(
                entry=None,
                skipped=True,
                reason="store_unavailable",
            )
        )
    ).post("/leaderboard/sync", json={"userId": "v-7"})

    assert ok.json() == {"ok": True}
    assert skipped.status_code == 200
    assert skipped.json() == {"skipped": True, "reason": "store_unavailable"}


def test_ngo_mirror_admin_returns_success_or_forbidden() -> None:
    accepted = _StubNgoMirrorUseCase()
    ok = _client(ngo_mirror=accepted).post("/ngos/mirror-admin", json={"uid": "admin-1"})
    forbidden = _client(
        ngo_mirror=_StubNgoMirrorUseCase(
            error=AdminAccessDeniedError("Admin verification required.")
        )
    ).post("/ngos/mirror-admin", json={"uid": "admin-1"})

    assert ok.status_code == 200
    assert ok.json() == {"success": True}
    assert accepted.calls == ["admin-1"]
    assert forbidden.status_code == 403
    assert forbidden.json() == {
        "error": "admin_access_required",
        "message": "Admin verification required.",
    }
