from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from beachguard.contexts.verification.application.use_cases import (
    IssueOtpChallengeUseCase,
    VerifyOtpChallengeUseCase,
)


class SendVerificationOtpRequest(BaseModel):
    """
    SendVerificationOtpRequest — API request payload for `POST /auth/send-verification-otp`.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
      - apps/api/routes/verification.py
    """

    email: str | None = None
    uid: str | None = None


class SendVolunteerOtpRequest(BaseModel):
    """
    SendVolunteerOtpRequest — API request payload for `POST /auth/send-volunteer-otp`.
    """

    email: str | None = None
    name: str | None = None


class VerifyOtpRequest(BaseModel):
    """
    VerifyOtpRequest — API request payload for `POST /auth/verify-otp`.
    """

    uid: str | None = None
    otp: str | None = None


class VerifyVolunteerOtpRequest(BaseModel):
    """
    VerifyVolunteerOtpRequest — API request payload for `POST /auth/verify-volunteer-otp`.

    `uid` is optional: volunteers usually verify before their account exists.
    """

    email: str | None = None
    otp: str | None = None
    uid: str | None = None


class SuccessMessageResponse(BaseModel):
    """
    SuccessMessageResponse — `{success, message}` payload for admin OTP endpoints.
    """

    success: bool
    message: str


class MessageResponse(BaseModel):
    """
    MessageResponse — `{message}` payload for volunteer OTP issuance.
    """

    message: str


class VolunteerVerifiedResponse(BaseModel):
    """
    VolunteerVerifiedResponse — `{verified, message}` payload for volunteer verification.
    """

    verified: bool
    message: str


def build_otp_verification_router(
    *,
    issue_use_case: IssueOtpChallengeUseCase,
    verify_use_case: VerifyOtpChallengeUseCase,
) -> APIRouter:
    """
    Build router exposing OTP issuance and verification endpoints.

    Args:
        issue_use_case: OTP issuance use-case.
        verify_use_case: OTP verification use-case.
    Returns:
        APIRouter: Router with `/auth/*` OTP endpoints.
    Assumptions:
        `VerificationOperationError` is mapped by an app-level exception handler.
    Raises:
        ValueError: If required dependencies are missing.
    Side Effects:
        None.
    """
    if issue_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_otp_verification_router requires issue_use_case")
    if verify_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_otp_verification_router requires verify_use_case")

    router = APIRouter(prefix="/auth", tags=["verification"])

    @router.post("/send-verification-otp", response_model=SuccessMessageResponse)
    def post_send_verification_otp(
        request: SendVerificationOtpRequest,
    ) -> SuccessMessageResponse:
        """
        Issue admin OTP and email it.

        Args:
            request: Admin email and uid.
        Returns:
            SuccessMessageResponse: Confirmation payload.
        Assumptions:
            None.
        Raises:
            VerificationOperationError: Mapped to `{error, message}` by app handler.
        Side Effects:
            Overwrites stored challenge and sends one email.
        """
        issue_use_case.issue_for_admin(user_id=request.uid or "", email=request.email or "")
        return SuccessMessageResponse(
            success=True,
            message="Verification OTP sent successfully.",
        )

    @router.post("/send-volunteer-otp", response_model=MessageResponse)
    def post_send_volunteer_otp(request: SendVolunteerOtpRequest) -> MessageResponse:
        issue_use_case.issue_for_volunteer(email=request.email or "", name=request.name or "")
        return MessageResponse(message="OTP sent successfully")

    @router.post("/verify-otp", response_model=SuccessMessageResponse)
    def post_verify_otp(request: VerifyOtpRequest) -> SuccessMessageResponse:
        """
        Verify admin OTP and mirror verification flags.

        Args:
            request: Admin uid and submitted code.
        Returns:
            SuccessMessageResponse: Confirmation payload.
        Assumptions:
            Mirror write failures do not fail the request.
        Raises:
            VerificationOperationError: Mapped to `{error, message}` by app handler.
        Side Effects:
            Consumes challenge and writes profile flags.
        """
        verify_use_case.verify_admin(user_id=request.uid or "", code=request.otp or "")
        return SuccessMessageResponse(success=True, message="Account verified successfully.")

    @router.post("/verify-volunteer-otp", response_model=VolunteerVerifiedResponse)
    def post_verify_volunteer_otp(
        request: VerifyVolunteerOtpRequest,
    ) -> VolunteerVerifiedResponse:
        verify_use_case.verify_volunteer(
            email=request.email or "",
            code=request.otp or "",
            user_id=request.uid,
        )
        return VolunteerVerifiedResponse(verified=True, message="OTP verified successfully")

    return router
