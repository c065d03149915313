from __future__ import annotations


class VerificationOperationError(ValueError):
    """
    VerificationOperationError — base deterministic error for OTP and profile mirror flows.

    Every externally observable failure carries a machine-readable `code` distinct from
    its human-readable `message`, plus the HTTP status the inbound adapter maps it to.

    Related:
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
      - src/beachguard/contexts/verification/application/use_cases/verify_otp_challenge.py
      - src/beachguard/contexts/verification/adapters/inbound/api/errors.py
    """

    def __init__(self, *, code: str, message: str, status_code: int) -> None:
        """
        Initialize stable operation error attributes for HTTP mapping.

        Args:
            code: Machine-readable deterministic error code.
            message: Human-readable deterministic message.
            status_code: HTTP status expected by inbound adapter.
        Returns:
            None.
        Assumptions:
            Status code is final and does not require additional adapter mapping logic.
        Raises:
            None.
        Side Effects:
            None.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    def payload(self) -> dict[str, str]:
        """
        Build deterministic HTTP error payload with stable key order.

        Args:
            None.
        Returns:
            dict[str, str]: `{"error": "...", "message": "..."}` payload.
        Assumptions:
            Payload is returned verbatim as the JSON response body.
        Raises:
            None.
        Side Effects:
            None.
        """
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(VerificationOperationError):
    """
    ValidationError — malformed request input, raised before any store access.
    """

    def __init__(self, message: str = "Request payload is invalid.") -> None:
        super().__init__(code="invalid_request", message=message, status_code=400)


class NotFoundError(VerificationOperationError):
    """
    NotFoundError — base for missing challenge or unknown subject.
    """


class ChallengeNotFoundError(NotFoundError):
    """
    ChallengeNotFoundError — no challenge outstanding for the subject.
    """

    def __init__(self) -> None:
        super().__init__(
            code="challenge_not_found",
            message="No verification code is outstanding. Please request a new one.",
            status_code=400,
        )


class SubjectNotFoundError(NotFoundError):
    """
    SubjectNotFoundError — profile for the subject does not exist.
    """

    def __init__(self, message: str = "User not found.") -> None:
        super().__init__(code="subject_not_found", message=message, status_code=404)


class ExpiredError(VerificationOperationError):
    """
    ExpiredError — challenge was submitted after its absolute expiry and was removed.
    """

    def __init__(self) -> None:
        super().__init__(
            code="challenge_expired",
            message="Verification code has expired. Please request a new one.",
            status_code=400,
        )


class MismatchError(VerificationOperationError):
    """
    MismatchError — submitted code differs from the stored one; the challenge is kept.
    """

    def __init__(self) -> None:
        super().__init__(
            code="code_mismatch",
            message="Invalid verification code.",
            status_code=400,
        )


class StoreUnavailableError(VerificationOperationError):
    """
    StoreUnavailableError — backing store could not be reached or rejected the operation.

    Raised by outbound persistence adapters. Absorbed by the mirror fallback path,
    surfaced as a failure everywhere else.
    """

    def __init__(self, *, store: str, detail: str = "") -> None:
        message = f"{store} is unavailable."
        if detail:
            message = f"{store} is unavailable: {detail}"
        super().__init__(code="store_unavailable", message=message, status_code=500)
        self.store = store


class DeliveryError(VerificationOperationError):
    """
    DeliveryError — notification dispatch failed after the challenge was stored.
    """

    def __init__(self, detail: str = "") -> None:
        message = "Failed to send verification code."
        if detail:
            message = f"Failed to send verification code: {detail}"
        super().__init__(code="delivery_failed", message=message, status_code=500)


class AdminAccessDeniedError(VerificationOperationError):
    """
    AdminAccessDeniedError — caller profile is not a verified admin.
    """

    def __init__(self, message: str = "Admin verification required.") -> None:
        super().__init__(code="admin_access_required", message=message, status_code=403)
