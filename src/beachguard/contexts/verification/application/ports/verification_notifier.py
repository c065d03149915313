from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class VerificationEmail:
    """
    VerificationEmail — rendered out-of-band message carrying an OTP code.

    Related:
      - src/beachguard/contexts/verification/application/services/email_templates.py
      - src/beachguard/contexts/verification/adapters/outbound/messaging/email/
        brevo_email_notifier.py
    """

    recipient: str
    subject: str
    html: str

    def __post_init__(self) -> None:
        if not self.recipient.strip():
            raise ValueError("VerificationEmail.recipient must be non-empty")
        if not self.subject.strip():
            raise ValueError("VerificationEmail.subject must be non-empty")


class VerificationNotifier(Protocol):
    """
    VerificationNotifier — notification dispatcher port (email transport is external).

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/messaging/email/
        log_only_notifier.py
      - src/beachguard/contexts/verification/adapters/outbound/messaging/email/
        brevo_email_notifier.py
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
    """

    def send(self, *, email: VerificationEmail) -> None:
        """
        Deliver one message.

        Args:
            email: Rendered message.
        Returns:
            None.
        Assumptions:
            Success is signalled by returning normally.
        Raises:
            DeliveryError: If delivery failed.
        Side Effects:
            Performs outbound delivery.
        """
        ...
