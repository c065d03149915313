from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, cast

import requests

from beachguard.contexts.verification.application.errors import DeliveryError
from beachguard.contexts.verification.application.ports import (
    VerificationEmail,
    VerificationNotifier,
)

log = logging.getLogger(__name__)

BREVO_DEFAULT_API_URL = "https://api.brevo.com/v3/smtp/email"


@dataclass(frozen=True, slots=True)
class BrevoEmailNotifierConfig:
    """
    BrevoEmailNotifierConfig — runtime settings for Brevo transactional email adapter.

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/messaging/email/
        brevo_email_notifier.py
      - apps/api/wiring/modules/verification.py
    """

    api_key: str
    sender_email: str
    sender_name: str = "BeachGuardians"
    api_url: str = BREVO_DEFAULT_API_URL
    send_timeout_s: float = 15.0

    def __post_init__(self) -> None:
        """
        Validate Brevo notifier config invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            API key is provided through environment and must never be empty.
        Raises:
            ValueError: If one of config values is invalid.
        Side Effects:
            None.
        """
        normalized_key = self.api_key.strip()
        normalized_url = self.api_url.strip()
        if not normalized_key:
            raise ValueError("BrevoEmailNotifierConfig.api_key must be non-empty")
        if not self.sender_email.strip():
            raise ValueError("BrevoEmailNotifierConfig.sender_email must be non-empty")
        if not normalized_url.startswith(("https://", "http://")):
            raise ValueError(
                "BrevoEmailNotifierConfig.api_url must start with http:// or https://"
            )
        if self.send_timeout_s <= 0:
            raise ValueError("BrevoEmailNotifierConfig.send_timeout_s must be > 0")
        object.__setattr__(self, "api_key", normalized_key)
        object.__setattr__(self, "api_url", normalized_url)


class BrevoHttpResponse(Protocol):
    """
    BrevoHttpResponse — minimal HTTP response contract used by Brevo notifier.
    """

    status_code: int

    @property
    def text(self) -> str:
        ...


class BrevoHttpSession(Protocol):
    """
    BrevoHttpSession — minimal HTTP session contract for Brevo notifier testability.

    Related:
      - src/beachguard/contexts/verification/adapters/outbound/messaging/email/
        brevo_email_notifier.py
      - tests/unit/contexts/verification/adapters/test_brevo_email_notifier.py
    """

    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Mapping[str, Any],
        timeout: float,
    ) -> BrevoHttpResponse:
        ...


class BrevoEmailVerificationNotifier(VerificationNotifier):
    """
    BrevoEmailVerificationNotifier — dispatcher sending verification email via Brevo API.

    Unlike best-effort notifiers, failures are reported to the caller as `DeliveryError`
    so the issuing request can surface them.

    Related:
      - src/beachguard/contexts/verification/application/ports/verification_notifier.py
      - src/beachguard/contexts/verification/application/use_cases/issue_otp_challenge.py
      - tests/unit/contexts/verification/adapters/test_brevo_email_notifier.py
    """

    def __init__(
        self,
        *,
        config: BrevoEmailNotifierConfig,
        session: BrevoHttpSession | None = None,
    ) -> None:
        """
        Initialize Brevo notifier dependencies.

        Args:
            config: Validated Brevo notifier config.
            session: Optional injected HTTP session for tests.
        Returns:
            None.
        Assumptions:
            None.
        Raises:
            ValueError: If config is missing.
        Side Effects:
            Creates `requests.Session` when no custom session is injected.
        """
        if config is None:  # type: ignore[truthy-bool]
            raise ValueError("BrevoEmailVerificationNotifier requires config")
        self._config = config
        self._session = (
            session if session is not None else cast(BrevoHttpSession, requests.Session())
        )

    def send(self, *, email: VerificationEmail) -> None:
        """
        Send one transactional email.

        Args:
            email: Rendered verification message.
        Returns:
            None.
        Assumptions:
            Brevo answers 2xx on accepted messages.
        Raises:
            DeliveryError: On transport failure or non-2xx response.
        Side Effects:
            Performs one outbound HTTP request.
        """
        try:
            response = self._session.post(
                self._config.api_url,
                headers={
                    "accept": "application/json",
                    "api-key": self._config.api_key,
                    "content-type": "application/json",
                },
                json=_payload(config=self._config, email=email),
                timeout=self._config.send_timeout_s,
            )
        except requests.RequestException as error:
            log.warning(
                "brevo email transport failed recipient=%s error=%s",
                email.recipient,
                error,
            )
            raise DeliveryError("email transport failed") from error

        if not 200 <= response.status_code < 300:
            log.warning(
                "brevo email rejected recipient=%s status_code=%s body=%s",
                email.recipient,
                response.status_code,
                _response_excerpt(response=response),
            )
            raise DeliveryError(f"email provider returned {response.status_code}")
        log.info("verification email sent recipient=%s subject=%s", email.recipient, email.subject)


def _payload(*, config: BrevoEmailNotifierConfig, email: VerificationEmail) -> dict[str, Any]:
    return {
        "sender": {"email": config.sender_email, "name": config.sender_name},
        "to": [{"email": email.recipient}],
        "subject": email.subject,
        "htmlContent": email.html,
    }


def _response_excerpt(*, response: BrevoHttpResponse) -> str:
    text = response.text
    if not text:
        return ""
    return text[:300]
