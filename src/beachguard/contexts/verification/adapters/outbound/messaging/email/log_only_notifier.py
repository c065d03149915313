from __future__ import annotations

import logging

from beachguard.contexts.verification.application.ports import (
    VerificationEmail,
    VerificationNotifier,
)

log = logging.getLogger(__name__)


class LogOnlyVerificationNotifier(VerificationNotifier):
    """
    LogOnlyVerificationNotifier — dev/test dispatcher writing messages to the log.

    Keeps the last sent messages in memory so local runs and tests can read the code.

    Related:
      - src/beachguard/contexts/verification/application/ports/verification_notifier.py
      - apps/api/wiring/modules/verification.py
    """

    def __init__(self) -> None:
        self._sent: list[VerificationEmail] = []

    @property
    def sent(self) -> tuple[VerificationEmail, ...]:
        return tuple(self._sent)

    def send(self, *, email: VerificationEmail) -> None:
        self._sent.append(email)
        log.info(
            "verification email (log only) recipient=%s subject=%s body=%s",
            email.recipient,
            email.subject,
            email.html,
        )
