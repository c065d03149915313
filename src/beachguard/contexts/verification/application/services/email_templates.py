from __future__ import annotations

from html import escape

from beachguard.contexts.verification.application.ports import VerificationEmail

ADMIN_VERIFICATION_SUBJECT = "Your Admin Verification Code"
VOLUNTEER_VERIFICATION_SUBJECT = "Verify Your BeachGuardians Account"


def render_admin_verification_email(
    *,
    recipient: str,
    code: str,
    ttl_minutes: int,
) -> VerificationEmail:
    """
    Render admin verification email carrying the OTP code.

    Args:
        recipient: Admin email address.
        code: Six-digit OTP code.
        ttl_minutes: Code lifetime shown to the reader.
    Returns:
        VerificationEmail: Rendered message.
    Assumptions:
        Code is numeric and needs no escaping.
    Raises:
        ValueError: If recipient is blank.
    Side Effects:
        None.
    """
    html = (
        '<div style="font-family: Arial, sans-serif; padding: 20px;">'
        "<h2>Admin Account Verification</h2>"
        "<p>Thank you for registering as an admin on BeachGuardians.</p>"
        "<p>Your one-time verification code is:</p>"
        f'<p style="font-size: 24px; font-weight: bold; letter-spacing: 4px;">{code}</p>'
        f"<p>This code will expire in {ttl_minutes} minutes.</p>"
        "<p>If you did not request this code, you can ignore this email.</p>"
        "</div>"
    )
    return VerificationEmail(
        recipient=recipient,
        subject=ADMIN_VERIFICATION_SUBJECT,
        html=html,
    )


def render_volunteer_verification_email(
    *,
    recipient: str,
    name: str,
    code: str,
    ttl_minutes: int,
) -> VerificationEmail:
    """
    Render personalized volunteer verification email carrying the OTP code.

    Args:
        recipient: Volunteer email address.
        name: Display name, HTML-escaped before rendering.
        code: Six-digit OTP code.
        ttl_minutes: Code lifetime shown to the reader.
    Returns:
        VerificationEmail: Rendered message.
    Assumptions:
        None.
    Raises:
        ValueError: If recipient is blank.
    Side Effects:
        None.
    """
    html = (
        '<div style="font-family: Arial, sans-serif; padding: 20px;">'
        f"<h2>Welcome to BeachGuardians, {escape(name)}!</h2>"
        "<p>Use the code below to verify your volunteer account:</p>"
        f'<p style="font-size: 24px; font-weight: bold; letter-spacing: 4px;">{code}</p>'
        f"<p>This code will expire in {ttl_minutes} minutes.</p>"
        "<p>See you on the beach!</p>"
        "</div>"
    )
    return VerificationEmail(
        recipient=recipient,
        subject=VOLUNTEER_VERIFICATION_SUBJECT,
        html=html,
    )
