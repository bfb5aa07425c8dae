"""
Email delivery orchestrator — SMTP (primary) with Brevo (fallback).

All send_* functions are fire-and-forget: they log on failure but never raise.
Intended exclusively for use inside FastAPI BackgroundTasks.
"""
from __future__ import annotations

import logging

from app.auth.constants import VERIFICATION_CODE_EXPIRE_SECONDS
from app.config import Settings
from app.email import brevo, smtp

logger = logging.getLogger(__name__)


async def _deliver(
    to_email: str,
    to_name: str,
    subject: str,
    html: str,
    settings: Settings,
) -> None:
    """Try SMTP first, fall back to Brevo.  Never raises."""
    if smtp.is_configured(settings):
        if await smtp.deliver(to_email, to_name, subject, html, settings):
            return
        logger.warning("SMTP failed for %s, falling back to Brevo", to_email)

    if brevo.is_configured(settings):
        if await brevo.deliver(to_email, to_name, subject, html, settings):
            return
        logger.error("Brevo fallback also failed for %s", to_email)
        return

    logger.warning("No email provider configured, skipping email to %s", to_email)


def verification_code_html(username: str, code: str, app_name: str) -> str:
    minutes = VERIFICATION_CODE_EXPIRE_SECONDS // 60
    return (
        "<div style='font-family:Arial,sans-serif;line-height:1.5'>"
        f"<h2 style='color:#4f46e5'>Hi {username},</h2>"
        "<p>Here is your verification code:</p>"
        f"<p style='font-size:32px;font-weight:bold;color:#000'>{code}</p>"
        f"<p>This code is valid for {minutes} minutes.</p>"
        f"<p style='font-size:12px;color:#888'>The {app_name} team</p>"
        "</div>"
    )


async def send_verification_code(
    to_email: str, username: str, code: str, settings: Settings
) -> None:
    await _deliver(
        to_email, username,
        f"Your {settings.app_name} verification code",
        verification_code_html(username, code, settings.app_name),
        settings,
    )
