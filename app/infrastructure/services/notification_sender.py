"""Log-only notification sender (implements INotificationSender)."""

from __future__ import annotations

import logging

from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class LogOnlyNotificationSender:
    """INotificationSender implementation that logs instead of sending email.

    Use when no SMTP is configured. Production can swap in an SMTP or queue-based implementation.
    """

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Log the notification; no actual email sent."""
        recipients = [e for e in to_emails or [] if e]
        subject_preview = (subject or "")[:80]
        if not recipients:
            logger.info("Email notify: no recipients, skipping send (subject=%r)", subject_preview)
            return
        logger.info(
            "Email notify: would send to %d recipient(s) (subject=%r)",
            len(recipients),
            subject_preview,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Email notify recipients: %s (at %s); body: %s",
                recipients,
                utc_now().isoformat(),
                (body or "")[:500],
            )
