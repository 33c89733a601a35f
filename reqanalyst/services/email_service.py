"""Email service using SendGrid."""

import logging
from dataclasses import dataclass

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from reqanalyst.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailResult:
    """Outcome of a send. preview_url is only set outside production."""

    success: bool
    preview_url: str | None = None


class EmailService:
    """Sends transactional emails via SendGrid.

    Constructed once at startup and injected where needed. Outside production,
    when no API key is configured, nothing is sent and the link is handed back
    as a preview instead.
    """

    def __init__(
        self,
        api_key: str,
        from_address: str,
        from_name: str,
        production: bool = False,
        timeout: float = 5.0,
    ) -> None:
        self.api_key = api_key
        self.from_address = from_address
        self.from_name = from_name
        self.production = production
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "EmailService":
        return cls(
            api_key=settings.sendgrid_api_key,
            from_address=settings.email_from_address,
            from_name=settings.email_from_name,
            production=settings.is_production,
            timeout=settings.email_timeout_seconds,
        )

    def _send_email(self, to_email: str, subject: str, html_content: str) -> bool:
        """Send email via SendGrid. Returns True if successful."""
        message = Mail(
            from_email=(self.from_address, self.from_name),
            to_emails=to_email,
            subject=subject,
            html_content=html_content,
        )

        try:
            sg = SendGridAPIClient(self.api_key)
            sg.client.timeout = self.timeout
            response = sg.send(message)
            logger.info(f"Email sent to {to_email}, status: {response.status_code}")
            return response.status_code in (200, 201, 202)
        except Exception:
            logger.exception(f"Failed to send email to {to_email}")
            return False

    def send_password_reset_email(self, email: str, reset_url: str) -> EmailResult:
        """Send password reset link."""
        if not self.api_key:
            if self.production:
                logger.error("SendGrid API key not configured, cannot send reset email")
                return EmailResult(success=False)
            logger.warning("SendGrid API key not configured, returning reset link as preview")
            return EmailResult(success=True, preview_url=reset_url)

        html = f"""
        <h2>Reset Your Password</h2>
        <p>We received a request to reset your password. If it wasn't you, you can ignore this email.</p>
        <p>Click the link below to reset your password:</p>
        <p><a href="{reset_url}">{reset_url}</a></p>
        <p>This link expires in {settings.reset_token_expire_hours} hours.</p>
        """
        sent = self._send_email(email, "Reset Your Password - AI Requirements Analyst", html)
        return EmailResult(success=sent)
