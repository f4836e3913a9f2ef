"""
Mail service for account emails.

Sends the activation and password reset messages over SMTP using the
credentials from Settings. When SMTP is not configured the message is logged
and skipped.
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from manage_api.core.config import Settings, settings as default_settings
from manage_api.models.user import User

logger = logging.getLogger(__name__)


class MailService:
    """
    Service class for outgoing account mail.

    Delivery runs in a worker thread so that smtplib does not block the
    event loop. Failures are logged and reported as False, never raised:
    a mail outage must not fail the request that triggered it.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> bool:
        """
        Send one email.

        Returns:
            True if the message was handed to the SMTP server
        """
        if not self.settings.smtp_configured:
            logger.info(f"SMTP not configured; skipping mail '{subject}' to {to_email}")
            return False

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.settings.smtp_from
        message["To"] = to_email
        message.attach(MIMEText(text_body or html_body, "plain", "utf-8"))
        message.attach(MIMEText(html_body, "html", "utf-8"))

        try:
            await asyncio.to_thread(self._deliver, to_email, message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send mail '{subject}' to {to_email}: {e}")
            return False

        logger.info(f"Sent mail '{subject}' to {to_email}")
        return True

    def _deliver(self, to_email: str, payload: str) -> None:
        host = self.settings.smtp_host
        port = self.settings.smtp_port
        context = ssl.create_default_context()
        if port == 465:
            with smtplib.SMTP_SSL(host, port, context=context) as server:
                server.login(self.settings.smtp_user, self.settings.smtp_password)
                server.sendmail(self.settings.smtp_from, [to_email], payload)
        else:
            with smtplib.SMTP(host, port) as server:
                server.ehlo()
                server.starttls(context=context)
                server.login(self.settings.smtp_user, self.settings.smtp_password)
                server.sendmail(self.settings.smtp_from, [to_email], payload)

    async def send_activation_email(self, user: User) -> bool:
        """Send the activation link for a freshly registered user."""
        link = f"{self.settings.base_url}/account/activate?key={user.activation_key}"
        return await self.send_email(
            user.email,
            f"{self.settings.app_name} account activation",
            self._html(user, "Your account has been created, please click on the link below to activate it:", link),
            f"Activate your account: {link}",
        )

    async def send_password_reset_mail(self, user: User) -> bool:
        """Send the password reset link for a user holding a reset key."""
        link = f"{self.settings.base_url}/account/reset/finish?key={user.reset_key}"
        return await self.send_email(
            user.email,
            f"{self.settings.app_name} password reset",
            self._html(user, "For your account a password reset was requested, please click on the link below to reset it:", link),
            f"Reset your password: {link}",
        )

    @staticmethod
    def _html(user: User, prompt: str, link: str) -> str:
        return f"""
        <p>Dear {user.first_name or user.login}</p>
        <p>{prompt}</p>
        <p><a href="{link}">{link}</a></p>
        """
