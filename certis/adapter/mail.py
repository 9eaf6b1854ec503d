"""Email delivery adapters."""

import asyncio
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText

import logfire

from certis.adapter.error import MailDeliveryError
from certis.config import MailSettings
from certis.domain.service.notification import EmailSender


class SmtpEmailSender(EmailSender):
    """Delivers plain text email via SMTP."""

    def __init__(self, settings: MailSettings) -> None:
        """Initialize the SMTP sender.

        Args:
            settings: Mail settings (server, credentials, from address)
        """
        self.settings = settings

    async def send(self, to_address: str, subject: str, body: str) -> bool:
        # smtplib blocks; keep it off the event loop
        return await asyncio.to_thread(self._send_sync, to_address, subject, body)

    def _send_sync(self, to_address: str, subject: str, body: str) -> bool:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = f"{self.settings.from_name} <{self.settings.from_email}>"
        msg["To"] = to_address

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port) as server:
                if self.settings.use_tls:
                    server.starttls()

                if self.settings.smtp_user and self.settings.smtp_password:
                    server.login(self.settings.smtp_user, self.settings.smtp_password)

                server.sendmail(self.settings.from_email, [to_address], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logfire.error(
                "SMTP delivery failed", to=to_address, subject=subject, error=str(e)
            )
            return False

        logfire.info("SMTP message sent", to=to_address, subject=subject)
        return True


@dataclass
class SentEmail:
    to_address: str
    subject: str
    body: str


class MockEmailSender(EmailSender):
    """Records messages instead of sending them.

    Set ``fail`` to make every send raise, to exercise failure isolation.
    """

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []
        self.fail = False

    async def send(self, to_address: str, subject: str, body: str) -> bool:
        if self.fail:
            raise MailDeliveryError(f"Mock delivery to {to_address} failed")
        self.sent.append(SentEmail(to_address=to_address, subject=subject, body=body))
        return True
