"""Outbound notifications.

Email delivery is fire-and-forget: the caller's success path never waits on
it and never sees its failures. Failures are reported through logfire.
"""

import asyncio
from abc import ABC, abstractmethod

import logfire

from certis.config import InvitationSettings
from certis.domain.model import Invitation

from .base import Service


class EmailSender(ABC):
    """Email delivery interface.

    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def send(self, to_address: str, subject: str, body: str) -> bool:
        """Send a plain text email.

        Args:
            to_address: Recipient address
            subject: Subject line
            body: Plain text body

        Returns:
            True if the message was handed to the mail server
        """
        pass


class NotificationService(Service):
    """Compose and dispatch invitation and welcome emails."""

    def __init__(
        self, email_sender: EmailSender, invitation_settings: InvitationSettings
    ) -> None:
        self.email_sender = email_sender
        self.invitation_settings = invitation_settings
        self._pending: set[asyncio.Task[None]] = set()

    def accept_url(self, invitation: Invitation) -> str:
        base_url = self.invitation_settings.base_url.rstrip("/")
        return f"{base_url}/invitations/accept?token={invitation.token.root}"

    def send_invitation(self, invitation: Invitation, organization_name: str) -> None:
        """Schedule the invitation email for a new invitation."""
        subject = f"Invitation to join {organization_name} on Certis"
        body = (
            "Hello,\n\n"
            f"You have been invited to join {organization_name} as a "
            f"{invitation.role.value} on Certis.\n\n"
            "Click the link below to accept this invitation:\n"
            f"{self.accept_url(invitation)}\n\n"
            f"This invitation will expire in {self.invitation_settings.expiry_days} days.\n\n"
            "If you did not expect this invitation, please ignore this email.\n\n"
            "Best regards,\n"
            "The Certis Team"
        )
        self._dispatch(invitation.email, subject, body, kind="invitation")

    def send_welcome(self, email: str, organization_name: str) -> None:
        """Schedule the welcome email for a new member."""
        subject = f"Welcome to {organization_name}"
        body = (
            f"Welcome to {organization_name}!\n\n"
            "You have successfully joined the organization on Certis.\n\n"
            "You can now log in and start using the platform.\n\n"
            "Best regards,\n"
            "The Certis Team"
        )
        self._dispatch(email, subject, body, kind="welcome")

    async def drain(self) -> None:
        """Wait for every scheduled email to finish (tests and shutdown)."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _dispatch(self, to_address: str, subject: str, body: str, kind: str) -> None:
        task = asyncio.create_task(self._deliver(to_address, subject, body, kind))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(
        self, to_address: str, subject: str, body: str, kind: str
    ) -> None:
        with logfire.span("notification_service.deliver", kind=kind, to=to_address):
            try:
                sent = await self.email_sender.send(to_address, subject, body)
            except Exception as e:
                logfire.error(
                    "Email delivery raised", kind=kind, to=to_address, error=str(e)
                )
                return
            if sent:
                logfire.info("Email sent", kind=kind, to=to_address)
            else:
                logfire.error("Email delivery failed", kind=kind, to=to_address)
