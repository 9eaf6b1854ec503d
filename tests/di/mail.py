"""Mock mail provider for testing."""

from dishka import Scope, provide

from certis.adapter.mail import MockEmailSender
from certis.domain.service import EmailSender
from certis.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Records outgoing email instead of sending it.

    Tests fetch ``EmailSender`` from the container and inspect ``sent``.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_email_sender(self) -> EmailSender:
        return MockEmailSender()
