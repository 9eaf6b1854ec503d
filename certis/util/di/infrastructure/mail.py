"""Mail infrastructure providers."""

from dishka import Scope, provide

from certis.adapter.mail import SmtpEmailSender
from certis.config import Settings
from certis.domain.service import EmailSender
from certis.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider delivering over SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: Settings) -> EmailSender:
        """Provide SMTP email sender."""
        return SmtpEmailSender(settings.mail)
