"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class MailDeliveryError(AdapterError):
    """Raised by the mock sender when told to fail."""

    pass
