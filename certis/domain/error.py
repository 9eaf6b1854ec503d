"""Domain layer errors.

Every error here is recoverable by the caller: it may retry, report the
problem to the end user or abort. None of them should crash the process.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidTokenError(DomainError):
    """Raised for a malformed, expired or tampered credential."""

    pass


class InvalidCredentialsError(DomainError):
    """Raised when an email/password pair does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class ForbiddenError(DomainError):
    """Raised when an authenticated caller lacks the role or organization."""

    pass


class EmailMismatchError(ForbiddenError):
    """Raised when a user accepts an invitation addressed to someone else."""

    def __init__(self) -> None:
        super().__init__("User email does not match invitation")


class ConflictError(DomainError):
    """Raised when a uniqueness or invariant check fails."""

    pass


class ConcurrencyConflictError(ConflictError):
    """Raised when an optimistic write loses against a concurrent one.

    Retryable: re-read the entity, re-check preconditions and try again.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} was modified concurrently")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PreconditionFailedError(DomainError):
    """Raised when an operation is structurally invalid in the current state."""

    pass


class InvitationExpiredError(DomainError):
    """Raised when an invitation is used after its expiry."""

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__("Invitation has expired")
