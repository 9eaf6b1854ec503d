"""Identity claims carried by a signed token."""

from datetime import datetime
from typing import Optional, Protocol

from certis.domain.model.common import DomainModel
from certis.domain.value import OrganizationId, Role, UserId


class Principal(Protocol):
    """Anything authorization decisions can be made about.

    Both ``User`` and ``TokenClaims`` satisfy this.
    """

    @property
    def role(self) -> Role: ...

    @property
    def organization_id(self) -> Optional[OrganizationId]: ...


class TokenClaims(DomainModel):
    """Decoded, verified token payload.

    Claims are a snapshot taken at issue time: a role or organization change
    becomes visible only after the token is refreshed.
    """

    email: str
    user_id: UserId
    role: Role
    organization_id: Optional[OrganizationId] = None
    issued_at: datetime
    expires_at: datetime
