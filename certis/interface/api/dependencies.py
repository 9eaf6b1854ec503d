"""Request dependencies shared by the routers."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from certis.domain.error import InvalidTokenError

# auto_error is off so a missing header goes through the domain error handler
bearer_scheme = HTTPBearer(auto_error=False)


async def bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Extract the raw token from ``Authorization: Bearer <token>``.

    Raises:
        InvalidTokenError: If the header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Authentication required")
    return credentials.credentials
