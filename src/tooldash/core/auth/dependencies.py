"""FastAPI dependencies for authentication.

Resolving *who* is calling lives here; resolving *what they may do*
lives in ``tooldash.core.permissions.dependencies``.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tooldash.core.auth.backend import decode_token
from tooldash.core.auth.schemas import TokenData
from tooldash.core.errors import UnauthorizedError


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired
    """
    if not credentials:
        raise UnauthorizedError(error_code="missing_token")

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(error_code="invalid_token")

    request.state.principal_id = token_data.principal_id
    return token_data


TokenDataDep = Annotated[TokenData, Depends(get_token_data)]
