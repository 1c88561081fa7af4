"""Authentication module: access token verification and request context."""

from tooldash.core.auth.backend import create_access_token, decode_token
from tooldash.core.auth.dependencies import TokenDataDep, get_token_data
from tooldash.core.auth.middleware import (
    PrincipalContextMiddleware,
    RequestIdMiddleware,
)
from tooldash.core.auth.schemas import TokenData


__all__ = [
    "PrincipalContextMiddleware",
    "RequestIdMiddleware",
    "TokenData",
    "TokenDataDep",
    "create_access_token",
    "decode_token",
    "get_token_data",
]
