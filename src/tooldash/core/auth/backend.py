"""Access token handling.

Access tokens are issued by the identity provider and signed with the
shared project secret. This service only verifies them; ``create_access_token``
exists for local development and tests.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from tooldash.config import settings
from tooldash.core.auth.schemas import TokenData


def create_access_token(
    principal_id: UUID,
    email: str | None = None,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed access token shaped like the identity provider's.

    Args:
        principal_id: The principal's UUID, stored in ``sub``
        email: Optional email claim
        expires_delta: Optional custom expiration time
        additional_claims: Optional extra claims to include

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )

    to_encode: dict[str, Any] = {
        "sub": str(principal_id),
        "exp": expire,
        "iat": now,
        "role": "authenticated",
        "jti": secrets.token_urlsafe(16),
    }
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if email:
        to_encode["email"] = email
    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> TokenData | None:
    """Decode and validate an access token.

    Args:
        token: The JWT to decode

    Returns:
        TokenData if valid, None if invalid, expired or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": settings.jwt_audience is not None},
        )

        principal_id = payload.get("sub")
        exp = payload.get("exp")
        if not principal_id or exp is None:
            return None

        return TokenData(
            principal_id=UUID(principal_id),
            exp=datetime.fromtimestamp(exp, tz=UTC),
            email=payload.get("email"),
        )

    except (JWTError, ValueError, TypeError):
        return None
