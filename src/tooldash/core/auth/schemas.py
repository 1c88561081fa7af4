"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from an access token.

    Attributes:
        principal_id: The authenticated principal (identity provider user ID)
        exp: Token expiration time
        email: The principal's email, when the provider includes it
    """

    principal_id: UUID
    exp: datetime
    email: str | None = None
