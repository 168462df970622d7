"""
Identity domain models.

Claims, tokens and temporary storage credentials obtained from Cognito.

Dependencies: pydantic
System role: Identity contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserClaims(BaseModel):
    """Claims decoded from a Cognito ID token."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sub: str
    email: str = ""
    name: str | None = None
    cognito_username: str | None = Field(default=None, alias="cognito:username")
    exp: int | None = None

    @property
    def display_name(self) -> str:
        """Name to greet the user with: name, then username, then email local part."""
        return self.name or self.cognito_username or self.email.split("@")[0]


class TokenSet(BaseModel):
    """Tokens returned by InitiateAuth or the hosted UI token endpoint."""

    id_token: str
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None


class StorageCredentials(BaseModel):
    """Short-lived AWS credentials scoped to the identity pool."""

    access_key_id: str
    secret_key: str
    session_token: str
    expiration: datetime | None = None
