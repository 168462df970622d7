"""
Cognito identity configuration.

User pool, identity pool and hosted UI settings used for sign-in,
sign-up and scoped storage credentials.

Dependencies: pydantic_settings
System role: Identity provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CognitoSettings(BaseSettings):
    """Settings for the Cognito user pool, identity pool and hosted UI."""

    model_config = SettingsConfigDict(
        env_prefix="COGNITO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = Field(
        default="eu-west-2",
        description="AWS region of the user pool and identity pool",
    )
    user_pool_id: str = Field(
        default="eu-west-2_9G6wvet1N",
        description="Cognito user pool ID",
    )
    client_id: str = Field(
        default="79bnu9nead8lfbvf158pr2ppuf",
        description="App client ID (no client secret)",
    )
    identity_pool_id: str | None = Field(
        default=None,
        description="Identity pool ID used to mint storage write credentials",
    )
    hosted_ui_domain: str = Field(
        default="https://voicecraft-web.auth.eu-west-2.amazoncognito.com",
        description="Hosted UI domain for OAuth redirects",
    )
    callback_url: str = Field(
        default="http://localhost:8000/api/v1/auth/callback",
        description="Where the hosted UI sends the user after login",
    )
    logout_url: str = Field(
        default="http://localhost:8000/",
        description="Where the hosted UI sends the user after logout",
    )
    scopes: str = Field(
        default="email+openid+profile",
        description="OAuth scopes requested from the hosted UI",
    )

    @property
    def provider_name(self) -> str:
        """Identity pool login key for this user pool."""
        return f"cognito-idp.{self.region}.amazonaws.com/{self.user_pool_id}"
