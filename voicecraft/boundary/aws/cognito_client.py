"""
Cognito identity client.

Awaitable wrappers over the Cognito user pool (sign-up, confirmation,
password sign-in, refresh, sign-out), the identity pool (scoped storage
credentials) and the hosted UI token endpoint. Provider errors are raised
as AuthenticationError carrying a fixed user-facing message.

The user pool app client is public, so user pool and identity pool calls
are sent unsigned.

Dependencies: boto3, botocore, httpx
System role: Identity boundary
"""

import asyncio
import base64
import json
import logging
import time
from urllib.parse import urlencode

import boto3
import httpx
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from voicecraft.configs.cognito import CognitoSettings
from voicecraft.core.auth_errors import friendly_error, error_code
from voicecraft.core.exceptions import AuthenticationError
from voicecraft.models.identity import StorageCredentials, TokenSet, UserClaims
from voicecraft.observability.log_utils import log_with_context, mask_secret

logger = logging.getLogger(__name__)


def decode_claims(id_token: str) -> UserClaims:
    """
    Read the claims of an ID token without verifying it.

    The API authorizer verifies the token server-side; the front end only
    needs the claims for display and for the user ID.

    Raises:
        AuthenticationError: Token is not a readable JWT
    """
    try:
        payload_segment = id_token.split(".")[1]
        padded = payload_segment + "=" * (-len(payload_segment) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded))
        return UserClaims.model_validate(payload)
    except (IndexError, ValueError, PydanticValidationError) as e:
        raise AuthenticationError("Invalid identity token.", code="InvalidToken") from e


def is_token_valid(claims: UserClaims, leeway: int = 30) -> bool:
    """True when the token has not expired (tokens without exp never are)."""
    if claims.exp is None:
        return True
    return claims.exp - leeway > time.time()


class CognitoIdentityClient:
    """Cognito user pool, identity pool and hosted UI operations."""

    def __init__(
        self,
        settings: CognitoSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the identity client.

        Args:
            settings: Cognito configuration
            transport: Optional httpx transport for the hosted UI token call
        """
        self._settings = settings
        self._transport = transport
        self._idp = None
        self._identity = None

    @property
    def idp(self):
        """Lazily created cognito-idp client."""
        if self._idp is None:
            self._idp = boto3.client(
                "cognito-idp",
                region_name=self._settings.region,
                config=Config(signature_version=UNSIGNED),
            )
        return self._idp

    @property
    def identity(self):
        """Lazily created cognito-identity client."""
        if self._identity is None:
            self._identity = boto3.client(
                "cognito-identity",
                region_name=self._settings.region,
                config=Config(signature_version=UNSIGNED),
            )
        return self._identity

    async def _call(self, operation: str, func, **kwargs) -> dict:
        try:
            return await asyncio.to_thread(func, **kwargs)
        except ClientError as e:
            logger.warning(
                f"{__name__}:{operation} - {error_code(e)}",
                extra={"operation": operation, "code": error_code(e)},
            )
            raise AuthenticationError(friendly_error(e), code=error_code(e)) from e
        except BotoCoreError as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise AuthenticationError(
                "Could not reach the sign-in service. Please try again.",
                code=type(e).__name__,
            ) from e

    async def sign_up(self, email: str, password: str, name: str) -> str:
        """
        Register a user; Cognito emails a confirmation code.

        Returns:
            str: The new user's sub
        """
        response = await self._call(
            "sign_up",
            self.idp.sign_up,
            ClientId=self._settings.client_id,
            Username=email,
            Password=password,
            UserAttributes=[
                {"Name": "email", "Value": email},
                {"Name": "name", "Value": name},
            ],
        )
        logger.info("User registered, awaiting confirmation")
        return response.get("UserSub", "")

    async def confirm_sign_up(self, email: str, code: str) -> None:
        await self._call(
            "confirm_sign_up",
            self.idp.confirm_sign_up,
            ClientId=self._settings.client_id,
            Username=email,
            ConfirmationCode=code,
            ForceAliasCreation=True,
        )

    async def resend_confirmation_code(self, email: str) -> None:
        await self._call(
            "resend_confirmation_code",
            self.idp.resend_confirmation_code,
            ClientId=self._settings.client_id,
            Username=email,
        )

    async def authenticate(self, email: str, password: str) -> TokenSet:
        """
        Sign in with username and password.

        Raises:
            AuthenticationError: Wrong credentials, unconfirmed account,
                reset required, throttling, or an unsupported challenge
        """
        response = await self._call(
            "authenticate",
            self.idp.initiate_auth,
            ClientId=self._settings.client_id,
            AuthFlow="USER_PASSWORD_AUTH",
            AuthParameters={"USERNAME": email, "PASSWORD": password},
        )
        return self._token_set(response)

    async def refresh_session(self, refresh_token: str) -> TokenSet:
        """Exchange a refresh token for fresh ID and access tokens."""
        response = await self._call(
            "refresh_session",
            self.idp.initiate_auth,
            ClientId=self._settings.client_id,
            AuthFlow="REFRESH_TOKEN_AUTH",
            AuthParameters={"REFRESH_TOKEN": refresh_token},
        )
        tokens = self._token_set(response)
        if tokens.refresh_token is None:
            tokens.refresh_token = refresh_token
        return tokens

    async def sign_out(self, access_token: str) -> None:
        """Revoke every token issued to the user."""
        await self._call(
            "sign_out",
            self.idp.global_sign_out,
            AccessToken=access_token,
        )

    async def get_storage_credentials(self, id_token: str) -> StorageCredentials:
        """
        Exchange an ID token for identity pool credentials.

        Raises:
            AuthenticationError: No identity pool configured, or Cognito refused
        """
        if not self._settings.identity_pool_id:
            raise AuthenticationError(
                "Storage credentials are not configured.",
                code="IdentityPoolNotConfigured",
            )

        logins = {self._settings.provider_name: id_token}
        identity = await self._call(
            "get_id",
            self.identity.get_id,
            IdentityPoolId=self._settings.identity_pool_id,
            Logins=logins,
        )
        response = await self._call(
            "get_credentials_for_identity",
            self.identity.get_credentials_for_identity,
            IdentityId=identity["IdentityId"],
            Logins=logins,
        )
        credentials = response["Credentials"]
        return StorageCredentials(
            access_key_id=credentials["AccessKeyId"],
            secret_key=credentials["SecretKey"],
            session_token=credentials["SessionToken"],
            expiration=credentials.get("Expiration"),
        )

    async def exchange_authorization_code(self, code: str) -> TokenSet:
        """
        Complete the hosted UI login by trading the ?code= for tokens.

        Raises:
            AuthenticationError: Token endpoint refused or returned no ID token
        """
        token_endpoint = f"{self._settings.hosted_ui_domain.rstrip('/')}/oauth2/token"
        log_with_context(
            logger,
            logging.INFO,
            "Exchanging hosted UI authorization code",
            code=mask_secret(code),
            endpoint=token_endpoint,
        )
        form = {
            "grant_type": "authorization_code",
            "client_id": self._settings.client_id,
            "code": code,
            "redirect_uri": self._settings.callback_url,
        }

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=15.0) as client:
                response = await client.post(token_endpoint, data=form)
        except httpx.TransportError as e:
            raise AuthenticationError(
                "Failed to complete sign in. Please try again.",
                code=type(e).__name__,
            ) from e

        if not response.is_success:
            raise AuthenticationError(
                f"Token endpoint returned {response.status_code}: {response.text}",
                code="TokenExchangeFailed",
            )

        tokens = response.json()
        if not tokens.get("id_token"):
            raise AuthenticationError(
                "No id_token in response from Cognito.",
                code="TokenExchangeFailed",
            )
        return TokenSet(
            id_token=tokens["id_token"],
            access_token=tokens.get("access_token"),
            refresh_token=tokens.get("refresh_token"),
            expires_in=tokens.get("expires_in"),
        )

    def build_login_url(self) -> str:
        """Hosted UI authorize URL for the code grant."""
        query = urlencode(
            {
                "client_id": self._settings.client_id,
                "response_type": "code",
                "redirect_uri": self._settings.callback_url,
            }
        )
        # Scopes are already '+'-joined and must not be re-encoded
        return (
            f"{self._settings.hosted_ui_domain.rstrip('/')}/oauth2/authorize"
            f"?{query}&scope={self._settings.scopes}"
        )

    def build_logout_url(self) -> str:
        query = urlencode(
            {"client_id": self._settings.client_id, "logout_uri": self._settings.logout_url}
        )
        return f"{self._settings.hosted_ui_domain.rstrip('/')}/logout?{query}"

    @staticmethod
    def _token_set(response: dict) -> TokenSet:
        if "ChallengeName" in response:
            challenge = response["ChallengeName"]
            if challenge == "NEW_PASSWORD_REQUIRED":
                raise AuthenticationError(
                    "A password reset is required for this account.",
                    code=challenge,
                )
            raise AuthenticationError(
                "This sign-in step is not supported.",
                code=challenge,
            )

        result = response["AuthenticationResult"]
        return TokenSet(
            id_token=result["IdToken"],
            access_token=result.get("AccessToken"),
            refresh_token=result.get("RefreshToken"),
            expires_in=result.get("ExpiresIn"),
        )
