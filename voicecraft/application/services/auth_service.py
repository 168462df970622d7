"""
Authentication service.

Sign-up with email confirmation, password sign-in, hosted UI callback,
session restore and sign-out. Successful sign-ins cache the user's claims
and tokens in the tab session; sign-out clears everything.

Dependencies: voicecraft.boundary.aws.cognito_client, voicecraft.core
System role: Identity flow orchestration
"""

import logging
from typing import Awaitable, Callable

from voicecraft.boundary.aws.cognito_client import (
    CognitoIdentityClient,
    decode_claims,
    is_token_valid,
)
from voicecraft.core.exceptions import AuthenticationError, ValidationError
from voicecraft.core.session_store import SIGNUP_SUCCESS, SessionStore
from voicecraft.core.upload_validation import EMAIL_PATTERN, validate_sign_up
from voicecraft.models.identity import TokenSet, UserClaims

logger = logging.getLogger(__name__)

SIGNUP_VERIFIED_MESSAGE = "Account verified! Please sign in."
CODE_RESENT_MESSAGE = "A new code has been sent to your email."


class AuthService:
    """
    Identity flows for one tab.

    ``on_signed_out`` runs whenever the session ends, before the session
    is cleared, so state derived from the old identity (the jobs page
    and its poller) is torn down with it.
    """

    def __init__(
        self,
        identity_client: CognitoIdentityClient,
        session: SessionStore,
        on_signed_out: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.identity_client = identity_client
        self.session = session
        self.on_signed_out = on_signed_out

    async def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        confirm: str,
        terms_accepted: bool,
    ) -> str:
        """
        Register a new account.

        Returns:
            str: Email the confirmation code was sent to

        Raises:
            ValidationError: Form is incomplete or inconsistent
            AuthenticationError: Cognito refused the registration
        """
        email = email.strip()
        validate_sign_up(name, email, password, confirm, terms_accepted)
        await self.identity_client.sign_up(email, password, name.strip())
        return email

    async def confirm(self, email: str, code: str) -> str:
        """Confirm an account with the emailed code and leave a flash message."""
        code = code.strip()
        if not code:
            raise ValidationError(
                "Please enter the 6-digit verification code.", field="code"
            )
        await self.identity_client.confirm_sign_up(email.strip(), code)
        self.session.set(SIGNUP_SUCCESS, SIGNUP_VERIFIED_MESSAGE)
        return SIGNUP_VERIFIED_MESSAGE

    async def resend_code(self, email: str) -> str:
        await self.identity_client.resend_confirmation_code(email.strip())
        return CODE_RESENT_MESSAGE

    async def sign_in(self, email: str, password: str) -> UserClaims:
        """
        Sign in with email and password.

        Raises:
            ValidationError: Malformed email or empty password
            AuthenticationError: Cognito refused the credentials
        """
        email = email.strip()
        errors = {}
        if not EMAIL_PATTERN.match(email):
            errors["email"] = "Please enter a valid email address."
        if not password:
            errors["password"] = "Please enter your password."
        if errors:
            raise ValidationError(" ".join(errors.values()), details={"errors": errors})

        tokens = await self.identity_client.authenticate(email, password)
        return self._establish(tokens)

    async def complete_hosted_login(
        self,
        code: str | None,
        error: str | None = None,
    ) -> UserClaims:
        """
        Finish a hosted UI login from the callback query parameters.

        Raises:
            AuthenticationError: The hosted UI reported an error, no code was
                given, or the token exchange failed
        """
        if error:
            raise AuthenticationError(f"Cognito returned an error: {error}", code=error)
        if not code:
            raise AuthenticationError("Missing authorization code.", code="MissingCode")

        tokens = await self.identity_client.exchange_authorization_code(code)
        return self._establish(tokens)

    async def restore_session(self) -> UserClaims | None:
        """
        Return the signed-in user, refreshing an expired ID token when a
        refresh token is cached.

        A refresh the provider rejects ends the session.
        """
        token = self.session.id_token
        if not token:
            return None
        try:
            claims = decode_claims(token)
        except AuthenticationError:
            logger.warning("Cached identity token unreadable, ignoring")
            return None
        if is_token_valid(claims):
            return claims

        refresh_token = self.session.refresh_token
        if not refresh_token:
            return None
        try:
            tokens = await self.identity_client.refresh_session(refresh_token)
        except AuthenticationError as e:
            logger.info("Session refresh refused, signing out", extra={"code": e.code})
            await self._end_session()
            return None
        return self._establish(tokens)

    async def sign_out(self) -> None:
        """Revoke tokens where possible and clear all tab state."""
        access_token = self.session.access_token
        if access_token:
            try:
                await self.identity_client.sign_out(access_token)
            except AuthenticationError as e:
                logger.warning("Global sign-out failed", extra={"code": e.code})
        await self._end_session()
        logger.info("Signed out, session cleared")

    async def _end_session(self) -> None:
        if self.on_signed_out is not None:
            await self.on_signed_out()
        self.session.clear()

    def _establish(self, tokens: TokenSet) -> UserClaims:
        claims = decode_claims(tokens.id_token)
        self.session.store_identity(claims, tokens)
        logger.info("User signed in", extra={"user_id": claims.sub})
        return claims
