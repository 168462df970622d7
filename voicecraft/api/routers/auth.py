"""
Auth API endpoints.

Routes:
- POST /auth/sign-up - Register and send a verification code
- POST /auth/confirm - Verify the emailed code
- POST /auth/resend-code - Send a fresh code
- POST /auth/sign-in - Password sign-in
- GET /auth/login-url - Hosted UI authorize URL
- GET /auth/callback - Hosted UI redirect target
- GET /auth/session - Current user
- POST /auth/sign-out - Clear the session

Dependencies: voicecraft.application.services.auth_service
System role: Identity HTTP API
"""

from fastapi import APIRouter, Depends, Query

from voicecraft.api.deps import (
    get_auth_service,
    get_identity_client,
    get_session_store,
    require_user,
)
from voicecraft.application.services.auth_service import AuthService
from voicecraft.boundary.aws.cognito_client import CognitoIdentityClient
from voicecraft.core.session_store import SessionStore
from voicecraft.models.auth import (
    ConfirmRequest,
    MessageResponse,
    ResendCodeRequest,
    SessionResponse,
    SignInRequest,
    SignOutResponse,
    SignUpRequest,
    SignUpResponse,
)
from voicecraft.models.identity import UserClaims

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up", response_model=SignUpResponse)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """Register a new account; Cognito emails a 6-digit code."""
    email = await auth_service.sign_up(
        request.name,
        request.email,
        request.password,
        request.password_confirm,
        request.terms,
    )
    return SignUpResponse(email=email, message=f"We sent a verification code to {email}.")


@router.post("/confirm", response_model=MessageResponse)
async def confirm(
    request: ConfirmRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    message = await auth_service.confirm(request.email, request.code)
    return MessageResponse(message=message)


@router.post("/resend-code", response_model=MessageResponse)
async def resend_code(
    request: ResendCodeRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    message = await auth_service.resend_code(request.email)
    return MessageResponse(message=message)


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Sign in with email and password and cache the identity in the session."""
    claims = await auth_service.sign_in(request.email, request.password)
    return SessionResponse.from_claims(claims)


@router.get("/login-url", response_model=MessageResponse)
async def login_url(
    identity_client: CognitoIdentityClient = Depends(get_identity_client),
) -> MessageResponse:
    return MessageResponse(message=identity_client.build_login_url())


@router.get("/callback", response_model=SessionResponse)
async def callback(
    code: str | None = Query(default=None),
    error: str | None = Query(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """
    Hosted UI redirect target.

    Exchanges ?code= for tokens; ?error= is reported as a 401.
    """
    claims = await auth_service.complete_hosted_login(code, error)
    return SessionResponse.from_claims(claims)


@router.get("/session", response_model=SessionResponse)
async def current_session(
    claims: UserClaims = Depends(require_user),
    session: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    """Current user plus any one-shot message left by sign-up."""
    return SessionResponse.from_claims(claims, flash=session.pop_flash())


@router.post("/sign-out", response_model=SignOutResponse)
async def sign_out(
    auth_service: AuthService = Depends(get_auth_service),
    identity_client: CognitoIdentityClient = Depends(get_identity_client),
) -> SignOutResponse:
    """Stop polling, revoke tokens and clear every cached value."""
    await auth_service.sign_out()
    return SignOutResponse(
        message="You have been signed out successfully.",
        logout_url=identity_client.build_logout_url(),
    )
