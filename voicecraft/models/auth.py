"""
Auth request/response schemas.

Dependencies: pydantic
System role: Identity API contracts
"""

from pydantic import BaseModel, Field

from voicecraft.models.identity import UserClaims


class SignUpRequest(BaseModel):
    """Registration form."""

    name: str = ""
    email: str = ""
    password: str = ""
    password_confirm: str = ""
    terms: bool = False


class ConfirmRequest(BaseModel):
    """Email verification form."""

    email: str
    code: str = ""


class ResendCodeRequest(BaseModel):
    email: str


class SignInRequest(BaseModel):
    """Login form."""

    email: str = ""
    password: str = ""


class MessageResponse(BaseModel):
    message: str


class SignUpResponse(BaseModel):
    email: str = Field(description="Address the verification code was sent to")
    message: str


class SessionResponse(BaseModel):
    """The signed-in user as shown in the header."""

    user_id: str
    email: str
    display_name: str
    greeting: str
    flash: str | None = None

    @classmethod
    def from_claims(cls, claims: UserClaims, flash: str | None = None) -> "SessionResponse":
        name = claims.display_name
        return cls(
            user_id=claims.sub,
            email=claims.email,
            display_name=name,
            greeting=f"Welcome, {name[:1].upper()}{name[1:]}",
            flash=flash,
        )


class SignOutResponse(BaseModel):
    message: str
    logout_url: str
