"""
Tab-scoped session storage.

Key/value state that lives as long as one front-end tab: identity
claims, tokens and the in-flight job reference. Everything is cleared on
sign-out. Only the jobs page context writes the current job keys.

Dependencies: pydantic (for the job metadata snapshot)
System role: Client-side session state
"""

import json
import logging

from voicecraft.models.identity import TokenSet, UserClaims
from voicecraft.models.job import JobMeta

logger = logging.getLogger(__name__)

CURRENT_JOB_ID = "currentJobId"
CURRENT_JOB_META = "currentJobMeta"
USER_ID = "userId"
USER_EMAIL = "userEmail"
USER_NAME = "userName"
ID_TOKEN = "id_token"
ACCESS_TOKEN = "access_token"
REFRESH_TOKEN = "refresh_token"
SIGNUP_SUCCESS = "signupSuccess"


class SessionStore:
    """In-memory string store with typed accessors for known keys."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._items

    # Current job

    @property
    def current_job_id(self) -> str | None:
        return self.get(CURRENT_JOB_ID)

    def current_job_meta(self) -> JobMeta:
        """Return the stored job metadata snapshot, empty if absent or unreadable."""
        raw = self.get(CURRENT_JOB_META)
        if not raw:
            return JobMeta()
        try:
            return JobMeta.model_validate(json.loads(raw))
        except ValueError:
            logger.warning("Discarding unreadable current job metadata")
            return JobMeta()

    def set_current_job(self, job_id: str, meta: JobMeta) -> None:
        self.set(CURRENT_JOB_ID, job_id)
        self.set(CURRENT_JOB_META, meta.model_dump_json())

    def clear_current_job(self) -> bool:
        """
        Forget the current job.

        Returns:
            bool: True if a job reference was actually removed
        """
        had_job = CURRENT_JOB_ID in self
        self.remove(CURRENT_JOB_ID)
        self.remove(CURRENT_JOB_META)
        return had_job

    # Identity

    @property
    def user_id(self) -> str | None:
        return self.get(USER_ID)

    @property
    def id_token(self) -> str | None:
        return self.get(ID_TOKEN)

    @property
    def access_token(self) -> str | None:
        return self.get(ACCESS_TOKEN)

    @property
    def refresh_token(self) -> str | None:
        return self.get(REFRESH_TOKEN)

    @property
    def user_name(self) -> str | None:
        return self.get(USER_NAME)

    @property
    def user_email(self) -> str | None:
        return self.get(USER_EMAIL)

    def store_identity(self, claims: UserClaims, tokens: TokenSet) -> None:
        """Cache claims and tokens after a successful sign-in."""
        self.set(USER_ID, claims.sub)
        self.set(USER_EMAIL, claims.email)
        self.set(USER_NAME, claims.display_name)
        self.set(ID_TOKEN, tokens.id_token)
        if tokens.access_token:
            self.set(ACCESS_TOKEN, tokens.access_token)
        if tokens.refresh_token:
            self.set(REFRESH_TOKEN, tokens.refresh_token)

    def pop_flash(self) -> str | None:
        """Return and remove the one-shot message left by sign-up confirmation."""
        message = self.get(SIGNUP_SUCCESS)
        self.remove(SIGNUP_SUCCESS)
        return message
