"""Auth errors surfaced to callers (CLI handlers, UI forms)."""

from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """Base error for auth operations. `message` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Login rejected by the auth API."""


class RegistrationFailed(AuthError):
    """Registration rejected (duplicate email, validation failure, ...)."""


class NetworkFailure(AuthError):
    """The request could not complete (offline, timeout, unreadable response)."""


class GoogleSignInFailed(AuthError):
    """The backend refused the Google ID token or returned an unusable identity."""
