from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import jwt  # PyJWT
from pydantic import ValidationError

from guidely.auth.models import User
from guidely.storage.local_store import LocalStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionState(str, Enum):
    UNKNOWN = "unknown"  # before restoration
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class Session:
    """
    Current identity + bearer credential, persisted to durable storage.

    Single source of truth for "who is signed in". Create one per process,
    call `restore()` once at startup, then let the auth operations drive
    `commit()` / `clear()`.
    """

    def __init__(self, storage: LocalStorage):
        self._storage = storage
        self._user: Optional[User] = None
        self._credential: Optional[str] = None
        self._restoration_complete = False

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def credential(self) -> Optional[str]:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def restoration_complete(self) -> bool:
        return self._restoration_complete

    @property
    def state(self) -> SessionState:
        if not self._restoration_complete:
            return SessionState.UNKNOWN
        return SessionState.AUTHENTICATED if self.is_authenticated else SessionState.ANONYMOUS

    def restore(self) -> SessionState:
        """
        Populate the session from storage (once per Session).

        Missing or corrupt data is treated as "no session" and never raises.
        """
        if self._restoration_complete:
            return self.state
        try:
            token = self._storage.get_item(TOKEN_KEY)
            raw_user = self._storage.get_item(USER_KEY)
            if token and raw_user:
                self._user = User.model_validate_json(raw_user)
                self._credential = token
            elif token or raw_user:
                logger.warning("Ignoring partial stored session (token=%s, user=%s)", bool(token), bool(raw_user))
        except (ValidationError, ValueError, OSError) as e:
            logger.warning("Ignoring corrupt stored session: %s", e)
            self._user = None
            self._credential = None
        finally:
            self._restoration_complete = True
        logger.debug("Session restored: %s", self.state.value)
        return self.state

    def commit(self, user: User, credential: str) -> None:
        """Set identity and credential together and persist both in one write."""
        if not credential:
            raise ValueError("credential is required")
        self._storage.set_items({USER_KEY: user.to_json(), TOKEN_KEY: credential})
        self._user = user
        self._credential = credential
        logger.info("Signed in as user id=%s role=%s", user.id, user.role.value)

    def clear(self) -> None:
        """Drop identity and credential from memory and storage."""
        self._storage.remove_items([USER_KEY, TOKEN_KEY])
        self._user = None
        self._credential = None
        logger.info("Signed out")

    def credential_expires_at(self) -> Optional[datetime]:
        """
        Expiry of the bearer credential, if it is a JWT with an `exp` claim.

        The signature is NOT verified; only the backend can do that.
        """
        if not self._credential:
            return None
        try:
            claims = jwt.decode(self._credential, options={"verify_signature": False})
        except jwt.PyJWTError:
            return None
        exp = claims.get("exp") if isinstance(claims, dict) else None
        if not isinstance(exp, (int, float)):
            return None
        return datetime.fromtimestamp(exp, tz=timezone.utc)
