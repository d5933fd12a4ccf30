"""
Auth operations: login, register, Google login, logout.

Each network operation is one request to the auth API followed by a commit
to the Session, or a raised AuthError. No retries; the caller decides what
to show the user.

The blocking HTTP call runs in a worker thread. If the awaiting task is
cancelled, the response is discarded and the Session is left untouched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple, Type

import requests
from pydantic import ValidationError

from guidely.auth.config import ClientConfig
from guidely.auth.errors import AuthError, InvalidCredentials, NetworkFailure, RegistrationFailed
from guidely.auth.models import AuthResult, Role, User
from guidely.auth.session import Session

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"


def post_json(cfg: ClientConfig, path: str, payload: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
    """
    POST a JSON body and return (status_code, parsed body).

    A body that is not a JSON object is returned as {}. Transport errors raise NetworkFailure.
    """
    url = cfg.url(path)
    try:
        r = requests.post(url, json=payload, timeout=cfg.request_timeout_seconds)
    except requests.RequestException as e:
        logger.warning("Request to %s failed: %s", url, e)
        raise NetworkFailure("Could not reach the server. Check your connection and try again.") from e
    try:
        body = r.json()
    except ValueError:
        body = None
    return r.status_code, body if isinstance(body, dict) else {}


def server_message(body: Dict[str, Any]) -> Optional[str]:
    """Error message the backend put in the body (`message`, else `error`)."""
    for key in ("message", "error"):
        msg = body.get(key)
        if isinstance(msg, str) and msg.strip():
            return msg
    return None


def parse_auth_result(body: Dict[str, Any]) -> Optional[AuthResult]:
    """Extract `data.user` / `data.token`; None if either is missing or malformed."""
    data = body.get("data")
    if not isinstance(data, dict):
        return None
    token = data.get("token")
    raw_user = data.get("user")
    if not isinstance(token, str) or not token or not isinstance(raw_user, dict):
        return None
    try:
        user = User.model_validate(raw_user)
    except ValidationError:
        return None
    return AuthResult(user=user, token=token)


class AuthClient:
    """Auth operations bound to one Session."""

    def __init__(self, session: Session, cfg: ClientConfig):
        self.session = session
        self.cfg = cfg

    async def _request_identity(
        self,
        path: str,
        payload: Dict[str, Any],
        *,
        ok_statuses: Tuple[int, ...],
        error_cls: Type[AuthError],
        fallback_message: str,
    ) -> AuthResult:
        status, body = await asyncio.to_thread(post_json, self.cfg, path, payload)
        if status not in ok_statuses:
            logger.info("%s rejected (status=%s)", path, status)
            raise error_cls(server_message(body) or fallback_message, status_code=status)
        result = parse_auth_result(body)
        if result is None:
            logger.warning("%s returned status=%s without user/token", path, status)
            raise error_cls(fallback_message, status_code=status)
        return result

    async def login(self, email: str, password: str) -> User:
        result = await self._request_identity(
            LOGIN_PATH,
            {"email": email, "password": password},
            ok_statuses=(200,),
            error_cls=InvalidCredentials,
            fallback_message="Login failed",
        )
        self.session.commit(result.user, result.token)
        return result.user

    async def register(self, name: str, email: str, password: str, role: Role) -> User:
        role = Role(role)
        result = await self._request_identity(
            REGISTER_PATH,
            {"name": name, "email": email, "password": password, "role": role.value},
            ok_statuses=(200, 201),
            error_cls=RegistrationFailed,
            fallback_message="Registration failed",
        )
        self.session.commit(result.user, result.token)
        return result.user

    def login_with_google(self, user: User, credential: str) -> None:
        """Commit an identity already verified by the backend's Google endpoint."""
        self.session.commit(user, credential)

    async def sign_in_with_google(self, id_token: str) -> User:
        """Exchange a Google ID token with the backend, then `login_with_google`."""
        from guidely.auth.google import exchange_google_id_token

        result = await asyncio.to_thread(exchange_google_id_token, self.cfg, id_token)
        self.login_with_google(result.user, result.token)
        return result.user

    def logout(self) -> None:
        # Local only: the backend is not told, the token stays valid until it expires.
        self.session.clear()
