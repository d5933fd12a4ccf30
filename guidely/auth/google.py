from __future__ import annotations

import logging

from guidely.auth.client import parse_auth_result, post_json, server_message
from guidely.auth.config import ClientConfig
from guidely.auth.errors import GoogleSignInFailed
from guidely.auth.models import AuthResult

logger = logging.getLogger(__name__)

GOOGLE_PATH = "/api/auth/google"


def exchange_google_id_token(cfg: ClientConfig, id_token: str) -> AuthResult:
    """
    Send a Google ID token (from Google Identity Services) to the backend for verification.

    The backend validates the token with Google and answers with our own
    user record + bearer token. Nothing is committed here.
    """
    id_token = (id_token or "").strip()
    if not id_token:
        raise GoogleSignInFailed("Google login failed: no token received.")

    # Prefix only; never log the full token.
    logger.debug("Exchanging Google ID token %s...", id_token[:12])
    status, body = post_json(cfg, GOOGLE_PATH, {"id_token": id_token})
    if status < 200 or status >= 300:
        raise GoogleSignInFailed(server_message(body) or "Google sign-in failed.", status_code=status)

    result = parse_auth_result(body)
    if result is None:
        raise GoogleSignInFailed("Invalid Google response.", status_code=status)
    return result
