"""REST client for marketplace data, authorized with the Session's bearer credential."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from guidely.auth.client import server_message
from guidely.auth.config import ClientConfig
from guidely.auth.errors import NetworkFailure
from guidely.auth.models import User
from guidely.auth.session import Session
from guidely.core.models import Booking, Tour

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the REST backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiClient:
    def __init__(self, cfg: ClientConfig, session: Session):
        self.cfg = cfg
        self.session = session

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.session.credential:
            headers["Authorization"] = f"Bearer {self.session.credential}"
        return headers

    def _request(self, method: str, path: str) -> Any:
        url = self.cfg.url(path)
        try:
            r = requests.request(method, url, headers=self._headers(), timeout=self.cfg.request_timeout_seconds)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkFailure("Could not reach the server. Check your connection and try again.") from e

        try:
            body = r.json()
        except ValueError:
            body = None
        if r.status_code >= 400:
            msg = server_message(body) if isinstance(body, dict) else None
            raise ApiError(msg or f"{method} {path} failed (status={r.status_code})", status_code=r.status_code)
        # Responses use a `{ data: ... }` envelope.
        if isinstance(body, dict):
            return body.get("data")
        return None

    def _list(self, path: str) -> List[Dict[str, Any]]:
        data = self._request("GET", path)
        if not isinstance(data, list):
            return []
        return [x for x in data if isinstance(x, dict)]

    def list_listings(self) -> List[Tour]:
        return [Tour.model_validate(x) for x in self._list("/api/listings")]

    def list_guides(self) -> List[User]:
        return [User.model_validate(x) for x in self._list("/api/guides")]

    def guide_listings(self, guide_id: str) -> List[Tour]:
        return [Tour.model_validate(x) for x in self._list(f"/api/listings/guide/{guide_id}")]

    def user_bookings(self, user_id: str) -> List[Booking]:
        return [Booking.model_validate(x) for x in self._list(f"/api/bookings/{user_id}")]

    def toggle_listing(self, listing_id: str) -> None:
        """Flip a listing's active flag (guide-owned listings only)."""
        self._request("PATCH", f"/api/listings/{listing_id}/toggle")
