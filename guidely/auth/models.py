from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Closed set of user roles. Controls which dashboard is shown."""

    TOURIST = "TOURIST"
    GUIDE = "GUIDE"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Unknown or missing roles fall back to TOURIST."""
        if isinstance(value, Role):
            return value
        raw = str(value or "").strip().upper()
        try:
            return cls(raw)
        except ValueError:
            return cls.TOURIST


class User(BaseModel):
    """User record as returned by the auth API (camelCase on the wire)."""

    # Keep unknown profile fields so a stored record round-trips unchanged.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Role = Role.TOURIST

    image: Optional[str] = None
    profile_pic: Optional[str] = Field(default=None, alias="profilePic")
    bio: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    expertise: Optional[List[str]] = None
    daily_rate: Optional[float] = Field(default=None, alias="dailyRate")
    travel_preferences: Optional[str] = Field(default=None, alias="travelPreferences")

    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    # Guide records only.
    verified: Optional[bool] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> str:
        # Some backends emit numeric ids.
        if v is None or str(v).strip() == "":
            raise ValueError("user id is required")
        return str(v)

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, v: Any) -> Role:
        return Role.parse(v)

    @field_validator("languages", mode="before")
    @classmethod
    def _languages_default(cls, v: Any) -> List[str]:
        return list(v or [])

    def first_name(self) -> Optional[str]:
        parts = (self.name or "").split()
        return parts[0] if parts else None

    def to_json(self) -> str:
        # Nulls are kept: a restored record must equal the one that was stored.
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class AuthResult:
    """Identity and bearer credential issued by the auth API."""

    user: User
    token: str
