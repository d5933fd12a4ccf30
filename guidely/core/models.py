"""Marketplace records returned by the REST backend (listings and bookings).

Payloads are permissive (`extra="allow"`): the backend adds computed fields
(ratings, review counts, nested guide/tourist records) that vary by endpoint.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field


class BaseModelAllowExtra(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO timestamp -> aware datetime (naive values are taken as UTC). None if unparseable."""
    if not value:
        return None
    try:
        dt = date_parser.isoparse(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class Tour(BaseModelAllowExtra):
    """A listing ("tour" in the UI)."""

    id: str
    guide_id: Optional[str] = Field(default=None, alias="guideId")
    title: str = ""
    description: str = ""
    itinerary: List[str] = Field(default_factory=list)
    tour_fee: float = Field(default=0.0, alias="tourFee")
    duration_days: Optional[int] = Field(default=None, alias="durationDays")
    meeting_point: Optional[str] = Field(default=None, alias="meetingPoint")
    max_group_size: Optional[int] = Field(default=None, alias="maxGroupSize")
    city: str = ""
    country: Optional[str] = None
    language: Optional[str] = None
    category: Optional[str] = None
    images: List[str] = Field(default_factory=list)

    is_active: bool = Field(default=False, alias="isActive")
    avg_rating: Optional[float] = Field(default=None, alias="avgRating")
    featured: bool = False


class Booking(BaseModelAllowExtra):
    id: str
    listing_id: Optional[str] = Field(default=None, alias="listingId")
    tourist_id: Optional[str] = Field(default=None, alias="touristId")
    guide_id: Optional[str] = Field(default=None, alias="guideId")
    requested_date: Optional[str] = Field(default=None, alias="requestedDate")
    status: BookingStatus = BookingStatus.PENDING
    total_price: float = Field(default=0.0, alias="totalPrice")
    group_size: Optional[int] = Field(default=None, alias="groupSize")
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    @property
    def requested_at(self) -> Optional[datetime]:
        return parse_timestamp(self.requested_date)

    @property
    def created(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)
