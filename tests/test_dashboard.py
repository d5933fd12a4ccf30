from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from guidely.auth.models import Role, User
from guidely.auth.session import Session
from guidely.core.models import Booking, Tour
from guidely.views.dashboard import (
    LOGIN_PROMPT_TITLE,
    AdminStats,
    DashboardView,
    GuideStats,
    render_dashboard,
    select_dashboard,
    split_tourist_bookings,
)

TODAY = date(2026, 10, 19)


def _signed_in(session: Session, role) -> Session:
    session.commit(User.model_validate({"id": "u1", "name": "Ana Silva", "role": role}), "abc")
    return session


@pytest.mark.parametrize(
    "role,expected",
    [
        ("ADMIN", DashboardView.ADMIN),
        ("GUIDE", DashboardView.GUIDE),
        ("TOURIST", DashboardView.TOURIST),
        ("guide", DashboardView.GUIDE),
        ("MODERATOR", DashboardView.TOURIST),
        ("", DashboardView.TOURIST),
        (None, DashboardView.TOURIST),
    ],
)
def test_role_dispatch(session: Session, role, expected) -> None:
    assert select_dashboard(_signed_in(session, role)) is expected


def test_no_session_gets_login_prompt(session: Session) -> None:
    assert select_dashboard(session) is DashboardView.LOGIN_PROMPT


def test_every_role_has_a_view(session: Session) -> None:
    views = {select_dashboard(_signed_in(session, r)) for r in Role}
    assert views == {DashboardView.ADMIN, DashboardView.GUIDE, DashboardView.TOURIST}


def _booking(i: int, status: str, price: float = 100, requested: str = "2026-11-01", created: str = "2026-10-02T10:00:00Z"):
    return Booking.model_validate(
        {"id": f"b{i}", "status": status, "totalPrice": price, "requestedDate": requested, "createdAt": created}
    )


def test_guide_stats() -> None:
    listings = [
        Tour.model_validate({"id": "t1", "title": "Old Town Walk", "isActive": True, "avgRating": 4.5}),
        Tour.model_validate({"id": "t2", "title": "Food Tour", "isActive": False, "avgRating": 4.0}),
        Tour.model_validate({"id": "t3", "title": "New", "isActive": True}),
    ]
    bookings = [
        _booking(1, "PENDING"),
        _booking(2, "PENDING"),
        _booking(3, "COMPLETED", 200, created="2026-10-05T09:00:00Z"),
        _booking(4, "COMPLETED", 150, created="2026-09-28T09:00:00Z"),
        _booking(5, "COMPLETED", 80, created="2025-10-10T09:00:00Z"),
        _booking(6, "CANCELLED", 999),
    ]
    stats = GuideStats.from_data(listings, bookings, TODAY)
    assert stats.total_bookings == 6
    assert stats.pending_bookings == 2
    assert stats.total_revenue == 430
    # Same month of a different year does not count.
    assert stats.revenue_this_month == 200
    assert stats.rating == "2.8"
    assert stats.active_tours == 2


def test_guide_stats_without_listings() -> None:
    stats = GuideStats.from_data([], [], TODAY)
    assert stats.rating == "0.0"
    assert stats.total_revenue == 0


def test_split_tourist_bookings() -> None:
    bookings = [
        _booking(1, "CONFIRMED", requested="2026-10-19"),
        _booking(2, "PENDING", requested="2026-12-01T09:00:00Z"),
        _booking(3, "PENDING", requested="2026-10-01"),
        _booking(4, "COMPLETED", requested="2026-11-05"),
        _booking(5, "CANCELLED", requested="2026-11-05"),
        _booking(6, "CANCELLED", requested="2026-01-05"),
    ]
    upcoming, past = split_tourist_bookings(bookings, TODAY)
    assert [b.id for b in upcoming] == ["b1", "b2"]
    assert [b.id for b in past] == ["b3", "b4", "b6"]


def test_admin_stats() -> None:
    guides = [User.model_validate({"id": "g1", "role": "GUIDE", "verified": True}), User.model_validate({"id": "g2"})]
    tours = [Tour.model_validate({"id": "t1", "isActive": True}), Tour.model_validate({"id": "t2"})]
    stats = AdminStats.from_data(guides, tours)
    assert stats == AdminStats(total_guides=2, total_tours=2, active_tours=1, verified_guides=1)


def test_render_login_prompt_does_not_call_api(session: Session) -> None:
    api = MagicMock()
    out = render_dashboard(session, api, TODAY)
    assert LOGIN_PROMPT_TITLE in out
    assert api.method_calls == []


def test_render_guide_dashboard(session: Session) -> None:
    _signed_in(session, "GUIDE")
    api = MagicMock()
    api.guide_listings.return_value = [
        Tour.model_validate({"id": "t1", "title": "Old Town Walk", "city": "Lisbon", "tourFee": 45, "isActive": True})
    ]
    api.user_bookings.return_value = [_booking(1, "PENDING", 90)]

    out = render_dashboard(session, api, TODAY)
    api.guide_listings.assert_called_once_with("u1")
    api.user_bookings.assert_called_once_with("u1")
    assert "# Welcome back, Ana!" in out
    assert "**Pending:** 1" in out
    assert "Old Town Walk (Lisbon) $45 [active]" in out
    assert "`b1` 2026-11-01 PENDING $90" in out


def test_render_tourist_dashboard(session: Session) -> None:
    _signed_in(session, "TOURIST")
    api = MagicMock()
    api.user_bookings.return_value = [_booking(1, "COMPLETED", requested="2026-03-01")]

    out = render_dashboard(session, api, TODAY)
    assert "## Upcoming (0)" in out
    assert "No upcoming tours" in out
    assert "## Past (1)" in out
    api.guide_listings.assert_not_called()


def test_render_admin_dashboard(session: Session) -> None:
    _signed_in(session, "ADMIN")
    api = MagicMock()
    api.list_listings.return_value = [Tour.model_validate({"id": "t1", "isActive": True})]
    api.list_guides.return_value = [User.model_validate({"id": "g1", "role": "GUIDE", "verified": True})]

    out = render_dashboard(session, api, TODAY)
    assert "# Admin Dashboard" in out
    assert "**Tours:** 1 (1 active)" in out
    assert "**Guides:** 1 (1 verified)" in out
