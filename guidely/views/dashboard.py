"""Role-based dashboard dispatch and the text rendering of each dashboard.

`select_dashboard` is the pure mapping (session -> view). The stats helpers
are pure functions of API data so they can be tested without a backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Sequence, Tuple, assert_never

from guidely.api.client import ApiClient
from guidely.auth.models import Role, User
from guidely.auth.session import Session
from guidely.core.models import Booking, BookingStatus, Tour

LOGIN_PROMPT_TITLE = "Please log in to access your dashboard"
LOGIN_PROMPT_HINT = "You need to be logged in to view this page."


class DashboardView(str, Enum):
    ADMIN = "admin"
    GUIDE = "guide"
    TOURIST = "tourist"
    LOGIN_PROMPT = "login_prompt"


def select_dashboard(session: Session) -> DashboardView:
    user = session.user
    if not session.is_authenticated or user is None:
        return DashboardView.LOGIN_PROMPT

    role = user.role
    if role is Role.ADMIN:
        return DashboardView.ADMIN
    elif role is Role.GUIDE:
        return DashboardView.GUIDE
    elif role is Role.TOURIST:
        return DashboardView.TOURIST
    else:
        assert_never(role)


@dataclass(frozen=True)
class GuideStats:
    total_bookings: int
    pending_bookings: int
    total_revenue: float
    revenue_this_month: float
    rating: str
    active_tours: int

    @classmethod
    def from_data(cls, listings: Sequence[Tour], bookings: Sequence[Booking], today: date) -> "GuideStats":
        completed = [b for b in bookings if b.status == BookingStatus.COMPLETED]
        this_month = [
            b
            for b in completed
            if b.created is not None and (b.created.year, b.created.month) == (today.year, today.month)
        ]
        if listings:
            rating = f"{sum(t.avg_rating or 0 for t in listings) / len(listings):.1f}"
        else:
            rating = "0.0"
        return cls(
            total_bookings=len(bookings),
            pending_bookings=sum(1 for b in bookings if b.status == BookingStatus.PENDING),
            total_revenue=sum(b.total_price for b in completed),
            revenue_this_month=sum(b.total_price for b in this_month),
            rating=rating,
            active_tours=sum(1 for t in listings if t.is_active),
        )


@dataclass(frozen=True)
class AdminStats:
    total_guides: int
    total_tours: int
    active_tours: int
    verified_guides: int

    @classmethod
    def from_data(cls, guides: Sequence[User], tours: Sequence[Tour]) -> "AdminStats":
        return cls(
            total_guides=len(guides),
            total_tours=len(tours),
            active_tours=sum(1 for t in tours if t.is_active),
            verified_guides=sum(1 for g in guides if g.verified),
        )


def split_tourist_bookings(bookings: Sequence[Booking], today: date) -> Tuple[List[Booking], List[Booking]]:
    """Return (upcoming, past) bookings as shown on the tourist dashboard."""
    upcoming: List[Booking] = []
    past: List[Booking] = []
    for b in bookings:
        when = b.requested_at
        day = when.date() if when is not None else None
        if b.status in (BookingStatus.CONFIRMED, BookingStatus.PENDING) and day is not None and day >= today:
            upcoming.append(b)
        elif b.status == BookingStatus.COMPLETED or (day is not None and day < today):
            past.append(b)
    return upcoming, past


def _money(v: float) -> str:
    return f"${v:,.0f}" if float(v).is_integer() else f"${v:,.2f}"


def _booking_line(b: Booking) -> str:
    day = b.requested_date[:10] if b.requested_date else "no date"
    return f"- `{b.id}` {day} {b.status.value} {_money(b.total_price)}"


def _render_login_prompt() -> List[str]:
    return [f"# {LOGIN_PROMPT_TITLE}", "", LOGIN_PROMPT_HINT, "", "Log in with: `guidely --login EMAIL`"]


def _render_guide(session: Session, api: ApiClient, today: date) -> List[str]:
    user = session.user
    assert user is not None
    listings = api.guide_listings(user.id)
    bookings = api.user_bookings(user.id)
    stats = GuideStats.from_data(listings, bookings, today)

    lines = [f"# Welcome back, {user.first_name() or 'Guide'}!", "", "Manage your tours, bookings, and earnings.", ""]
    lines.append(f"**Total Bookings:** {stats.total_bookings}")
    lines.append(f"**Pending:** {stats.pending_bookings}")
    lines.append(f"**Total Revenue:** {_money(stats.total_revenue)} ({_money(stats.revenue_this_month)} this month)")
    lines.append(f"**Rating:** {stats.rating}")
    lines.append("")
    lines.append(f"## My Listings ({len(listings)}, {stats.active_tours} active)")
    for t in listings:
        state = "active" if t.is_active else "inactive"
        lines.append(f"- `{t.id}` {t.title or 'Untitled'} ({t.city or 'unknown city'}) {_money(t.tour_fee)} [{state}]")
    pending = [b for b in bookings if b.status == BookingStatus.PENDING]
    lines.append("")
    lines.append(f"## Booking Requests ({len(pending)} pending)")
    for b in pending:
        lines.append(_booking_line(b))
    return lines


def _render_tourist(session: Session, api: ApiClient, today: date) -> List[str]:
    user = session.user
    assert user is not None
    upcoming, past = split_tourist_bookings(api.user_bookings(user.id), today)

    lines = [f"# Welcome, {user.first_name() or 'Traveler'}!", ""]
    lines.append(f"## Upcoming ({len(upcoming)})")
    lines.extend(_booking_line(b) for b in upcoming)
    if not upcoming:
        lines.append("No upcoming tours. Explore and book your next adventure.")
    lines.append("")
    lines.append(f"## Past ({len(past)})")
    lines.extend(_booking_line(b) for b in past)
    return lines


def _render_admin(api: ApiClient) -> List[str]:
    tours = api.list_listings()
    stats = AdminStats.from_data(api.list_guides(), tours)
    return [
        "# Admin Dashboard",
        "",
        f"**Guides:** {stats.total_guides} ({stats.verified_guides} verified)",
        f"**Tours:** {stats.total_tours} ({stats.active_tours} active)",
    ]


def render_dashboard(session: Session, api: ApiClient, today: date) -> str:
    view = select_dashboard(session)
    if view is DashboardView.LOGIN_PROMPT:
        lines = _render_login_prompt()
    elif view is DashboardView.ADMIN:
        lines = _render_admin(api)
    elif view is DashboardView.GUIDE:
        lines = _render_guide(session, api, today)
    elif view is DashboardView.TOURIST:
        lines = _render_tourist(session, api, today)
    else:
        assert_never(view)
    return "\n".join(lines) + "\n"
