"""Tour browsing: search, category and price filters, and sort orders."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from guidely.core.models import Tour


class TourSort(str, Enum):
    RECOMMENDED = "recommended"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"


def filter_tours(
    tours: Sequence[Tour],
    query: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    sort_by: TourSort = TourSort.RECOMMENDED,
) -> List[Tour]:
    """
    Filter and order tours the way the explore page does.

    - `query` matches title, city or description (case-insensitive substring)
    - `category` must match exactly
    - price bounds are inclusive; None means unbounded
    - `recommended` puts featured tours first and otherwise keeps API order
    """
    out = list(tours)

    q = (query or "").strip().lower()
    if q:
        out = [t for t in out if q in t.title.lower() or q in t.city.lower() or q in t.description.lower()]

    if category:
        out = [t for t in out if t.category == category]

    if min_price is not None:
        out = [t for t in out if t.tour_fee >= min_price]
    if max_price is not None:
        out = [t for t in out if t.tour_fee <= max_price]

    sort_by = TourSort(sort_by)
    if sort_by is TourSort.PRICE_LOW:
        out.sort(key=lambda t: t.tour_fee)
    elif sort_by is TourSort.PRICE_HIGH:
        out.sort(key=lambda t: t.tour_fee, reverse=True)
    elif sort_by is TourSort.RATING:
        out.sort(key=lambda t: t.avg_rating or 0, reverse=True)
    else:
        out.sort(key=lambda t: not t.featured)
    return out


def render_explore(tours: Sequence[Tour]) -> str:
    lines = [f"# Explore Tours ({len(tours)} found)", ""]
    if not tours:
        lines.append("No tours match your filters. Try clearing some of them.")
    for t in tours:
        rating = f"{t.avg_rating:.1f}" if t.avg_rating is not None else "new"
        star = " *featured*" if t.featured else ""
        category = f" [{t.category}]" if t.category else ""
        lines.append(f"- `{t.id}` {t.title or 'Untitled'} ({t.city or 'unknown city'}){category} ${t.tour_fee:,.0f} rating {rating}{star}")
    return "\n".join(lines) + "\n"
