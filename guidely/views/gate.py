from __future__ import annotations

from typing import Callable, TypeVar

from guidely.auth.session import Session

T = TypeVar("T")

LOADING_TEXT = "Loading..."


def auth_gate(session: Session, render_app: Callable[[], T], render_loading: Callable[[], T]) -> T:
    """Render the loading indicator until the Session has been restored, then the app."""
    if not session.restoration_complete:
        return render_loading()
    return render_app()
