from __future__ import annotations

from urllib.parse import unquote, urlsplit


def sanitize_callback_path(path: str | None) -> str:
    """
    Reduce a post-sign-in callback to a path inside the app, or `/`.

    The value is percent-decoded before it is judged, so `%2F%2Fevil.com` is
    caught the same way as `//evil.com`. Anything carrying a scheme
    (`https:`, `javascript:`) or a host falls back to `/`.
    """
    raw = "".join(ch for ch in (path or "") if ch.isprintable()).strip()
    decoded = unquote(raw)
    if not decoded.startswith("/"):
        return "/"
    # Browsers treat `\` like `/`, so `/\evil.com` is scheme-relative too.
    parts = urlsplit(decoded.replace("\\", "/"))
    if parts.scheme or parts.netloc or decoded.replace("\\", "/").startswith("//"):
        return "/"
    return raw
