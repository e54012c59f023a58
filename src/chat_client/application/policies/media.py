from __future__ import annotations


def resolve_media_url(url: str | None, base_url: str) -> str | None:
    """Absolute URL for an attachment path returned by the server."""
    if not url:
        return None
    if url.startswith(("http://", "https://")) or not base_url:
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"
