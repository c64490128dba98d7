"""Custom Jinja2 filters for page templates."""

from __future__ import annotations


def twitter_url(handle: str, base_url: str = "https://twitter.com") -> str:
    """Build the profile link for a twitter handle.

    Args:
        handle: Handle with or without the leading ``@``
        base_url: Profile host, with or without a trailing slash

    Returns:
        ``<base_url>/<handle>``

    """
    return f"{base_url.rstrip('/')}/{handle.strip().lstrip('@')}"


def display_handle(handle: str) -> str:
    """Format a handle for display, always prefixed with ``@``."""
    return "@" + handle.strip().lstrip("@")
