"""
Helper Utility Module

This module provides various helper functions used throughout the Post Remixer application.
"""

from typing import Optional
from urllib.parse import quote

from config import settings


def truncate_text(text: str, max_length: int = 100, add_ellipsis: bool = True) -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: The text to truncate
        max_length: Maximum length
        add_ellipsis: Whether to add an ellipsis if text is truncated

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length].rstrip()
    if add_ellipsis:
        truncated += "..."

    return truncated


def to_share_text(content: str) -> str:
    """
    Replace segment delimiters with paragraph breaks.

    Args:
        content: Post content with segments joined by the delimiter

    Returns:
        str: Text ready to share, one paragraph per segment
    """
    segments = [part.strip() for part in content.split(settings.SEGMENT_DELIMITER)]
    return settings.SHARE_PARAGRAPH_BREAK.join(segments)


def build_share_url(content: str, base_url: Optional[str] = None) -> str:
    """
    Build a platform share-intent link for a post.

    Args:
        content: Post content with segments joined by the delimiter
        base_url: Share-intent URL prefix, defaults to settings.SHARE_INTENT_URL

    Returns:
        str: The share link with the URL-encoded text appended
    """
    return (base_url or settings.SHARE_INTENT_URL) + quote(to_share_text(content), safe="")


def format_remaining(remaining: int) -> str:
    """Format a remaining-character count for display; negatives are shown as-is."""
    return f"{remaining} characters remaining"
