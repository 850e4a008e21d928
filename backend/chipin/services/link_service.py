"""
Share link helpers: the token travels in the URL fragment.
"""
from typing import Dict, Optional
from urllib.parse import urlparse

from chipin.core.config import settings


def build_share_links(token: str, base_url: Optional[str] = None) -> Dict[str, str]:
    """Build the share page and receipt page URLs for a token."""
    base = (base_url if base_url is not None else settings.PUBLIC_BASE_URL).rstrip("/")
    return {
        "share_url": f"{base}/{settings.SHARE_PAGE}#{token}",
        "receipt_url": f"{base}/{settings.RECEIPT_PAGE}#{token}",
    }


def extract_token(link: str) -> str:
    """
    Extract the token from a share link.

    Accepts a full URL, a bare fragment ("#abc") or the token itself.
    """
    link = (link or "").strip()
    if link.startswith("#"):
        return link[1:]
    if "#" in link:
        return urlparse(link).fragment
    return link
