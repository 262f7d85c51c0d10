from __future__ import annotations
from typing import Any, Mapping


class SiteNotConfigured(RuntimeError):
    """Raised when the canonical site URL is missing."""


class Config:
    # Canonical base URL, e.g. "https://example.com/"
    SITE_URL = None

    # Relative paths resolve against the working directory
    CONTENT_DIR = "content"
    BLOG_COLLECTION = "blog"

    FEED_PATH = "/rss.xml"
    FEED_TITLE = "Fernando Penna — Blog"
    FEED_DESCRIPTION = "Articles about software engineering, web development, and technology."


def site_url(config: Mapping[str, Any]) -> str:
    """
    Canonical site URL with a trailing slash, so "<site>blog/<id>/" joins cleanly.
    """
    site = config.get("SITE_URL")
    if site is None or not str(site).strip():
        raise SiteNotConfigured("SITE_URL is not set; cannot build absolute feed links")
    site = str(site).strip()
    if not site.endswith("/"):
        site += "/"
    return site
