from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from feedgen.feed import FeedGenerator
from flask import Response, current_app
from flask_restful import Resource

from .config import Config, site_url
from .content import Post, get_collection

RSS_MIMETYPE = "application/xml"


@dataclass(frozen=True)
class FeedItem:
    title: str
    pub_date: datetime
    description: str
    link: str


# --- Pipeline --------------------------------------------------------------

def published_posts(posts: Iterable[Post]) -> List[Post]:
    """
    Drop drafts, newest first. The sort is stable, so posts sharing a date
    keep their collection order.
    """
    live = [p for p in posts if not p.data.draft]
    live.sort(key=lambda p: p.data.date, reverse=True)
    return live

def post_link(site: str, post: Post) -> str:
    return f"{site}blog/{post.id}/"

def to_feed_items(posts: Iterable[Post], site: str) -> List[FeedItem]:
    return [
        FeedItem(
            title=p.data.title,
            pub_date=p.data.date,
            description=p.data.description,
            link=post_link(site, p),
        )
        for p in posts
    ]

def render_feed(title: str, description: str, site: str, items: Iterable[FeedItem]) -> bytes:
    fg = FeedGenerator()
    fg.title(title)
    fg.link(href=site, rel="alternate")
    fg.description(description)

    for item in items:
        # feedgen prepends by default; keep the caller's order
        fe = fg.add_entry(order="append")
        fe.title(item.title)
        fe.link(href=item.link)
        fe.guid(item.link, permalink=True)
        fe.description(item.description)
        fe.pubDate(item.pub_date)

    return fg.rss_str(pretty=True)

def build_feed(
    site: str,
    posts: Iterable[Post],
    title: str = Config.FEED_TITLE,
    description: str = Config.FEED_DESCRIPTION,
) -> bytes:
    items = to_feed_items(published_posts(posts), site)
    return render_feed(title, description, site, items)

def content_dir(config: Mapping[str, Any]) -> Path:
    return Path(config.get("CONTENT_DIR") or Config.CONTENT_DIR)

def site_feed(config: Mapping[str, Any]) -> bytes:
    """
    The blog feed for an app config. The site URL is checked before the
    collection is read.
    """
    site = site_url(config)
    posts = get_collection(config.get("BLOG_COLLECTION", Config.BLOG_COLLECTION), content_dir(config))
    return build_feed(
        site,
        posts,
        title=config.get("FEED_TITLE", Config.FEED_TITLE),
        description=config.get("FEED_DESCRIPTION", Config.FEED_DESCRIPTION),
    )


# -------- RSS Feed API --------
class RSSFeed(Resource):
    def get(self):
        return Response(site_feed(current_app.config), mimetype=RSS_MIMETYPE)
