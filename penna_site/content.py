from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import frontmatter
import yaml

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = {".md", ".markdown"}
REQUIRED_FIELDS = ("title", "description", "date")


class ContentError(ValueError):
    """A collection entry is missing a field or carries a bad value."""


@dataclass(frozen=True)
class PostData:
    title: str
    description: str
    date: datetime
    draft: bool = False


@dataclass(frozen=True)
class Post:
    id: str
    data: PostData
    body: str = ""
    path: Optional[Path] = None


# --- Helpers ---------------------------------------------------------------

_slug_re = re.compile(r"[^a-z0-9-]+")

def _slugify(s: str) -> str:
    s = (s or "").strip().lower().replace("&", "and").replace(" ", "-")
    s = _slug_re.sub("-", s).strip("-")
    return s or "post"

def _entry_id(rel: Path, meta: Dict[str, Any]) -> str:
    """
    Front matter `slug` wins; otherwise the slugified path without suffix.
    `2024/hello/index.md` and `2024/hello.md` both map to `2024/hello`.
    """
    slug = meta.get("slug")
    if slug is not None and str(slug).strip():
        return str(slug).strip().strip("/")
    parts = list(rel.with_suffix("").parts)
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts = parts[:-1]
    return "/".join(_slugify(p) for p in parts)

def _is_hidden(rel: Path) -> bool:
    return any(p.startswith(("_", ".")) for p in rel.parts)

def coerce_date(value: Any) -> datetime:
    """
    Normalise a front matter date to an aware datetime.
    Bare dates become midnight UTC, naive datetimes are read as UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"unsupported date value {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

def _post_data(meta: Dict[str, Any], source: Path) -> PostData:
    missing = [k for k in REQUIRED_FIELDS if meta.get(k) is None]
    if missing:
        raise ContentError(f"{source}: missing front matter field(s): {', '.join(missing)}")

    for key in ("title", "description"):
        if not isinstance(meta[key], str):
            raise ContentError(f"{source}: {key} must be a string")

    if not meta["title"].strip():
        raise ContentError(f"{source}: title must not be empty")

    try:
        published = coerce_date(meta["date"])
    except ValueError as e:
        raise ContentError(f"{source}: invalid date: {e}") from e

    draft = meta.get("draft", False)
    if draft is None:
        draft = False
    if not isinstance(draft, bool):
        raise ContentError(f"{source}: draft must be true or false")

    return PostData(title=meta["title"], description=meta["description"], date=published, draft=draft)

def load_post(path: Path, collection_root: Path) -> Post:
    rel = path.relative_to(collection_root)
    try:
        doc = frontmatter.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ContentError(f"{path}: not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise ContentError(f"{path}: unreadable front matter: {e}") from e
    meta = dict(doc.metadata)
    return Post(id=_entry_id(rel, meta), data=_post_data(meta, path), body=doc.content, path=path)


# --- Collections -----------------------------------------------------------

def get_collection(name: str, content_dir: Path) -> List[Post]:
    """
    All entries of the collection `name` stored under `content_dir/name/`,
    ordered by their path inside the collection.
    """
    root = Path(content_dir) / name
    if not root.is_dir():
        logger.warning("Collection %r not found under %s; treating it as empty", name, content_dir)
        return []

    files = [
        p for p in sorted(root.rglob("*"), key=lambda x: x.relative_to(root).as_posix())
        if p.is_file()
        and p.suffix.lower() in MARKDOWN_SUFFIXES
        and not _is_hidden(p.relative_to(root))
    ]

    posts: List[Post] = []
    seen: Dict[str, Path] = {}
    for path in files:
        post = load_post(path, root)
        if post.id in seen:
            raise ContentError(f"{path}: id {post.id!r} already used by {seen[post.id]}")
        seen[post.id] = path
        posts.append(post)

    logger.debug("Loaded %d entries from collection %r", len(posts), name)
    return posts
