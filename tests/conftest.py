import textwrap

import pytest

from penna_site import create_app


def write_post(root, rel, title="A post", description="About things", date="2024-01-01", draft=None, extra="", body="Hello."):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        "---",
        f"title: {title!r}" if title is not None else "",
        f"description: {description!r}" if description is not None else "",
        f"date: {date}" if date is not None else "",
    ]
    if draft is not None:
        lines.append(f"draft: {draft}")
    if extra:
        lines.append(textwrap.dedent(extra).strip())
    lines.append("---")
    lines.append(body)
    path.write_text("\n".join(l for l in lines if l) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    d = tmp_path / "content"
    (d / "blog").mkdir(parents=True)
    return d


@pytest.fixture
def blog_dir(content_dir):
    return content_dir / "blog"


@pytest.fixture
def app(content_dir):
    return create_app({
        "TESTING": True,
        "SITE_URL": "https://example.com/",
        "CONTENT_DIR": str(content_dir),
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_post(blog_dir):
    def _make(rel, **kwargs):
        return write_post(blog_dir, rel, **kwargs)
    return _make
