from __future__ import annotations
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

import click
from flask import Flask, jsonify
from flask_restful import Api

from .config import Config
from .rss import RSSFeed, site_feed

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PATH = "dist/rss.xml"


def atomic_write(path: Path, data: bytes):
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_bytes(data)
    tmp.replace(path)


def create_app(test_config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("PENNA_SITE")
    if test_config:
        app.config.update(test_config)

    api = Api(app)
    api.add_resource(RSSFeed, app.config["FEED_PATH"])

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"ok": True, "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")})

    @app.cli.command("export-feed")
    @click.argument("output", default=DEFAULT_EXPORT_PATH, type=click.Path(dir_okay=False, path_type=Path))
    def export_feed(output: Path):
        """Write the blog RSS feed to OUTPUT for static hosting."""
        body = site_feed(app.config)
        output.parent.mkdir(parents=True, exist_ok=True)
        atomic_write(output, body)
        logger.info("Wrote feed to %s (%d bytes)", output, len(body))
        click.echo(f"Wrote {output}")

    return app
