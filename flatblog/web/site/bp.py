"""Serves the site's static files (including the generated post pages)."""
from pathlib import Path

from flask import Blueprint, current_app, make_response, send_from_directory
from werkzeug.exceptions import NotFound
from werkzeug.security import safe_join
from werkzeug.wrappers.response import Response

bp = Blueprint("site", __name__)

FALLBACK_404 = "<h1>404 Not Found</h1>"


def site_root() -> Path:
    return current_app.config["SITE_ROOT"]


@bp.route("/", defaults={"path": ""})
@bp.route("/<path:path>")
def serve(path: str) -> Response:
    root = site_root()
    joined = safe_join(str(root), path) if path else str(root)
    if joined is None:
        return not_found()
    if Path(joined).is_dir():
        path = f"{path.rstrip('/')}/index.html" if path else "index.html"
    try:
        return send_from_directory(root, path)
    except NotFound:
        return not_found()


def not_found() -> Response:
    page_path = site_root() / "404.html"
    if page_path.is_file():
        body = page_path.read_text(encoding="utf-8")
    else:
        body = FALLBACK_404
    response = make_response(body, 404)
    response.mimetype = "text/html"
    return response
