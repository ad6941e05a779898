from logging import getLogger
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.wrappers.response import Response

from .. import exc
from ..config import Config, get_config
from ..logging import configure_logging
from .. import sentry
from .api.bp import bp as api_bp
from .site.bp import bp as site_bp
from .func import make_post_service

logger = getLogger(__name__)

EXCEPTION_MESSAGE_CODE_MAP = {
    exc.PostDoesNotExistException: ("that post does not exist", 404),
    exc.InvalidRequest: ("invalid request", 400),
    exc.StoreUnavailableException: ("failed to read or write posts data", 500),
    exc.StoreCorruptException: ("posts data is corrupt", 500),
    exc.PartiallyAppliedException: ("saved but failed to generate html", 500),
    exc.IdExhaustedException: ("unable to allocate a post id", 500),
}


def init_app(config: Optional[Config] = None) -> Flask:
    configure_logging()
    if config is None:
        config = get_config()
    sentry.configure_sentry(config)
    app = Flask(__name__, static_folder=None)
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_length
    app.config["SITE_ROOT"] = config.site_root
    app.config["FLATBLOG_CONFIG"] = config
    app.json.compact = False  # type: ignore

    post_service = make_post_service(config)
    app.config["POST_SERVICE"] = post_service

    post_service.store.ensure_exists()
    config.uploads_path().mkdir(parents=True, exist_ok=True)
    if config.regenerate_on_startup:
        try:
            post_service.regenerate_all()
        except exc.FlatblogException:
            logger.exception("failed to regenerate posts on startup")

    app.register_blueprint(api_bp)
    app.register_blueprint(site_bp)

    @app.errorhandler(exc.FlatblogException)
    def handle_flatblog_exceptions(e: exc.FlatblogException) -> Response:
        try:
            message, http_code = EXCEPTION_MESSAGE_CODE_MAP[e.__class__]
        except KeyError:
            # An exception we don't have a canned response for - reraise it
            raise e
        if http_code >= 500:
            logger.error("%s: %s", message, e)
        doc = {"error": message}
        if isinstance(e, exc.InvalidRequest) and e.detail:
            doc["detail"] = e.detail
        elif isinstance(e, exc.PartiallyAppliedException):
            doc["post"] = e.post.to_json()  # type: ignore
        resp = jsonify(doc)
        resp.status_code = http_code
        return resp

    @app.errorhandler(HTTPException)
    def handle_http_exceptions(e: HTTPException) -> Response:
        # the api always answers in json, the site keeps werkzeug's pages
        if not request.path.startswith("/api/"):
            return e  # type: ignore
        resp = jsonify({"error": (e.name or "error").lower()})
        resp.status_code = e.code or 500
        return resp

    @app.before_request
    def log_request() -> None:
        logger.info("%s %s", request.method, request.path)

    return app
