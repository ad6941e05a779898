from flask import Blueprint, jsonify, request
from werkzeug.wrappers.response import Response

from ... import exc
from ..func import get_post_service, submission_from_json

bp = Blueprint("api", __name__)


@bp.route("/api/posts", methods=["GET"])
def list_posts() -> Response:
    posts = get_post_service().list_posts()
    return jsonify([post.to_json() for post in posts])


@bp.route("/api/posts", methods=["POST"])
def save_post() -> Response:
    document = request.get_json(silent=True)
    if document is None:
        raise exc.InvalidRequest("expected a json body")
    submission = submission_from_json(document)
    post = get_post_service().save_submission(submission)
    return jsonify({"success": True, "post": post.to_json()})


@bp.route("/api/posts", methods=["DELETE"])
def delete_post() -> Response:
    post_id = request.args.get("id")
    if not post_id:
        raise exc.InvalidRequest("missing id")
    get_post_service().delete(post_id)
    return jsonify({"success": True})
