from typing import Any, Mapping, Optional

from flask import current_app

from .. import exc
from ..config import Config
from ..ids import RandomIdGenerator
from ..images import ImageIngestor
from ..render import EscapingRenderer, PlaceholderRenderer, TemplateRenderer
from ..store import PostStore
from ..svc import PostService
from ..value_objs import PostFields, Submission

UNSAFE_DATE_CHARS = ["/", "\\"]


def make_post_service(config: Config) -> PostService:
    renderer: TemplateRenderer
    if config.escape_html:
        renderer = EscapingRenderer()
    else:
        renderer = PlaceholderRenderer()
    return PostService(
        store=PostStore(config.data_path()),
        renderer=renderer,
        ingestor=ImageIngestor(config.uploads_path(), config.uploads_url),
        id_generator=RandomIdGenerator(),
        posts_path=config.posts_path(),
        template_name=config.template_name,
        placeholder_image=config.placeholder_image,
    )


def get_post_service() -> PostService:
    return current_app.config["POST_SERVICE"]


def _optional_str(document: Mapping[str, Any], key: str) -> Optional[str]:
    value = document.get(key)
    if value is None or isinstance(value, str):
        return value
    raise exc.InvalidRequest(f"'{key}' must be a string")


def submission_from_json(document: Any) -> Submission:
    """Validate the body of a post submission from the admin page."""
    if not isinstance(document, dict):
        raise exc.InvalidRequest("expected a json object")
    for required in ["title", "date"]:
        if not _optional_str(document, required):
            raise exc.InvalidRequest(f"'{required}' is required")
    if any(sep in document["date"] for sep in UNSAFE_DATE_CHARS):
        # the date becomes part of the id, and so of the page filename
        raise exc.InvalidRequest("'date' must not contain path separators")
    fields: PostFields = {
        "title": document["title"],
        "date": document["date"],
        "excerpt": _optional_str(document, "excerpt") or "",
        "content": _optional_str(document, "content") or "",
    }
    return Submission(
        fields=fields,
        id=_optional_str(document, "id"),
        image_payload=_optional_str(document, "imageFile"),
        current_image=_optional_str(document, "currentImage"),
    )
