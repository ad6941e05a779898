from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

from typing_extensions import TypedDict

POSTS_URL_PREFIX = "posts/"


def url_for_id(post_id: str) -> str:
    return f"{POSTS_URL_PREFIX}{post_id}.html"


@dataclass
class Post:
    id: str
    title: str
    date: str
    excerpt: str
    content: str
    image: str
    url: str

    @classmethod
    def from_json(cls, document: Mapping[str, Any]) -> "Post":
        post_id = document["id"]
        post = cls(
            id=post_id,
            title=document.get("title") or "",
            date=document.get("date") or "",
            excerpt=document.get("excerpt") or "",
            content=document.get("content") or "",
            image=document.get("image") or "",
            url=document.get("url") or url_for_id(post_id),
        )
        for name, value in asdict(post).items():
            if not isinstance(value, str):
                raise TypeError(f"post field '{name}' is not a string: {value!r}")
        return post

    def to_json(self) -> Dict[str, str]:
        # asdict keeps field order, which keeps the posts file diffable
        return asdict(self)


class PostFields(TypedDict):
    """The operator-editable fields of a post."""

    title: str
    date: str
    excerpt: str
    content: str


@dataclass
class Submission:
    """A create-or-update as submitted by the admin page."""

    fields: PostFields
    id: Optional[str] = None
    image_payload: Optional[str] = None
    current_image: Optional[str] = None
