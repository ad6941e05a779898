"""Filling the post page template.

Templates are plain html with {{PLACEHOLDER}} tokens.  Substitution happens in
one pass so text inside a value is never itself treated as a placeholder.

"""
import re
from typing import Callable, Dict

from markupsafe import escape
from typing_extensions import Protocol

from .value_objs import Post

PLACEHOLDER_REGEX = re.compile(r"\{\{([A-Z]+)\}\}")


class TemplateRenderer(Protocol):
    def render(self, template: str, post: Post) -> str:
        ...


def _substitute(template: str, values: Dict[str, str]) -> str:
    def replacement(match_obj: "re.Match[str]") -> str:
        return values.get(match_obj.group(1), match_obj.group(0))

    return PLACEHOLDER_REGEX.sub(replacement, template)


def post_values(post: Post, transform: Callable[[str], str] = str) -> Dict[str, str]:
    return {
        "TITLE": transform(post.title),
        "DATE": transform(post.date),
        "EXCERPT": transform(post.excerpt),
        "IMAGE": transform(post.image),
        "CONTENT": post.content or "",
    }


class PlaceholderRenderer:
    """No escaping at all: posts are written by the site's one operator."""

    def render(self, template: str, post: Post) -> str:
        return _substitute(template, post_values(post))


class EscapingRenderer:
    """Escapes everything except the content, which is html by definition."""

    def render(self, template: str, post: Post) -> str:
        return _substitute(template, post_values(post, lambda s: str(escape(s))))
