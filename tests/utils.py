import base64
import random
import string
from typing import Iterator, Optional

from lxml import etree

from flatblog.value_objs import PostFields

# the smallest well formed gif
TINY_GIF = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")

TEMPLATE = """<html>
<head><title>{{TITLE}}</title></head>
<body>
<h1>{{TITLE}}</h1>
<time>{{DATE}}</time>
<img class="hero" src="{{IMAGE}}">
<div class="content">{{CONTENT}}</div>
</body>
</html>
"""


def random_string(length: int = 32) -> str:
    return "".join(random.choice(string.ascii_lowercase) for _ in range(length))


def make_fields(**overrides) -> PostFields:
    fields: PostFields = {
        "title": "Hello",
        "date": "2024.01.01",
        "excerpt": "e",
        "content": "<p>hi</p>",
    }
    fields.update(**overrides)  # type: ignore
    return fields


def gif_data_url(blob: bytes = TINY_GIF) -> str:
    return "data:image/gif;base64," + base64.b64encode(blob).decode("ascii")


class SequentialIdGenerator:
    """Hands out predictable ids, optionally repeating some to force
    collisions."""

    def __init__(self, suffixes: Optional[Iterator[str]] = None) -> None:
        self.counter = 0
        self.suffixes = suffixes

    def __call__(self, date: str) -> str:
        if self.suffixes is not None:
            suffix = next(self.suffixes)
        else:
            self.counter += 1
            suffix = f"{self.counter:05d}"
        return f"{date.replace('.', '-')}-{suffix}"


def parse_html(html: str):
    return etree.fromstring(html, etree.HTMLParser())
