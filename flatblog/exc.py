from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .value_objs import Post


class FlatblogException(Exception):
    """ABC for flatblog exceptions to make it possible to catch them collectively"""


class PostDoesNotExistException(FlatblogException):
    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(post_id)


class StoreUnavailableException(FlatblogException):
    """The posts file could not be read or written."""


class StoreCorruptException(FlatblogException):
    """The posts file is not a JSON array of post objects."""


class ImageDecodeException(FlatblogException):
    """An inline image payload was malformed.

    This never reaches a caller of the service: the ingestor recovers by
    keeping the previous image.

    """


class PartiallyAppliedException(FlatblogException):
    """The posts file was saved but the post's html page was not (re)written.

    The two representations are now out of step until the operator retries.

    """

    def __init__(self, post: "Post"):
        self.post = post
        super().__init__(post.id)


class InvalidRequest(FlatblogException):
    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(detail)


class IdExhaustedException(FlatblogException):
    """The id generator kept handing out ids that are already taken."""

    def __init__(self, date: str):
        self.date = date
        super().__init__(date)
