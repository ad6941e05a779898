import re
import time
import base64
import binascii
from logging import getLogger
from pathlib import Path
from typing import Optional, Tuple

from . import exc

logger = getLogger(__name__)

DATA_URL_REGEX = re.compile(r"^data:([A-Za-z-+/]+);base64,(.+)$")

_EXTENSION_REGEX = re.compile(r"^[a-z0-9]+$")


def extension_for_mime(mime: str) -> str:
    """Derive a file extension from the subtype of a mimetype, eg:
    image/svg+xml -> svg."""
    _, _, subtype = mime.partition("/")
    extension = subtype.split("+")[0].lower()
    if not _EXTENSION_REGEX.match(extension):
        raise exc.ImageDecodeException(f"no usable extension in '{mime}'")
    return extension


def decode_data_url(payload: str) -> Tuple[str, bytes]:
    """Decode an inline data: url, returning (extension, image bytes)."""
    match_obj = DATA_URL_REGEX.match(payload)
    if match_obj is None:
        raise exc.ImageDecodeException("not a base64 data url")
    mime, encoded = match_obj.groups()
    extension = extension_for_mime(mime)
    try:
        blob = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise exc.ImageDecodeException("invalid base64") from e
    return extension, blob


class ImageIngestor:
    """Writes uploaded images into the uploads directory.

    Uploaded files are never overwritten.  A bad upload never fails the
    request it came with: the previous image is kept instead.

    """

    def __init__(self, uploads_path: Path, uploads_url: str) -> None:
        self.uploads_path = uploads_path
        self.uploads_url = uploads_url.rstrip("/")

    def ingest(self, payload: Optional[str], fallback: str) -> str:
        if not payload:
            return fallback
        try:
            extension, blob = decode_data_url(payload)
        except exc.ImageDecodeException as e:
            logger.warning("ignoring malformed image upload (%s), keeping '%s'", e, fallback)
            return fallback

        try:
            filename = self._write(extension, blob)
        except OSError:
            logger.exception("unable to write uploaded image, keeping '%s'", fallback)
            return fallback
        return f"{self.uploads_url}/{filename}"

    def _write(self, extension: str, blob: bytes) -> str:
        self.uploads_path.mkdir(parents=True, exist_ok=True)
        stamp = int(time.time() * 1000)
        while True:
            filename = f"img_{stamp}.{extension}"
            try:
                # "x" so that an existing upload can never be clobbered
                with open(self.uploads_path / filename, "xb") as image_f:
                    image_f.write(blob)
            except FileExistsError:
                stamp += 1
                continue
            logger.info("wrote %d byte upload to %s", len(blob), filename)
            return filename
