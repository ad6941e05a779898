"""The canonical list of posts, kept as a single JSON array on disk.

Every change is a full read-parse-mutate-serialise-write of the file.  Callers
that read, modify and then save must do so inside `mutation()`, otherwise two
requests can race and the second save silently discards the first.  The lock
is process-local: other processes writing the same file are not coordinated
with.

"""

import json
import threading
from contextlib import contextmanager
from logging import getLogger
from pathlib import Path
from typing import Generator, List, Sequence

from . import exc
from .value_objs import Post

logger = getLogger(__name__)


class PostStore:
    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self._lock = threading.RLock()

    @contextmanager
    def mutation(self) -> Generator[None, None, None]:
        """Serialise read-modify-write cycles within this process."""
        with self._lock:
            yield

    def ensure_exists(self) -> bool:
        """Create an empty posts file if there isn't one.  Returns True if it
        had to be created."""
        with self._lock:
            if self.data_path.exists():
                return False
            logger.info("creating empty posts file at %s", self.data_path)
            try:
                self.data_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise exc.StoreUnavailableException(str(self.data_path)) from e
            self.save([])
            return True

    def load_all(self) -> List[Post]:
        try:
            with open(self.data_path, encoding="utf-8") as data_f:
                raw = data_f.read()
        except OSError as e:
            logger.error("unable to read posts file %s: %s", self.data_path, e)
            raise exc.StoreUnavailableException(str(self.data_path)) from e

        try:
            document = json.loads(raw)
        except ValueError as e:
            logger.error("posts file %s is not valid json: %s", self.data_path, e)
            raise exc.StoreCorruptException(str(self.data_path)) from e

        if not isinstance(document, list):
            logger.error("posts file %s does not hold a json array", self.data_path)
            raise exc.StoreCorruptException(str(self.data_path))
        try:
            return [Post.from_json(obj) for obj in document]
        except (KeyError, TypeError, AttributeError) as e:
            logger.error("posts file %s holds a malformed post: %s", self.data_path, e)
            raise exc.StoreCorruptException(str(self.data_path)) from e

    def save(self, posts: Sequence[Post]) -> None:
        serialised = json.dumps(
            [post.to_json() for post in posts], indent=4, ensure_ascii=False
        )
        try:
            with open(self.data_path, "w", encoding="utf-8") as data_f:
                data_f.write(serialised)
        except OSError as e:
            logger.error("unable to write posts file %s: %s", self.data_path, e)
            raise exc.StoreUnavailableException(str(self.data_path)) from e
        logger.debug("saved %d posts to %s", len(posts), self.data_path)
