"""Create, update and delete posts.

A post lives twice on disk: as an entry in the posts file and as a generated
html page in the posts directory.  The posts file is always written first; if
the page then can't be written the caller gets a PartiallyAppliedException.

"""
from dataclasses import replace
from logging import getLogger
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from . import exc
from .ids import IdGenerator
from .images import ImageIngestor
from .render import TemplateRenderer
from .store import PostStore
from .value_objs import Post, PostFields, Submission, POSTS_URL_PREFIX, url_for_id

logger = getLogger(__name__)

# give up rather than spin if the id generator keeps colliding
MAX_ID_ATTEMPTS = 100


def find_post(posts: Sequence[Post], post_id: str) -> Optional[int]:
    for index, post in enumerate(posts):
        if post.id == post_id:
            return index
    return None


class PostService:
    def __init__(
        self,
        store: PostStore,
        renderer: TemplateRenderer,
        ingestor: ImageIngestor,
        id_generator: IdGenerator,
        posts_path: Path,
        template_name: str,
        placeholder_image: str,
    ) -> None:
        self.store = store
        self.renderer = renderer
        self.ingestor = ingestor
        self.id_generator = id_generator
        self.posts_path = posts_path
        self.template_name = template_name
        self.placeholder_image = placeholder_image

    def list_posts(self) -> List[Post]:
        return self.store.load_all()

    def save_submission(self, submission: Submission) -> Post:
        if submission.id:
            return self.update(
                submission.id,
                submission.fields,
                submission.image_payload,
                submission.current_image,
            )
        return self.create(
            submission.fields, submission.image_payload, submission.current_image
        )

    def create(
        self,
        fields: PostFields,
        image_payload: Optional[str] = None,
        current_image: Optional[str] = None,
    ) -> Post:
        image = self.ingestor.ingest(
            image_payload, current_image or self.placeholder_image
        )
        with self.store.mutation():
            posts = self.store.load_all()
            post_id = self._new_id(fields["date"], posts)
            post = Post(
                id=post_id,
                title=fields["title"],
                date=fields["date"],
                excerpt=fields["excerpt"],
                content=fields["content"],
                image=image,
                url=url_for_id(post_id),
            )
            # newest first
            posts.insert(0, post)
            self.store.save(posts)
            logger.info("created post %s", post.id)
            self._write_html_or_raise(post)
        return post

    def update(
        self,
        post_id: str,
        fields: PostFields,
        image_payload: Optional[str] = None,
        current_image: Optional[str] = None,
    ) -> Post:
        with self.store.mutation():
            posts = self.store.load_all()
            index = find_post(posts, post_id)
            if index is None:
                raise exc.PostDoesNotExistException(post_id)
            existing = posts[index]
            image = self.ingestor.ingest(image_payload, current_image or existing.image)
            post = replace(
                existing,
                title=fields["title"],
                date=fields["date"],
                excerpt=fields["excerpt"],
                content=fields["content"],
                image=image,
            )
            posts[index] = post
            self.store.save(posts)
            logger.info("updated post %s", post.id)
            self._write_html_or_raise(post)
        return post

    def delete(self, post_id: str) -> Post:
        """Remove a post and its page.  Uploaded images are left where they
        are."""
        with self.store.mutation():
            posts = self.store.load_all()
            index = find_post(posts, post_id)
            if index is None:
                raise exc.PostDoesNotExistException(post_id)
            post = posts.pop(index)
            self.store.save(posts)
            logger.info("deleted post %s", post.id)

            if post.url.startswith(POSTS_URL_PREFIX):
                html_path = self.html_path_for(post)
                try:
                    html_path.unlink()
                except FileNotFoundError:
                    logger.info("no page to remove for %s at %s", post.id, html_path)
                except OSError:
                    # the post is already gone from the posts file, so this
                    # only leaves an orphan page behind
                    logger.exception("unable to remove page %s", html_path)
            else:
                logger.info(
                    "post %s has url '%s' outside %s, not removing a page",
                    post.id,
                    post.url,
                    POSTS_URL_PREFIX,
                )
        return post

    def regenerate_all(self) -> Tuple[int, int]:
        """Rewrite every page from the posts file.  Returns (generated,
        failed)."""
        generated = 0
        failed = 0
        with self.store.mutation():
            posts = self.store.load_all()
            for post in posts:
                try:
                    self.write_html(post)
                except OSError:
                    logger.exception("failed to generate html for '%s'", post.title)
                    failed += 1
                else:
                    generated += 1
        logger.info("regenerated html for %d posts (%d failed)", generated, failed)
        return generated, failed

    def html_path_for(self, post: Post) -> Path:
        filename = post.url.split("/")[-1] if post.url else f"{post.id}.html"
        if filename == self.template_name or not filename:
            # the posts file is left as it is
            logger.warning(
                "post %s would be written to '%s', using %s.html instead",
                post.id,
                filename,
                post.id,
            )
            filename = f"{post.id}.html"
        return self.posts_path / filename

    def write_html(self, post: Post) -> Path:
        template_path = self.posts_path / self.template_name
        template = template_path.read_text(encoding="utf-8")
        html = self.renderer.render(template, post)
        html_path = self.html_path_for(post)
        html_path.write_text(html, encoding="utf-8")
        logger.debug("wrote %s", html_path)
        return html_path

    def _write_html_or_raise(self, post: Post) -> None:
        try:
            self.write_html(post)
        except OSError as e:
            logger.error("saved post %s but failed to write its page: %s", post.id, e)
            raise exc.PartiallyAppliedException(post) from e

    def _new_id(self, date: str, posts: Sequence[Post]) -> str:
        taken = {post.id for post in posts}
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self.id_generator(date)
            if candidate not in taken:
                return candidate
            logger.warning("generated id %s is taken, retrying", candidate)
        raise exc.IdExhaustedException(date)
