from logging import DEBUG, basicConfig
from pathlib import Path

import pytest

from flatblog.config import Config, DEFAULT_PLACEHOLDER_IMAGE
from flatblog.images import ImageIngestor
from flatblog.render import PlaceholderRenderer
from flatblog.store import PostStore
from flatblog.svc import PostService
from flatblog.web.app import init_app

from .utils import TEMPLATE, SequentialIdGenerator


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    basicConfig(level=DEBUG)


@pytest.fixture()
def site_root(tmp_path) -> Path:
    root = tmp_path / "site"
    (root / "blog" / "data").mkdir(parents=True)
    (root / "blog" / "posts").mkdir(parents=True)
    (root / "assets" / "uploads").mkdir(parents=True)
    (root / "blog" / "data" / "posts.json").write_text("[]", encoding="utf-8")
    (root / "blog" / "posts" / "template.html").write_text(TEMPLATE, encoding="utf-8")
    (root / "index.html").write_text("<h1>home</h1>", encoding="utf-8")
    return root


@pytest.fixture()
def config(site_root) -> Config:
    return Config(
        site_root=site_root,
        data_file="blog/data/posts.json",
        posts_dir="blog/posts",
        uploads_dir="assets/uploads",
        uploads_url="/assets/uploads",
        template_name="template.html",
        placeholder_image=DEFAULT_PLACEHOLDER_IMAGE,
        escape_html=False,
        regenerate_on_startup=True,
        max_content_length=1024 * 1024,
        host="127.0.0.1",
        port=3001,
        environment="test",
        sentry_dsn=None,
    )


@pytest.fixture()
def store(config) -> PostStore:
    return PostStore(config.data_path())


@pytest.fixture()
def post_service(config, store) -> PostService:
    return PostService(
        store=store,
        renderer=PlaceholderRenderer(),
        ingestor=ImageIngestor(config.uploads_path(), config.uploads_url),
        id_generator=SequentialIdGenerator(),
        posts_path=config.posts_path(),
        template_name=config.template_name,
        placeholder_image=config.placeholder_image,
    )


@pytest.fixture()
def app(config, post_service):
    a = init_app(config)
    a.config["TESTING"] = True
    a.config["DEBUG"] = False
    # swap in the service with predictable ids
    a.config["POST_SERVICE"] = post_service
    return a


@pytest.fixture()
def client(app):
    return app.test_client()
