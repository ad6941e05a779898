import json

import pytest

from flatblog import exc
from flatblog.store import PostStore
from flatblog.value_objs import Post


def make_post(**overrides) -> Post:
    kwargs = {
        "id": "2024-01-01-abcde",
        "title": "Hello, World",
        "date": "2024.01.01",
        "excerpt": "The first post",
        "content": "<p>Hi, so about <em>flatblog</em>...</p>",
        "image": "/assets/uploads/img_1.png",
        "url": "posts/2024-01-01-abcde.html",
    }
    kwargs.update(**overrides)
    return Post(**kwargs)  # type: ignore


def test_store__save_and_load(store):
    posts = [
        make_post(),
        make_post(id="2023-12-31-zzzzz", title="Ünïcode", url="posts/2023-12-31-zzzzz.html"),
    ]
    store.save(posts)
    assert store.load_all() == posts


def test_store__file_layout(store):
    store.save([make_post()])
    raw = store.data_path.read_text(encoding="utf-8")
    assert raw.startswith("[\n    {\n")
    assert list(json.loads(raw)[0].keys()) == [
        "id",
        "title",
        "date",
        "excerpt",
        "content",
        "image",
        "url",
    ]


def test_store__missing_optional_keys(store):
    store.data_path.write_text(
        json.dumps([{"id": "x", "title": "t", "date": "d"}]), encoding="utf-8"
    )
    (post,) = store.load_all()
    assert post.content == ""
    assert post.excerpt == ""
    assert post.url == "posts/x.html"


def test_store__missing_file(tmp_path):
    store = PostStore(tmp_path / "nope.json")
    with pytest.raises(exc.StoreUnavailableException):
        store.load_all()


def test_store__unwritable(tmp_path):
    # a directory can't be opened for writing
    store = PostStore(tmp_path)
    with pytest.raises(exc.StoreUnavailableException):
        store.save([make_post()])


@pytest.mark.parametrize(
    "contents",
    [
        "{not json",
        '{"a": "dict"}',
        "[1, 2]",
        '[{"title": "no id"}]',
        '[{"id": "a", "title": "t", "date": "d", "content": 123}]',
        '[{"id": "a", "title": "t", "date": "d", "url": 5}]',
        '[{"id": 7, "title": "t", "date": "d"}]',
    ],
)
def test_store__corrupt(store, contents):
    store.data_path.write_text(contents, encoding="utf-8")
    with pytest.raises(exc.StoreCorruptException):
        store.load_all()


def test_store__ensure_exists(tmp_path):
    store = PostStore(tmp_path / "deeper" / "posts.json")
    assert store.ensure_exists()
    assert store.load_all() == []
    assert not store.ensure_exists()
