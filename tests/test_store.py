from concurrent.futures import ThreadPoolExecutor

import pytest

from core.errors import NotFoundError, ValidationError
from core.security import verify_password
from core.store import PostStore


def make_fields(**overrides):
    fields = {
        "title": "A",
        "date": "Nov 15, 2025",
        "category": "React",
        "excerpt": "B",
        "content": "C",
        "author": "Admin",
    }
    fields.update(overrides)
    return fields


def test_create_assigns_increasing_ids(store):
    ids = [store.create_post(make_fields(title=f"post {i}")).id for i in range(5)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5


def test_ids_are_not_reused_after_deleting_newest(store):
    first = store.create_post(make_fields())
    newest = store.create_post(make_fields())
    store.delete_post(newest.id)

    again = store.create_post(make_fields())
    assert again.id > newest.id > first.id


def test_list_posts_newest_first(store):
    created = [store.create_post(make_fields(title=f"post {i}")) for i in range(3)]
    posts = store.list_posts()
    assert [p.id for p in posts] == [p.id for p in reversed(created)]
    assert posts[0].title == "post 2"


def test_list_posts_empty(store):
    assert store.list_posts() == []


@pytest.mark.parametrize("missing", ["title", "excerpt", "content"])
def test_create_requires_fields(store, missing):
    with pytest.raises(ValidationError):
        store.create_post(make_fields(**{missing: ""}))
    assert store.list_posts() == []


def test_optional_fields_may_be_absent(store):
    post = store.create_post({"title": "A", "excerpt": "B", "content": "C"})
    assert post.category is None
    assert post.image is None


def test_update_round_trip(store):
    post = store.create_post({"title": "A", "excerpt": "B", "content": "C"})
    store.update_post(post.id, {"title": "A2", "excerpt": "B", "content": "C"})

    found = [p for p in store.list_posts() if p.id == post.id][0]
    assert found.title == "A2"
    assert found.excerpt == "B"
    assert found.content == "C"


def test_update_replaces_absent_text_fields_but_keeps_image(store):
    post = store.create_post(make_fields(image="/uploads/a.png"))
    updated = store.update_post(post.id, {"title": "A2", "excerpt": "B", "content": "C"})

    assert updated.category is None
    assert updated.author is None
    assert updated.image == "/uploads/a.png"


def test_update_can_clear_image(store):
    post = store.create_post(make_fields(image="/uploads/a.png"))
    updated = store.update_post(post.id, make_fields(image=None))
    assert updated.image is None


def test_update_missing_post(store):
    with pytest.raises(NotFoundError):
        store.update_post(999, make_fields())


def test_get_post(store):
    post = store.create_post(make_fields())
    assert store.get_post(post.id).title == "A"
    with pytest.raises(NotFoundError):
        store.get_post(post.id + 1)


def test_delete_is_idempotent(store):
    post = store.create_post(make_fields())
    assert store.delete_post(post.id) is True
    assert store.delete_post(post.id) is True
    assert store.delete_post(12345) is True
    assert store.list_posts() == []


def test_seed_admin_once(store):
    assert store.seed_admin_if_absent("first") is True
    assert store.seed_admin_if_absent("second") is False

    admin = store.find_user_by_username("admin")
    assert admin.hashed_password != "first"
    assert verify_password("first", admin.hashed_password)
    assert not verify_password("second", admin.hashed_password)


def test_seed_admin_requires_password(store):
    with pytest.raises(ValidationError):
        store.seed_admin_if_absent("")


def test_find_unknown_user(store):
    assert store.find_user_by_username("nobody") is None


def test_data_survives_reopen(tmp_path):
    path = tmp_path / "blog.db"
    store = PostStore(path)
    store.init()
    store.create_post(make_fields(title="persisted"))
    store.dispose()

    reopened = PostStore(path)
    reopened.init()
    assert [p.title for p in reopened.list_posts()] == ["persisted"]
    reopened.dispose()


def test_parallel_creates_get_unique_ids(store):
    def worker(n):
        return [store.create_post(make_fields(title=f"t{n}-{i}")).id for i in range(25)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(worker, range(4)))

    ids = [post_id for batch in results for post_id in batch]
    assert len(set(ids)) == 100
    for batch in results:
        assert batch == sorted(batch)

    posts = store.list_posts()
    assert len(posts) == 100
    assert [p.id for p in posts] == sorted(ids, reverse=True)
