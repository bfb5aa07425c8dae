import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.posts import service as svc
from app.posts.exceptions import AlreadyLiked, EmptyContent, PostNotFound
from app.posts.models import Post


@pytest.mark.asyncio
async def test_create_post_returns_author_and_zero_counts(db_session, make_user) -> None:
    alice = await make_user("alice")
    post, author, comments, likes = await svc.create_post(db_session, alice.id, "  hello  ")
    assert post.content == "hello"
    assert author.username == "alice"
    assert (comments, likes) == (0, 0)


@pytest.mark.asyncio
async def test_create_post_media_only_is_allowed(db_session, make_user) -> None:
    alice = await make_user("alice")
    post, *_ = await svc.create_post(
        db_session, alice.id, "", media_url="https://cdn.example.com/p.png"
    )
    assert post.content == ""
    assert post.media_url == "https://cdn.example.com/p.png"


@pytest.mark.asyncio
async def test_create_post_blank_without_media(db_session, make_user) -> None:
    alice = await make_user("alice")
    with pytest.raises(EmptyContent):
        await svc.create_post(db_session, alice.id, "   ")


@pytest.mark.asyncio
async def test_list_posts_newest_first_with_counts(db_session, make_user) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    old = Post(author_id=alice.id, content="old", created_at=base)
    new = Post(author_id=bob.id, content="new", created_at=base + timedelta(hours=1))
    db_session.add_all([old, new])
    await db_session.flush()
    await svc.create_comment(db_session, old.post_id, bob.id, "nice")
    await svc.like(db_session, bob.id, old.post_id)
    await svc.like(db_session, alice.id, old.post_id)

    rows, total = await svc.list_posts(db_session, page=1, page_size=20)

    assert total == 2
    assert [(p.content, a.username, c, lk) for p, a, c, lk in rows] == [
        ("new", "bob", 0, 0),
        ("old", "alice", 1, 2),
    ]


@pytest.mark.asyncio
async def test_list_posts_pagination(db_session, make_user) -> None:
    alice = await make_user("alice")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    db_session.add_all(
        Post(author_id=alice.id, content=str(i), created_at=base + timedelta(minutes=i))
        for i in range(5)
    )
    await db_session.flush()

    rows, total = await svc.list_posts(db_session, page=2, page_size=2)

    assert total == 5
    assert [p.content for p, *_ in rows] == ["2", "1"]


@pytest.mark.asyncio
async def test_comments_oldest_first(db_session, make_user) -> None:
    alice = await make_user("alice")
    post, *_ = await svc.create_post(db_session, alice.id, "post")
    first, _ = await svc.create_comment(db_session, post.post_id, alice.id, "first")
    second, _ = await svc.create_comment(db_session, post.post_id, alice.id, "second")
    first.created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    second.created_at = datetime(2026, 1, 2, tzinfo=timezone.utc)
    await db_session.flush()

    comments = await svc.list_comments(db_session, post.post_id)

    assert [c.content for c, _ in comments] == ["first", "second"]
    assert comments[0][1].username == "alice"


@pytest.mark.asyncio
async def test_comment_blank_rejected(db_session, make_user) -> None:
    alice = await make_user("alice")
    post, *_ = await svc.create_post(db_session, alice.id, "post")
    with pytest.raises(EmptyContent):
        await svc.create_comment(db_session, post.post_id, alice.id, "  ")


@pytest.mark.asyncio
async def test_comment_on_unknown_post(db_session, make_user) -> None:
    alice = await make_user("alice")
    with pytest.raises(PostNotFound):
        await svc.create_comment(db_session, uuid.uuid4(), alice.id, "hi")
    with pytest.raises(PostNotFound):
        await svc.list_comments(db_session, uuid.uuid4())


@pytest.mark.asyncio
async def test_like_twice_is_duplicate(db_session, make_user) -> None:
    alice = await make_user("alice")
    post, *_ = await svc.create_post(db_session, alice.id, "post")
    assert await svc.like(db_session, alice.id, post.post_id) == 1
    with pytest.raises(AlreadyLiked):
        await svc.like(db_session, alice.id, post.post_id)


@pytest.mark.asyncio
async def test_concurrent_duplicate_like_raises_duplicate(
    db_session, make_user, monkeypatch
) -> None:
    alice = await make_user("alice")
    post, *_ = await svc.create_post(db_session, alice.id, "post")
    await svc.like(db_session, alice.id, post.post_id)

    async def _not_liked(*_args) -> bool:
        return False

    monkeypatch.setattr(svc, "_has_liked", _not_liked)
    with pytest.raises(AlreadyLiked):
        await svc.like(db_session, alice.id, post.post_id)


@pytest.mark.asyncio
async def test_unlike_is_idempotent(db_session, make_user) -> None:
    alice = await make_user("alice")
    post, *_ = await svc.create_post(db_session, alice.id, "post")
    await svc.like(db_session, alice.id, post.post_id)
    assert await svc.unlike(db_session, alice.id, post.post_id) == 0
    assert await svc.unlike(db_session, alice.id, post.post_id) == 0


@pytest.mark.asyncio
async def test_like_unknown_post(db_session, make_user) -> None:
    alice = await make_user("alice")
    with pytest.raises(PostNotFound):
        await svc.like(db_session, alice.id, uuid.uuid4())


@pytest.mark.asyncio
async def test_liked_post_ids(db_session, make_user) -> None:
    alice = await make_user("alice")
    liked, *_ = await svc.create_post(db_session, alice.id, "liked")
    await svc.create_post(db_session, alice.id, "not liked")
    await svc.like(db_session, alice.id, liked.post_id)
    assert await svc.liked_post_ids(db_session, alice.id) == [liked.post_id]
