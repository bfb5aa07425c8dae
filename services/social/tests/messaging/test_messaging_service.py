import uuid
from datetime import datetime, timedelta, timezone

import pytest
import sqlalchemy as sa

from app.auth.exceptions import UserNotFound
from app.auth.models import User
from app.exceptions import PrivacyError, ValidationError
from app.messaging import service as svc
from app.messaging.models import Message
from app.social_graph import service as graph


@pytest.mark.asyncio
async def test_public_subject_can_always_be_messaged(db_session, make_user) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    assert await svc.can_message(db_session, alice.id, bob) is True


@pytest.mark.asyncio
async def test_private_subject_denied_without_history(db_session, make_user) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)

    assert await svc.can_message(db_session, alice.id, carol) is False
    with pytest.raises(PrivacyError):
        await svc.send_message(db_session, alice.id, carol.id, "hi")
    with pytest.raises(PrivacyError):
        await svc.get_conversation(db_session, alice.id, carol.id)


@pytest.mark.asyncio
async def test_private_subject_can_message_self(db_session, make_user) -> None:
    carol = await make_user("carol", is_private=True)
    assert await svc.can_message(db_session, carol.id, carol) is True


@pytest.mark.asyncio
async def test_friends_can_message_private_subject(db_session, make_user) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)
    request, _ = await graph.send_friend_request(db_session, alice.id, "carol")
    await graph.respond_friend_request(db_session, carol.id, request.request_id, "accept")

    assert await svc.can_message(db_session, alice.id, carol) is True
    message = await svc.send_message(db_session, alice.id, carol.id, "hello friend")
    assert message.receiver_id == carol.id


@pytest.mark.asyncio
async def test_pending_request_does_not_open_messaging(db_session, make_user) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)
    await graph.send_friend_request(db_session, alice.id, "carol")
    assert await svc.can_message(db_session, alice.id, carol) is False


@pytest.mark.asyncio
async def test_existing_conversation_grandfathers_private_subject(db_session, make_user) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol")
    await svc.send_message(db_session, alice.id, carol.id, "hi while public")

    await db_session.execute(
        sa.update(User).where(User.id == carol.id).values(is_private=True)
    )
    carol.is_private = True

    assert await svc.can_message(db_session, alice.id, carol) is True
    await svc.send_message(db_session, alice.id, carol.id, "still here")


@pytest.mark.asyncio
async def test_message_from_subject_opens_conversation(db_session, make_user) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)
    assert await svc.can_message(db_session, alice.id, carol) is False

    # Carol writes first; alice is public so that is allowed
    await svc.send_message(db_session, carol.id, alice.id, "hey")

    assert await svc.can_message(db_session, alice.id, carol) is True


@pytest.mark.asyncio
async def test_send_to_unknown_user_raises_not_found(db_session, make_user) -> None:
    alice = await make_user("alice")
    with pytest.raises(UserNotFound):
        await svc.send_message(db_session, alice.id, uuid.uuid4(), "anyone?")


@pytest.mark.asyncio
async def test_blank_message_rejected(db_session, make_user) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    with pytest.raises(ValidationError):
        await svc.send_message(db_session, alice.id, bob.id, "   ")


@pytest.mark.asyncio
async def test_conversation_is_oldest_first_both_directions(db_session, make_user) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    db_session.add_all([
        Message(sender_id=bob.id, receiver_id=alice.id, content="second", created_at=base + timedelta(minutes=2)),
        Message(sender_id=alice.id, receiver_id=bob.id, content="first", created_at=base + timedelta(minutes=1)),
        Message(sender_id=carol.id, receiver_id=alice.id, content="other thread", created_at=base),
    ])
    await db_session.flush()

    messages = await svc.get_conversation(db_session, alice.id, bob.id)

    assert [m.content for m in messages] == ["first", "second"]


@pytest.mark.asyncio
async def test_list_conversations_one_entry_per_partner(db_session, make_user) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    db_session.add_all([
        Message(sender_id=alice.id, receiver_id=bob.id, content="a1", created_at=base),
        Message(sender_id=bob.id, receiver_id=alice.id, content="b1", created_at=base + timedelta(minutes=1)),
        Message(sender_id=carol.id, receiver_id=alice.id, content="c1", created_at=base + timedelta(minutes=2)),
        Message(sender_id=alice.id, receiver_id=bob.id, content="a2", created_at=base + timedelta(minutes=3)),
    ])
    await db_session.flush()

    conversations = await svc.list_conversations(db_session, alice.id)

    assert [(user.username, msg.content) for user, msg in conversations] == [
        ("bob", "a2"),
        ("carol", "c1"),
    ]


@pytest.mark.asyncio
async def test_list_conversations_empty(db_session, make_user) -> None:
    alice = await make_user("alice")
    assert await svc.list_conversations(db_session, alice.id) == []
