import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_send_and_read_conversation(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")

    sent = await client.post(
        "/api/v1/messages",
        json={"receiver_id": str(bob.id), "content": "hi bob"},
        headers=auth_headers(alice),
    )
    assert sent.status_code == 201
    assert sent.json()["sender_id"] == str(alice.id)

    thread = await client.get(f"/api/v1/messages/{alice.id}", headers=auth_headers(bob))
    assert thread.status_code == 200
    assert [m["content"] for m in thread.json()] == ["hi bob"]

    inbox = await client.get("/api/v1/messages/conversations", headers=auth_headers(bob))
    items = inbox.json()["items"]
    assert len(items) == 1
    assert items[0]["user"]["username"] == "alice"
    assert items[0]["last_message"]["content"] == "hi bob"


@pytest.mark.asyncio
async def test_private_stranger_is_403(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)

    response = await client.post(
        "/api/v1/messages",
        json={"receiver_id": str(carol.id), "content": "hello"},
        headers=auth_headers(alice),
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "messaging_not_allowed"

    thread = await client.get(f"/api/v1/messages/{carol.id}", headers=auth_headers(alice))
    assert thread.status_code == 403


@pytest.mark.asyncio
async def test_unknown_receiver_is_404(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    response = await client.post(
        "/api/v1/messages",
        json={"receiver_id": str(uuid.uuid4()), "content": "hello"},
        headers=auth_headers(alice),
    )
    assert response.status_code == 404
