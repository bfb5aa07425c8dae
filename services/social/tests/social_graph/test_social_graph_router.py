import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_follow_unfollow_status(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    headers = auth_headers(alice)

    followed = await client.post(f"/api/v1/users/{bob.id}/follow", headers=headers)
    assert followed.status_code == 200
    assert followed.json()["following"] is True

    status_r = await client.get(f"/api/v1/users/{bob.id}/follow/status", headers=headers)
    assert status_r.json() == {"is_following": True}

    again = await client.post(f"/api/v1/users/{bob.id}/follow", headers=headers)
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "already_following"

    removed = await client.delete(f"/api/v1/users/{bob.id}/follow", headers=headers)
    assert removed.status_code == 204

    missing = await client.delete(f"/api/v1/users/{bob.id}/follow", headers=headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_follow_self_is_422(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    response = await client.post(f"/api/v1/users/{alice.id}/follow", headers=auth_headers(alice))
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "cannot_follow_self"


@pytest.mark.asyncio
async def test_follow_private_is_403(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)
    response = await client.post(f"/api/v1/users/{carol.id}/follow", headers=auth_headers(alice))
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "private_profile"


@pytest.mark.asyncio
async def test_friend_request_flow(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    carol = await make_user("carol", is_private=True)

    sent = await client.post(
        "/api/v1/friends/requests",
        json={"to_username": "Carol"},
        headers=auth_headers(alice),
    )
    assert sent.status_code == 201
    assert sent.json()["status"] == "pending"
    request_id = sent.json()["request_id"]

    duplicate = await client.post(
        "/api/v1/friends/requests",
        json={"to_username": "carol"},
        headers=auth_headers(alice),
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "friend_request_pending"

    inbox = await client.get("/api/v1/friends/requests", headers=auth_headers(carol))
    assert [r["user"]["username"] for r in inbox.json()["received"]] == ["alice"]
    assert inbox.json()["sent"] == []

    accepted = await client.post(
        f"/api/v1/friends/requests/{request_id}/respond",
        json={"action": "accept"},
        headers=auth_headers(carol),
    )
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"
    assert accepted.json()["responded_at"] is not None

    second = await client.post(
        f"/api/v1/friends/requests/{request_id}/respond",
        json={"action": "decline"},
        headers=auth_headers(carol),
    )
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "friend_request_not_pending"

    friends = await client.get("/api/v1/friends", headers=auth_headers(alice))
    assert friends.json()["total"] == 1
    assert friends.json()["items"][0]["username"] == "carol"

    status_r = await client.get(
        f"/api/v1/users/{carol.id}/follow/status", headers=auth_headers(alice)
    )
    assert status_r.json() == {"is_following": True}


@pytest.mark.asyncio
async def test_respond_by_sender_is_404(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    await make_user("bob")
    sent = await client.post(
        "/api/v1/friends/requests",
        json={"to_username": "bob"},
        headers=auth_headers(alice),
    )
    response = await client.post(
        f"/api/v1/friends/requests/{sent.json()['request_id']}/respond",
        json={"action": "accept"},
        headers=auth_headers(alice),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_respond_unknown_action_is_422(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    bob = await make_user("bob")
    sent = await client.post(
        "/api/v1/friends/requests",
        json={"to_username": "bob"},
        headers=auth_headers(alice),
    )
    response = await client.post(
        f"/api/v1/friends/requests/{sent.json()['request_id']}/respond",
        json={"action": "maybe"},
        headers=auth_headers(bob),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_friend_request_to_self_is_422(client: AsyncClient, make_user, auth_headers) -> None:
    alice = await make_user("alice")
    response = await client.post(
        "/api/v1/friends/requests",
        json={"to_username": "alice"},
        headers=auth_headers(alice),
    )
    assert response.status_code == 422
