import pytest
from httpx import AsyncClient

from app.email import send as email_send


@pytest.fixture
def sent_codes(monkeypatch) -> dict[str, str]:
    """Capture verification codes instead of emailing them."""
    codes: dict[str, str] = {}

    async def _fake_send(to_email, username, code, settings) -> None:
        codes[to_email] = code

    monkeypatch.setattr(email_send, "send_verification_code", _fake_send)
    return codes


async def _register(client: AsyncClient, email: str = "new@example.com", username: str = "newbie"):
    return await client.post(
        "/api/v1/auth/register",
        json={"email": email, "username": username, "password": "password123"},
    )


@pytest.mark.asyncio
async def test_register_verify_login(client: AsyncClient, sent_codes) -> None:
    reg = await _register(client)
    assert reg.status_code == 201
    assert reg.json()["user"]["username"] == "newbie"
    assert "new@example.com" in sent_codes

    # Unverified accounts cannot log in yet
    early = await client.post(
        "/api/v1/auth/login", json={"email": "new@example.com", "password": "password123"}
    )
    assert early.status_code == 403
    assert early.json()["error"]["code"] == "account_not_verified"

    verify = await client.post(
        "/api/v1/auth/verify",
        json={"email": "new@example.com", "code": sent_codes["new@example.com"]},
    )
    assert verify.status_code == 200
    assert verify.json()["token_type"] == "bearer"

    login = await client.post(
        "/api/v1/auth/login", json={"email": "new@example.com", "password": "password123"}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"
    assert me.json()["is_verified"] is True


@pytest.mark.asyncio
async def test_register_duplicate_returns_409(client: AsyncClient, sent_codes) -> None:
    assert (await _register(client)).status_code == 201
    again = await _register(client, username="someoneelse")
    assert again.status_code == 409
    body = again.json()
    assert body["error"]["message"]
    assert "request_id" in body


@pytest.mark.asyncio
async def test_register_invalid_username_returns_400(client: AsyncClient, sent_codes) -> None:
    response = await _register(client, username="no spaces allowed")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_register_short_password_returns_422(client: AsyncClient, sent_codes) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "short@example.com", "username": "shorty", "password": "123"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_wrong_code_attempt_is_persisted(client: AsyncClient, sent_codes) -> None:
    await _register(client)
    code = sent_codes["new@example.com"]
    wrong = "0000" if code != "0000" else "1111"

    for _ in range(5):
        bad = await client.post(
            "/api/v1/auth/verify", json={"email": "new@example.com", "code": wrong}
        )
        assert bad.status_code == 400

    # All attempts are used up, so even the right code fails now
    late = await client.post(
        "/api/v1/auth/verify", json={"email": "new@example.com", "code": code}
    )
    assert late.status_code == 400


@pytest.mark.asyncio
async def test_login_wrong_password_returns_401(client: AsyncClient, make_user) -> None:
    await make_user("alice")
    response = await client.post(
        "/api/v1/auth/login", json={"email": "alice@example.com", "password": "nottheone"}
    )
    assert response.status_code == 401
