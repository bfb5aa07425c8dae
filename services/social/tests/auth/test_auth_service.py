import pytest
import sqlalchemy as sa
from jose import jwt

from app.auth.exceptions import (
    AccountNotVerified,
    EmailAlreadyRegistered,
    InvalidCredentials,
    InvalidUsername,
    InvalidVerificationCode,
    UsernameTaken,
)
from app.auth.models import EmailVerificationCode
from app.auth.service import (
    authenticate_user,
    create_access_token,
    create_verification_code,
    get_user_by_email,
    register_user,
    verify_email_code,
)
from shared.constants import Role


@pytest.mark.asyncio
async def test_register_user(db_session) -> None:
    user = await register_user(
        db_session, email="svc@example.com", username="Svc_User", password="secret123"
    )
    assert user.email == "svc@example.com"
    assert user.username == "svc_user"
    assert user.roles == [Role.USER.value]
    assert user.password_hash != "secret123"
    assert user.is_verified is False
    assert user.is_private is False


@pytest.mark.asyncio
async def test_register_duplicate_email_raises(db_session) -> None:
    await register_user(db_session, email="dup@example.com", username="first", password="password1")
    with pytest.raises(EmailAlreadyRegistered):
        await register_user(db_session, email="DUP@example.com", username="second", password="password1")


@pytest.mark.asyncio
async def test_register_duplicate_username_raises(db_session) -> None:
    await register_user(db_session, email="a@example.com", username="taken", password="password1")
    with pytest.raises(UsernameTaken):
        await register_user(db_session, email="b@example.com", username="TAKEN", password="password1")


@pytest.mark.asyncio
@pytest.mark.parametrize("username", ["ab", "has space", "way_too_long_username_x", "dash-name"])
async def test_register_invalid_username_raises(db_session, username) -> None:
    with pytest.raises(InvalidUsername):
        await register_user(db_session, email="x@example.com", username=username, password="password1")


@pytest.mark.asyncio
async def test_verification_code_flow(db_session) -> None:
    user = await register_user(db_session, email="v@example.com", username="verify", password="password1")
    code = await create_verification_code(db_session, user.email)
    assert len(code) == 4 and code.isdigit()

    verified = await verify_email_code(db_session, "v@example.com", code)

    assert verified.id == user.id
    assert verified.is_verified is True
    # Codes are single-use
    with pytest.raises(InvalidVerificationCode):
        await verify_email_code(db_session, "v@example.com", code)


@pytest.mark.asyncio
async def test_wrong_code_burns_an_attempt(db_session) -> None:
    user = await register_user(db_session, email="w@example.com", username="wrong", password="password1")
    code = await create_verification_code(db_session, user.email)
    wrong = "0000" if code != "0000" else "1111"

    with pytest.raises(InvalidVerificationCode):
        await verify_email_code(db_session, user.email, wrong)

    record = (await db_session.execute(sa.select(EmailVerificationCode))).scalar_one()
    assert record.attempts_remaining == 4
    assert user.is_verified is False


@pytest.mark.asyncio
async def test_new_code_invalidates_previous(db_session) -> None:
    user = await register_user(db_session, email="n@example.com", username="newcode", password="password1")
    first = await create_verification_code(db_session, user.email)
    second = await create_verification_code(db_session, user.email)

    if first != second:
        with pytest.raises(InvalidVerificationCode):
            await verify_email_code(db_session, user.email, first)
    assert (await verify_email_code(db_session, user.email, second)).is_verified is True


@pytest.mark.asyncio
async def test_expired_code_is_rejected(db_session) -> None:
    user = await register_user(db_session, email="e@example.com", username="expired", password="password1")
    code = await create_verification_code(db_session, user.email, expire_seconds=-1)
    with pytest.raises(InvalidVerificationCode):
        await verify_email_code(db_session, user.email, code)


@pytest.mark.asyncio
async def test_authenticate_requires_verification(db_session) -> None:
    await register_user(db_session, email="auth@example.com", username="auth", password="mypassword")
    with pytest.raises(AccountNotVerified):
        await authenticate_user(db_session, "auth@example.com", "mypassword")


@pytest.mark.asyncio
async def test_authenticate_user(db_session) -> None:
    user = await register_user(db_session, email="ok@example.com", username="okuser", password="mypassword")
    user.is_verified = True
    await db_session.flush()
    authed = await authenticate_user(db_session, "OK@example.com", "mypassword")
    assert authed.id == user.id


@pytest.mark.asyncio
async def test_authenticate_wrong_password(db_session) -> None:
    await register_user(db_session, email="wrongpw@example.com", username="wrongpw", password="rightpass")
    with pytest.raises(InvalidCredentials):
        await authenticate_user(db_session, "wrongpw@example.com", "wrongpass")


@pytest.mark.asyncio
async def test_authenticate_unknown_email(db_session) -> None:
    with pytest.raises(InvalidCredentials):
        await authenticate_user(db_session, "ghost@example.com", "whatever1")


@pytest.mark.asyncio
async def test_access_token_claims(db_session) -> None:
    user = await register_user(db_session, email="t@example.com", username="tokens", password="password1")
    token = create_access_token(
        user,
        secret="s3cret",
        algorithm="HS256",
        issuer="iss",
        audience="aud",
        expire_seconds=60,
    )
    claims = jwt.decode(token, "s3cret", algorithms=["HS256"], issuer="iss", audience="aud")
    assert claims["sub"] == str(user.id)
    assert claims["username"] == "tokens"
    assert claims["roles"] == ["user"]
    assert claims["exp"] - claims["iat"] == 60
    assert (await get_user_by_email(db_session, "t@example.com")).id == user.id
