import secrets

from passlib.context import CryptContext

context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return context.verify(plain, hashed)


def generate_verification_code() -> str:
    """Four-digit numeric code, 1000-9999."""
    return str(secrets.randbelow(9000) + 1000)
