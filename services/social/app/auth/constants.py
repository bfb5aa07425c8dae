import re

# ── Token / code lifetimes ───────────────────────────────────────────────────
VERIFICATION_CODE_EXPIRE_SECONDS: int = 600  # 10 minutes
VERIFICATION_CODE_ATTEMPTS: int = 5

# Lower-case letters, digits and underscores, 3-20 characters
USERNAME_PATTERN = re.compile(r"^[a-z0-9_]{3,20}$")


def normalize_username(raw: str) -> str:
    return raw.strip().lower()
