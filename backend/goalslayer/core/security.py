import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from goalslayer.core.config import settings
from goalslayer.core.constants import TOKEN_BLACKLIST_MAX


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


class TokenBlacklist:
    """Tokens revoked by logout.

    Lives in process memory only. Once it grows past `max_size` it is cleared
    wholesale; by then the older tokens have long expired anyway.
    """

    def __init__(self, max_size: int = TOKEN_BLACKLIST_MAX):
        self.max_size = max_size
        self._tokens: set[str] = set()

    def add(self, token: str) -> None:
        self._tokens.add(token)
        if len(self._tokens) > self.max_size:
            self._tokens.clear()

    def __contains__(self, token: str) -> bool:
        return token in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)


token_blacklist = TokenBlacklist()


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the userId claim, or None for a revoked, expired or forged token."""
    if token in token_blacklist:
        return None
    try:
        payload = jwt.decode(
            token, settings.session_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.PyJWTError:
        return None
    user_id = payload.get("userId")
    return user_id if isinstance(user_id, str) else None
