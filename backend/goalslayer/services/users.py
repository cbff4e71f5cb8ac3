import logging

from sqlalchemy.orm import Session

from goalslayer.core.security import create_access_token, hash_password, verify_password
from goalslayer.errors import AuthError, ConflictError
from goalslayer.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def register_user(
    db: Session,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> tuple[User, str]:
    """Create an account and return it with a fresh access token."""
    if get_user_by_email(db, email):
        raise ConflictError("User already exists with this email")

    user = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        email_verified=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user, create_access_token(user.id)


def login_user(db: Session, email: str, password: str) -> tuple[User, str]:
    user = get_user_by_email(db, email)
    if not user or not user.password_hash:
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        raise AuthError(INVALID_CREDENTIALS)
    return user, create_access_token(user.id)
