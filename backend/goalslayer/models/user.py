import uuid

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import func
from goalslayer.db import Base


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)

    # Stored lower-cased; login and friend lookups go through this column
    email = Column(String(255), unique=True, index=True, nullable=True)

    # Null for accounts created without a password (imported users)
    password_hash = Column(String, nullable=True)

    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String, nullable=True)
    email_verified = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
