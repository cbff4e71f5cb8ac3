from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from goalslayer.db import Base
from goalslayer.models.user import new_id


class Friendship(Base):
    """Directed (requester -> addressee) row for an undirected relationship."""

    __tablename__ = "friendships"

    id = Column(String(36), primary_key=True, default=new_id)
    requester_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    addressee_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(
        String(20),
        nullable=False,
        server_default="pending",  # pending, accepted, declined, blocked
    )

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    requester = relationship("User", foreign_keys=[requester_id], lazy="joined")
    addressee = relationship("User", foreign_keys=[addressee_id], lazy="joined")
