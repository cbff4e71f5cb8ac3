from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from goalslayer.db import Base
from goalslayer.models.user import new_id


class SharedAchievement(Base):
    __tablename__ = "shared_achievements"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id = Column(
        String(36), ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False, index=True
    )

    shared_with = Column(String(20), nullable=False, server_default="friends")  # friends, public
    message = Column(Text, nullable=True)

    # Python-side default keeps sub-second ordering for the feed
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )

    user = relationship("User", lazy="joined")
    achievement = relationship("Achievement", lazy="joined")
