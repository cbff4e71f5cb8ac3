from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from goalslayer.db import Base
from goalslayer.models.user import new_id


class ActivityFeed(Base):
    __tablename__ = "activity_feed"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # achievement_earned, achievement_shared, goals_selected, friend_added
    activity_type = Column(String(50), nullable=False)
    data = Column(JSON, nullable=True)  # event payload, e.g. {"level": "rock"}
    message = Column(Text, nullable=False)

    # Non-public rows are only shown to their owner
    is_public = Column(Boolean, nullable=False, default=True)

    # Python-side default keeps sub-second ordering for the feed
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )

    user = relationship("User", lazy="joined")
