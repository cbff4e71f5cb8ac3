from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from goalslayer.schemas.auth import Email, UserRead
from goalslayer.schemas.base import CamelModel
from goalslayer.schemas.user_goal import AchievementRead


class FriendshipStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    blocked = "blocked"


class FriendResponseStatus(str, Enum):
    accepted = "accepted"
    declined = "declined"


class ShareAudience(str, Enum):
    friends = "friends"
    public = "public"


class FriendRequestCreate(CamelModel):
    email: Email


class FriendRequestRespond(CamelModel):
    status: FriendResponseStatus


class FriendshipRead(CamelModel):
    id: str
    requester_id: str
    addressee_id: str
    status: FriendshipStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FriendRequestRead(FriendshipRead):
    requester: UserRead
    addressee: UserRead


class ActivityRead(CamelModel):
    id: str
    user_id: str
    activity_type: str
    data: Optional[dict[str, Any]] = None
    message: str
    is_public: bool = True
    created_at: Optional[datetime] = None
    user: UserRead


class ShareAchievementRequest(CamelModel):
    shared_with: ShareAudience = ShareAudience.friends
    message: Optional[str] = Field(default=None, max_length=500)


class SharedAchievementRead(CamelModel):
    id: str
    user_id: str
    achievement_id: str
    shared_with: ShareAudience
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    user: UserRead
    achievement: AchievementRead
