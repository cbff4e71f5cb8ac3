"""Friends, the activity feed and achievement sharing.

Friendships are stored as directed (requester -> addressee) rows, so every
lookup of "are A and B friends" has to check both directions.
"""

import logging

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from goalslayer.core.constants import ACTIVITY_FEED_LIMIT
from goalslayer.errors import ConflictError, NotFoundError, ValidationError
from goalslayer.models.achievement import Achievement
from goalslayer.models.activity import ActivityFeed
from goalslayer.models.friendship import Friendship
from goalslayer.models.shared_achievement import SharedAchievement
from goalslayer.models.user import User

logger = logging.getLogger(__name__)

# Statuses that block a new request between the same two users
ACTIVE_STATUSES = ("pending", "accepted")


def _between(a: str, b: str):
    return or_(
        and_(Friendship.requester_id == a, Friendship.addressee_id == b),
        and_(Friendship.requester_id == b, Friendship.addressee_id == a),
    )


def _involving(user_id: str):
    return or_(Friendship.requester_id == user_id, Friendship.addressee_id == user_id)


def record_activity(
    db: Session,
    user_id: str,
    activity_type: str,
    message: str,
    data: dict | None = None,
    is_public: bool = True,
    commit: bool = True,
) -> ActivityFeed:
    activity = ActivityFeed(
        user_id=user_id,
        activity_type=activity_type,
        message=message,
        data=data,
        is_public=is_public,
    )
    db.add(activity)
    if commit:
        db.commit()
        db.refresh(activity)
    return activity


def send_friend_request(db: Session, requester_id: str, addressee_email: str) -> Friendship:
    addressee = (
        db.query(User).filter(User.email == addressee_email.strip().lower()).first()
    )
    if not addressee:
        raise NotFoundError("User not found with that email address")
    if addressee.id == requester_id:
        raise ValidationError("Cannot send friend request to yourself")

    existing = (
        db.query(Friendship)
        .filter(_between(requester_id, addressee.id))
        .filter(Friendship.status.in_(ACTIVE_STATUSES))
        .first()
    )
    if existing:
        raise ConflictError("Friend request already exists or you are already friends")

    friendship = Friendship(
        requester_id=requester_id,
        addressee_id=addressee.id,
        status="pending",
    )
    db.add(friendship)
    db.commit()
    db.refresh(friendship)
    logger.info("Friend request %s: %s -> %s", friendship.id, requester_id, addressee.id)
    return friendship


def pending_requests(db: Session, user_id: str) -> list[Friendship]:
    """Requests waiting for `user_id` to answer."""
    return (
        db.query(Friendship)
        .filter(Friendship.addressee_id == user_id)
        .filter(Friendship.status == "pending")
        .order_by(Friendship.created_at.desc())
        .all()
    )


def respond_to_request(db: Session, friendship_id: str, user_id: str, status: str) -> Friendship:
    if status not in ("accepted", "declined"):
        raise ValidationError("Status must be 'accepted' or 'declined'")

    friendship = (
        db.query(Friendship)
        .filter(Friendship.id == friendship_id)
        .filter(Friendship.addressee_id == user_id)
        .filter(Friendship.status == "pending")
        .first()
    )
    if not friendship:
        raise NotFoundError("Friend request not found")

    friendship.status = status
    if status == "accepted":
        requester = friendship.requester
        name = requester.first_name or requester.email or "a new friend"
        record_activity(
            db,
            user_id,
            "friend_added",
            f"Became friends with {name}",
            data={"friendId": requester.id},
            commit=False,
        )
    db.commit()
    db.refresh(friendship)
    logger.info("Friend request %s %s", friendship.id, status)
    return friendship


def friend_ids(db: Session, user_id: str) -> list[str]:
    rows = (
        db.query(Friendship.requester_id, Friendship.addressee_id)
        .filter(_involving(user_id))
        .filter(Friendship.status == "accepted")
        .all()
    )
    return [addressee if requester == user_id else requester for requester, addressee in rows]


def list_friends(db: Session, user_id: str) -> list[User]:
    ids = friend_ids(db, user_id)
    if not ids:
        return []
    return db.query(User).filter(User.id.in_(ids)).order_by(User.first_name, User.email).all()


def remove_friend(db: Session, user_id: str, friend_id: str) -> None:
    deleted = (
        db.query(Friendship)
        .filter(_between(user_id, friend_id))
        .filter(Friendship.status == "accepted")
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("User %s removed friend %s", user_id, friend_id)


def activity_feed(db: Session, user_id: str) -> list[ActivityFeed]:
    """The user's own activity plus the public activity of accepted friends."""
    friends = friend_ids(db, user_id)
    visible = ActivityFeed.user_id == user_id
    if friends:
        visible = or_(
            visible,
            and_(ActivityFeed.user_id.in_(friends), ActivityFeed.is_public.is_(True)),
        )
    return (
        db.query(ActivityFeed)
        .filter(visible)
        .order_by(ActivityFeed.created_at.desc())
        .limit(ACTIVITY_FEED_LIMIT)
        .all()
    )


def share_achievement(
    db: Session,
    user_id: str,
    achievement_id: str,
    shared_with: str = "friends",
    message: str | None = None,
) -> SharedAchievement:
    achievement = (
        db.query(Achievement)
        .filter(Achievement.id == achievement_id)
        .filter(Achievement.user_id == user_id)
        .first()
    )
    if not achievement:
        raise NotFoundError("Achievement not found")

    share = SharedAchievement(
        user_id=user_id,
        achievement_id=achievement.id,
        shared_with=shared_with,
        message=message,
    )
    db.add(share)
    db.flush()
    record_activity(
        db,
        user_id,
        "achievement_shared",
        message or f"Shared a '{achievement.level}' week",
        data={
            "achievementId": achievement.id,
            "sharedAchievementId": share.id,
            "level": achievement.level,
            "weekStart": achievement.week_start.isoformat(),
        },
        commit=False,
    )
    db.commit()
    db.refresh(share)
    return share


def shared_achievements(db: Session, user_id: str) -> list[SharedAchievement]:
    """Own shares, shares by friends and anyone's public shares."""
    friends = friend_ids(db, user_id)
    visible = or_(
        SharedAchievement.user_id == user_id,
        SharedAchievement.shared_with == "public",
    )
    if friends:
        visible = or_(visible, SharedAchievement.user_id.in_(friends))
    return (
        db.query(SharedAchievement)
        .filter(visible)
        .order_by(SharedAchievement.created_at.desc())
        .all()
    )
