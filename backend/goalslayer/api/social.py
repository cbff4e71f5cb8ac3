from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from goalslayer.api.deps import get_current_user
from goalslayer.db import get_db
from goalslayer.errors import ConflictError, NotFoundError, ValidationError
from goalslayer.models.user import User
from goalslayer.schemas.auth import UserRead
from goalslayer.schemas.social import (
    ActivityRead,
    FriendRequestCreate,
    FriendRequestRead,
    FriendRequestRespond,
    FriendshipRead,
    ShareAchievementRequest,
    SharedAchievementRead,
)
from goalslayer.services import social

router = APIRouter(prefix="/api", tags=["social"])


@router.get("/friends", response_model=list[UserRead])
def list_friends(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return social.list_friends(db, user.id)


@router.post("/friends/request", response_model=FriendshipRead, status_code=201)
def send_friend_request(
    payload: FriendRequestCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return social.send_friend_request(db, user.id, payload.email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:  # self-request, duplicate
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/friends/requests", response_model=list[FriendRequestRead])
def list_friend_requests(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return social.pending_requests(db, user.id)


@router.patch("/friends/requests/{friendship_id}", response_model=FriendshipRead)
def respond_to_friend_request(
    friendship_id: str,
    payload: FriendRequestRespond,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return social.respond_to_request(db, friendship_id, user.id, payload.status.value)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/friends/{friend_id}", status_code=204)
def remove_friend(
    friend_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    social.remove_friend(db, user.id, friend_id)
    return Response(status_code=204)


@router.get("/activity-feed", response_model=list[ActivityRead])
def activity_feed(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return social.activity_feed(db, user.id)


@router.post("/achievements/{achievement_id}/share", response_model=SharedAchievementRead, status_code=201)
def share_achievement(
    achievement_id: str,
    payload: ShareAchievementRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return social.share_achievement(
            db, user.id, achievement_id, payload.shared_with.value, payload.message
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/shared-achievements", response_model=list[SharedAchievementRead])
def list_shared_achievements(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return social.shared_achievements(db, user.id)
