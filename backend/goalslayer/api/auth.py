from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from goalslayer.api.deps import get_current_user, get_token
from goalslayer.core.security import token_blacklist
from goalslayer.db import get_db
from goalslayer.errors import AuthError, ConflictError
from goalslayer.models.user import User
from goalslayer.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from goalslayer.services.users import login_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user, token = register_user(
            db, payload.email, payload.password, payload.first_name, payload.last_name
        )
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user, token = login_user(db, payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.get("/user", response_model=UserRead)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.post("/logout", status_code=204)
def logout(token: str = Depends(get_token), user: User = Depends(get_current_user)):
    token_blacklist.add(token)
    return Response(status_code=204)
