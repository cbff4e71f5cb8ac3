from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from goalslayer.core.security import decode_access_token
from goalslayer.db import get_db
from goalslayer.models.user import User
from goalslayer.services.users import get_user

# auto_error=False so a missing header gets our own 401 message
bearer = HTTPBearer(auto_error=False)


def get_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Authorization token required")
    return credentials.credentials


def get_current_user(token: str = Depends(get_token), db: Session = Depends(get_db)) -> User:
    user_id = decode_access_token(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user = get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user
