# freshmarket/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from freshmarket.data.database import get_db
from freshmarket.data.models.user import UserModel
from freshmarket.repos.user_repo import UserRepo


def get_current_user(
    x_user_id: str | None = Header(None),
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Resolves the signed-in user from the ``X-User-Id`` header, set by
    the auth proxy in front of the API.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = UserRepo(db).get_user(x_user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user
