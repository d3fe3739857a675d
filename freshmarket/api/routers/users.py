from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from freshmarket.api.deps import get_current_user
from freshmarket.data.database import get_db
from freshmarket.data.models.user import UserModel
from freshmarket.services.user_service import UserService
from freshmarket.domain.schemas import UserUpsert, UserRead

router = APIRouter(tags=["users"])

@router.post("/users", response_model=UserRead)
def upsert_user(payload: UserUpsert, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.upsert_user(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/auth/user", response_model=UserRead)
def get_auth_user(user: UserModel = Depends(get_current_user)):
    return user
