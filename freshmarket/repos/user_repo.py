from sqlalchemy.orm import Session
from freshmarket.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def upsert_user(self, user_id: str, **fields) -> UserModel:
        user = self.get_user(user_id)
        if user is None:
            user = UserModel(id=user_id, **fields)
            self.db.add(user)
        else:
            for key, value in fields.items():
                setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user
