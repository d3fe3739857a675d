from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from freshmarket.repos.user_repo import UserRepo
from freshmarket.domain.schemas import UserUpsert, UserRead
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def upsert_user(self, payload: UserUpsert) -> UserRead:
        fields = payload.model_dump(exclude={"id"}, exclude_unset=True)
        try:
            user = self.repo.upsert_user(payload.id, **fields)
        except IntegrityError:
            self.db.rollback()
            raise ValueError("Email already in use")

        logger.info(f"User {user.id} upserted")
        return UserRead.model_validate(user)
