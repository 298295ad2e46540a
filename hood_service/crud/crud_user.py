# hood_service/crud/crud_user.py
from typing import Optional
from sqlalchemy.orm import Session
from .base import CRUDBase
from hood_service.models.user import User
from hood_service.schemas.user import UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(self.model).filter(self.model.email == email).first()

    def create_with_id(self, db: Session, *, obj_in: UserCreate, user_id: str) -> User:
        """Create the profile of an authenticated user, keyed by the token subject."""
        return self.create(db, obj_in=obj_in, id=user_id)


user = CRUDUser(User)
