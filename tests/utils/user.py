from sqlalchemy.orm import Session
from hood_service import crud
from hood_service.schemas.user import UserCreate
from hood_service.models.user import User


def create_random_user(db: Session, user_id: str, name: str = "Test Neighbor") -> User:
    """
    Creates a user profile keyed by ``user_id`` (the token subject).
    """
    user_in = UserCreate(name=name, email=f"{user_id}@example.com")
    return crud.user.create_with_id(db, obj_in=user_in, user_id=user_id)
