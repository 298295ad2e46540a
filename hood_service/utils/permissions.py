# hood_service/utils/permissions.py
"""
Access control helpers shared by the GraphQL resolvers.

Each ``require_*`` function raises an ``HTTPException`` when the check
fails, so resolvers can call it as a guard at the top of the body.
"""

from datetime import date
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hood_service import crud
from hood_service.constants.roles import Role


def require_user_id(user: Optional[dict]) -> str:
    """
    Return the token subject of the authenticated caller.

    Args:
        user: Decoded JWT payload from the GraphQL context (or None)

    Raises:
        HTTPException: 401 if the request carries no valid token
    """
    if not user or not user.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user["sub"]


def require_association(db: Session, association_id: str):
    association = crud.association.get(db, id=association_id)
    if not association:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Association not found",
        )
    return association


def require_role(
    db: Session,
    *,
    user_id: str,
    association_id: str,
    role: Role,
    on_date: Optional[date] = None,
) -> None:
    """
    Require that ``user_id`` holds ``role`` in the association.

    Args:
        db: Database session
        user_id: Caller id (token subject)
        association_id: Association the action targets
        role: Role to check
        on_date: Day the treasurer term must cover (treasurer checks only)

    Raises:
        HTTPException: 403 if the caller does not hold the role
    """
    if not crud.relations.has_role(
        db,
        user_id=user_id,
        association_id=association_id,
        role=role,
        on_date=on_date,
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User must be {role.value.lower()} of the association",
        )


def require_member(db: Session, *, user_id: str, association_id: str) -> None:
    require_role(db, user_id=user_id, association_id=association_id, role=Role.MEMBER)


def require_admin(db: Session, *, user_id: str, association_id: str) -> None:
    require_role(db, user_id=user_id, association_id=association_id, role=Role.ADMIN)
